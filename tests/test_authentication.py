import base64

import mongomock
import pytest

from app import create_app
from repositories.users_repository import UserRepository
from services import auth_service

FRANCE = {"entityId": "fr", "name": "France", "isoCode": "FR"}


def _basic(username: str, password: str) -> dict:
    token = base64.b64encode(f"{username}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


@pytest.fixture
def database():
    return mongomock.MongoClient()["countries"]


@pytest.fixture
def app(database):
    return create_app(
        {
            "TESTING": True,
            "LOGIN_DISABLED": False,
            "EDITOR_USERS": [
                ("editor", "s3cret-pass", ["editor"]),
                ("reader", "r3ader-pass", []),
            ],
        },
        database=database,
    )


@pytest.fixture
def client(app):
    return app.test_client()


def test_anonymous_routes_need_no_credentials(client, database):
    database["countries"].insert_one(dict(FRANCE))

    assert client.get("/Countries").status_code == 200
    assert client.get("/Countries/fr").status_code == 200


@pytest.mark.parametrize(
    "method, path, kwargs",
    [
        ("get", "/Countries/$count", {}),
        ("get", "/Countries", {"query_string": {"$top": "1"}}),
        ("post", "/Countries", {"json": FRANCE}),
        ("put", "/Countries/fr", {"json": FRANCE}),
        ("patch", "/Countries/fr", {"json": []}),
        ("delete", "/Countries/fr", {}),
    ],
)
def test_editor_routes_require_credentials(client, method, path, kwargs):
    response = getattr(client, method)(path, **kwargs)

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"].startswith("Basic")
    assert response.get_json()["error"] == "AuthenticationRequiredError"


def test_wrong_password_is_rejected(client):
    response = client.get("/Countries/$count", headers=_basic("editor", "nope"))
    assert response.status_code == 401


def test_user_without_editor_role_is_forbidden(client):
    response = client.get("/Countries/$count", headers=_basic("reader", "r3ader-pass"))
    assert response.status_code == 403
    assert response.get_json()["error"] == "PermissionDeniedError"


def test_editor_can_create(client):
    response = client.post("/Countries", json=FRANCE, headers=_basic("editor", "s3cret-pass"))
    assert response.status_code == 201


def test_login_disabled_bypasses_check(database):
    app = create_app({"TESTING": True, "LOGIN_DISABLED": True, "EDITOR_USERS": []}, database=database)
    assert app.test_client().get("/Countries/$count").status_code == 200


def test_seeding_is_idempotent_and_adds_roles(database):
    repo = UserRepository(database["users"])

    auth_service.ensure_default_users(repo, [("alice", "passw0rd!", [])])
    auth_service.ensure_default_users(repo, [("alice", "ignored-pw", ["editor"])])

    assert database["users"].count_documents({}) == 1
    user = auth_service.authenticate(repo, "alice", "passw0rd!")
    assert user is not None
    assert user.is_editor


def test_register_duplicate_username(database):
    repo = UserRepository(database["users"])
    auth_service.register_user(repo, "bob", "passw0rd!")
    with pytest.raises(ValueError):
        auth_service.register_user(repo, "bob", "other-pass")


def test_load_editor_users_from_env(monkeypatch):
    monkeypatch.setenv(
        "EDITOR_USERS",
        '[{"username": "ann", "password": "x"}, {"username": "ann", "password": "y"},'
        ' {"username": "bo", "password": "z", "roles": ["viewer"]}]',
    )
    assert auth_service.load_editor_users_from_env() == [
        ("ann", "x", ["editor"]),
        ("bo", "z", ["viewer"]),
    ]


def test_load_editor_users_falls_back_to_single_pair(monkeypatch):
    monkeypatch.delenv("EDITOR_USERS", raising=False)
    monkeypatch.setenv("EDITOR_USERNAME", "solo")
    monkeypatch.setenv("EDITOR_PASSWORD", "pw")
    assert auth_service.load_editor_users_from_env() == [("solo", "pw", ["editor"])]
