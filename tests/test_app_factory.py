import mongomock

import app as app_module
import config.database as database_module


class FakeConnection:
    requested = []

    def __init__(self):
        self._client = mongomock.MongoClient()

    def db(self, name=None):
        FakeConnection.requested.append(name)
        return self._client[name or "countries"]


def test_create_app_opens_configured_database(monkeypatch):
    FakeConnection.requested = []
    monkeypatch.setattr(database_module, "MongoConnection", FakeConnection)

    app = app_module.create_app(
        {"TESTING": True, "DB_NAME": "countries_eu", "EDITOR_USERS": []}
    )

    assert FakeConnection.requested == ["countries_eu"]
    assert app.extensions["mongo_database"].name == "countries_eu"


def test_injected_database_skips_connection(monkeypatch):
    def exploding():
        raise AssertionError("no connection should be opened")

    monkeypatch.setattr(database_module, "MongoConnection", exploding)
    database = mongomock.MongoClient()["injected"]

    app = app_module.create_app({"TESTING": True, "EDITOR_USERS": []}, database=database)

    assert app.extensions["mongo_database"] is database
