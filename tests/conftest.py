import sys
from pathlib import Path

import mongomock
import pytest

# Ensure project root is on sys.path
sys.path.append(str(Path(__file__).resolve().parents[1]))

from app import create_app  # noqa: E402


@pytest.fixture
def database():
    client = mongomock.MongoClient()
    yield client["countries"]
    client.drop_database("countries")


@pytest.fixture
def app(database):
    app = create_app(
        {
            "TESTING": True,
            "LOGIN_DISABLED": True,
            "EDITOR_USERS": [],
        },
        database=database,
    )
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def countries_collection(database):
    return database["countries"]
