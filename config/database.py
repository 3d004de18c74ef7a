# config/database.py
from __future__ import annotations

import os
from typing import Optional
from urllib.parse import quote_plus

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from middleware.errors import DatabaseConnectionError

DEFAULT_MONGO_URI = "mongodb://db:27017"


def _build_mongo_uri() -> str:
    """
    Build the MongoDB URI.
    Precedence:
      1. TEST_MONGODB_URI (for CI/tests)
      2. MONGODB_URI (full connection string)
      3. Individual parts: DB_USER / DB_PASSWORD / DB_HOST / DB_NAME
      4. mongodb://db:27017 (compose service default)
    """
    test_uri = os.getenv("TEST_MONGODB_URI")
    if test_uri:
        return test_uri

    uri = os.getenv("MONGODB_URI")
    if uri:
        return uri

    user = os.getenv("DB_USER", "").strip()
    pwd = os.getenv("DB_PASSWORD", "").strip()
    host = os.getenv("DB_HOST", "").strip()
    dbname = os.getenv("DB_NAME", "countries").strip()

    if user and pwd and host:
        return (
            f"mongodb+srv://{user}:{quote_plus(pwd)}@{host}/{dbname}"
            f"?retryWrites=true&w=majority&tls=true"
        )

    return DEFAULT_MONGO_URI


class MongoConnection:
    """
    Singleton MongoDB client & DB accessor.
    - Holds a single pooled client for the process.
    - Created lazily by the application factory, never at import time.
    """

    _instance: Optional["MongoConnection"] = None

    def __new__(cls) -> "MongoConnection":
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._init_client()
            cls._instance = instance
        return cls._instance

    def _init_client(self) -> None:
        uri = _build_mongo_uri()
        self._client = MongoClient(uri, server_api=ServerApi("1"))
        # Fail fast if credentials/URI are wrong
        try:
            self._client.admin.command("ping")
        except PyMongoError as exc:
            self._client.close()
            raise DatabaseConnectionError(
                "Could not reach MongoDB", details={"reason": str(exc)}
            ) from exc

        self._db_name = os.getenv("DB_NAME", "countries")

    def db(self, name: Optional[str] = None) -> Database:
        """Return the named database handle, or the default one."""
        return self._client[name or self._db_name]

    def collection(self, name: str):
        """Return a collection handle from the default DB."""
        return self.db()[name]

    def close(self) -> None:
        """Close the client and reset the singleton (used in tests/shutdown)."""
        if getattr(self, "_client", None) is not None:
            self._client.close()
        type(self)._instance = None
