import importlib
import pkgutil

from flask import Blueprint, Flask
from pymongo.database import Database

from config import settings
from repositories.country_repository import CountryRepository
from repositories.users_repository import UserRepository
from services.auth_service import ensure_default_users
from services.country_service import CountryService
from services.listing_cache import ListingCache


def create_app(test_config: dict | None = None, database: Database | None = None) -> Flask:
    """Flask application factory.

    ``database`` lets callers (tests, scripts) inject a database handle;
    otherwise the process-wide Mongo connection is opened.
    """
    app = Flask(__name__)
    app.config.from_mapping(settings.flask_config())
    if test_config:
        app.config.update(test_config)

    app.logger.setLevel(app.config["LOG_LEVEL"])

    """Registration of error handlers."""
    from middleware.handlers import register_error_handlers
    register_error_handlers(app)

    if database is None:
        from config.database import MongoConnection
        database = MongoConnection().db(app.config["DB_NAME"])

    country_repo = CountryRepository(database[app.config["COUNTRIES_COLLECTION"]])
    user_repo = UserRepository(database[app.config["USERS_COLLECTION"]])
    if app.config["DB_BOOTSTRAP_INDEXES"]:
        country_repo.ensure_indexes()
        user_repo.ensure_indexes()

    # One listing cache per process, handed to the service explicitly
    listing_cache = ListingCache()
    app.extensions["mongo_database"] = database
    app.extensions["listing_cache"] = listing_cache
    app.extensions["user_repository"] = user_repo
    app.extensions["country_service"] = CountryService(
        country_repo,
        listing_cache,
        listing_ttl_seconds=app.config["LISTING_CACHE_TTL_SECONDS"],
        logger=app.logger,
    )

    try:
        ensure_default_users(user_repo, app.config.get("EDITOR_USERS"))
    except Exception as exc:
        # Continue startup; editor routes answer 401 until accounts exist
        app.logger.warning("ensure_default_users failed: %s", exc)

    # Auto-register all blueprints defined in routes/*.py
    from routes import __path__ as routes_path

    for _, module_name, _ in pkgutil.iter_modules(routes_path):
        module = importlib.import_module(f"routes.{module_name}")
        for attr_name in dir(module):
            obj = getattr(module, attr_name)
            if isinstance(obj, Blueprint):
                app.register_blueprint(obj)

    return app


if __name__ == "__main__":
    from os import getenv

    app = create_app()
    app.run(
        host="0.0.0.0",
        port=int(getenv("PORT", 8080)),
        debug=getenv("FLASK_DEBUG", "0") == "1",
        use_reloader=False,
    )
