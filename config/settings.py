import os


def env_bool(key, default=False):
    return os.getenv(key, str(default)).lower() in ("1", "true", "yes", "on")


def env_int(key, default):
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    return int(raw)


DB_NAME = os.getenv("DB_NAME", "countries")
COUNTRIES_COLLECTION = os.getenv("COUNTRIES_COLLECTION", "countries")
USERS_COLLECTION = os.getenv("USERS_COLLECTION", "users")
DB_BOOTSTRAP_INDEXES = env_bool("DB_BOOTSTRAP_INDEXES")

# Absolute lifetime of the cached full country listing (10 minutes)
LISTING_CACHE_TTL_SECONDS = env_int("LISTING_CACHE_TTL_SECONDS", 600)

LOGIN_DISABLED = env_bool("LOGIN_DISABLED")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def flask_config() -> dict:
    """Settings copied into ``app.config`` by the application factory."""
    return {
        "SECRET_KEY": os.getenv("SECRET_KEY", "dev"),
        "DB_NAME": DB_NAME,
        "COUNTRIES_COLLECTION": COUNTRIES_COLLECTION,
        "USERS_COLLECTION": USERS_COLLECTION,
        "DB_BOOTSTRAP_INDEXES": DB_BOOTSTRAP_INDEXES,
        "LISTING_CACHE_TTL_SECONDS": LISTING_CACHE_TTL_SECONDS,
        "LOGIN_DISABLED": LOGIN_DISABLED,
        "LOG_LEVEL": LOG_LEVEL,
    }
