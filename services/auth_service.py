# services/auth_service.py
import json
import logging
import os
from typing import Optional

from werkzeug.security import generate_password_hash, check_password_hash

from domain.models.user import EDITOR_ROLE, User
from repositories.users_repository import UserRepository

logger = logging.getLogger(__name__)


def authenticate(repo: UserRepository, username: str, password: str) -> Optional[User]:
    """Return the user if username/password are valid; otherwise None."""
    user = repo.get_by_username(username)
    if not user:
        return None
    if not check_password_hash(user.password_hash, password):
        return None
    return user


def register_user(repo: UserRepository, username: str, password: str, roles=None) -> str:
    """Create a new user with a hashed password. Raises on duplicate username."""
    if repo.get_by_username(username):
        raise ValueError("Username already exists")
    pw_hash = generate_password_hash(password)
    user = User(username=username, password_hash=pw_hash, roles=list(roles or []))
    return repo.create(user)


def load_editor_users_from_env() -> list[tuple[str, str, list[str]]]:
    """
    Returns a list of (username, password, roles) from env:
      1) EDITOR_USERS (JSON array of {"username","password","roles"?})
      2) EDITOR_USERNAME + EDITOR_PASSWORD (single pair)
    Roles default to ["editor"].
    """
    users: list[tuple[str, str, list[str]]] = []

    raw_json = os.getenv("EDITOR_USERS")
    if raw_json:
        try:
            data = json.loads(raw_json)
        except json.JSONDecodeError as e:
            logger.warning("Failed to parse EDITOR_USERS JSON: %s", e)
            data = []
        for item in data:
            u = (item.get("username") or "").strip()
            p = item.get("password")
            roles = item.get("roles") or [EDITOR_ROLE]
            if u and p is not None:
                users.append((u, p, list(roles)))

    if not users:
        u = (os.getenv("EDITOR_USERNAME") or "").strip()
        p = os.getenv("EDITOR_PASSWORD")
        if u and p is not None:
            users.append((u, p, [EDITOR_ROLE]))

    # Deduplicate by username, keep the first occurrence
    seen = set()
    deduped: list[tuple[str, str, list[str]]] = []
    for u, p, roles in users:
        if u not in seen:
            seen.add(u)
            deduped.append((u, p, roles))
    return deduped


def ensure_default_users(repo: UserRepository, defaults=None) -> None:
    """Idempotently create the configured editor accounts with hashed passwords."""
    if defaults is None:
        defaults = load_editor_users_from_env()
    for username, raw_pw, roles in defaults:
        if repo.get_by_username(username):
            repo.add_roles(username, roles)
            continue
        register_user(repo, username, raw_pw, roles)
