# middleware/auth.py
from functools import wraps
from flask import current_app, request

from middleware.errors import AuthenticationRequiredError, PermissionDeniedError
from services.auth_service import authenticate


def editor_required(view_func):
    """Decorator that requires HTTP Basic credentials of a user holding the editor role."""
    @wraps(view_func)
    def wrapper(*args, **kwargs):
        if current_app.config.get("LOGIN_DISABLED"):
            return view_func(*args, **kwargs)

        credentials = request.authorization
        if credentials is None or credentials.type != "basic":
            raise AuthenticationRequiredError()

        user = authenticate(
            current_app.extensions["user_repository"],
            credentials.username or "",
            credentials.password or "",
        )
        if user is None:
            current_app.logger.warning(
                "Rejected credentials for user '%s'.", credentials.username
            )
            raise AuthenticationRequiredError("Invalid username or password.")

        if not user.is_editor:
            raise PermissionDeniedError(
                f"User '{user.username}' does not hold the editor capability."
            )
        return view_func(*args, **kwargs)
    return wrapper
