"""
Centralized custom exception definitions for the Countries API.

Each exception inherits from BaseAppError, which itself extends Werkzeug's
HTTPException, allowing clean integration with Flask's error system and
JSON-formatted API responses.

Domain Groups:
--------------
1. Bad input (400)
2. Authentication / authorization (401, 403)
3. Record errors (404, 409)
4. Validation of patched records (422)
5. Database errors (503)
"""

from werkzeug.exceptions import HTTPException


class BaseAppError(HTTPException):
    """Root application error, base for all custom exceptions."""
    code = 500
    description = "Application error"

    def __init__(self, message=None, details=None, code=None, headers=None):
        super().__init__(description=message or self.description)
        self.message = message or self.description
        self.details = details or {}
        self.extra_headers = dict(headers or {})
        if code:
            self.code = code

    def to_dict(self):
        """Serialize error info into a JSON-safe dictionary."""
        return {
            "status": "error",
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


# ==============================================================================
# 1. BAD INPUT (HTTP 400)
# ==============================================================================

class ValidationError(BaseAppError):
    code = 400
    description = "Validation error"


class InvalidQueryError(ValidationError):
    description = "Invalid query option"


class RouteKeyMismatchError(ValidationError):
    description = "Route key does not match the body entityId"


# ==============================================================================
# 2. AUTHENTICATION / AUTHORIZATION (HTTP 401, 403)
# ==============================================================================

class AuthenticationRequiredError(BaseAppError):
    code = 401
    description = "Authentication required"

    def __init__(self, message=None, details=None):
        super().__init__(
            message,
            details,
            headers={"WWW-Authenticate": 'Basic realm="countries"'},
        )


class PermissionDeniedError(BaseAppError):
    code = 403
    description = "Editor capability required"


# ==============================================================================
# 3. RECORD ERRORS (HTTP 404, 409)
# ==============================================================================

class RecordNotFoundError(BaseAppError):
    code = 404
    description = "Requested record not found"


class DuplicateKeyError(BaseAppError):
    code = 409
    description = "Duplicate record detected"


# ==============================================================================
# 4. PATCH VALIDATION (HTTP 422)
# ==============================================================================

class PatchValidationError(BaseAppError):
    """
    Raised when a patched record no longer satisfies the entity invariants.
    ``details`` maps each offending field to its messages.
    """
    code = 422
    description = "One or more validation errors occurred"


# ==============================================================================
# 5. DATABASE ERRORS (HTTP 503)
# ==============================================================================

class DatabaseConnectionError(BaseAppError):
    code = 503
    description = "Database connection failed"
