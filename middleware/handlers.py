"""
Global Flask error handling middleware.

All exceptions (custom or unexpected) are returned as JSON payloads:
{
    "status": "error",
    "error": "ErrorClassName",
    "message": "Human readable message",
    "details": { ... optional context ... }
}
"""

from flask import jsonify
from werkzeug.exceptions import HTTPException
from middleware.errors import BaseAppError
import traceback
import os


def register_error_handlers(app):
    """Attach all JSON error handlers to a Flask app instance."""

    @app.errorhandler(BaseAppError)
    def handle_custom_error(err):
        """Handle custom, domain-specific errors."""
        response = jsonify(err.to_dict())
        response.status_code = err.code
        for name, value in err.extra_headers.items():
            response.headers[name] = value
        return response

    @app.errorhandler(HTTPException)
    def handle_http_error(err):
        """Keep Werkzeug's status (404 route, 405 method, ...) but answer in JSON."""
        payload = {
            "status": "error",
            "error": err.__class__.__name__,
            "message": err.description or err.name,
            "details": {}
        }
        return jsonify(payload), err.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(err):
        """Catch-all handler for unexpected exceptions."""
        app.logger.exception("Unhandled error while serving request")
        details = {}
        if app.debug or os.getenv("FLASK_DEBUG") == "1":
            details["traceback"] = traceback.format_exc()

        payload = {
            "status": "error",
            "error": err.__class__.__name__,
            "message": str(err) or "Unexpected internal error",
            "details": details
        }
        return jsonify(payload), 500
