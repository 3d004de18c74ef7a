"""System endpoints (health check)."""

from flask import Blueprint, current_app, jsonify

system_bp = Blueprint("system", __name__)


@system_bp.route("/health", methods=["GET"])
def health_check():
    """Simple health-check route without authentication."""
    try:
        current_app.extensions["mongo_database"].command("ping")
        db_status = "ok"
    except Exception as e:  # pragma: no cover - best effort
        db_status = f"error: {str(e)}"

    return jsonify({
        "status": "ok",
        "database": db_status,
    }), 200
