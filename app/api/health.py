"""Health check endpoint."""
from flask import Blueprint

bp = Blueprint("health", __name__)


@bp.route("/health")
def health_check():
    """Liveness probe; does not contact Keycloak."""
    return ("ok", 200, {"Content-Type": "text/plain"})
