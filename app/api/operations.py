"""HTTP surface for the operation dispatcher.

Endpoints:
    GET  /api/operations          -> catalog listing (names, domains, fields)
    POST /api/operations/<name>   -> dispatch with the JSON body as parameter bag

The caller's ``Authorization: Bearer`` token is forwarded to Keycloak, so
Keycloak's own permission checks apply to every call.
"""
from __future__ import annotations
import logging

from flask import Blueprint, current_app, jsonify, request

from app.core.discourse import DiscourseSearchService
from app.core.keycloak import AuthenticationRequiredError, KeycloakError, build_client
from app.core.operations import CATALOG, Collaborators, Failure, FailureKind, OperationDispatcher, prepare

bp = Blueprint("operations", __name__, url_prefix="/api/operations")

logger = logging.getLogger(__name__)

FAILURE_STATUS = {
    FailureKind.UNKNOWN_OPERATION: 404,
    FailureKind.VALIDATION_ERROR: 400,
    FailureKind.NOT_FOUND: 404,
    FailureKind.UPSTREAM_ERROR: 502,
    FailureKind.SERIALIZATION_ERROR: 500,
}


def _bearer_token() -> str | None:
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    return auth_header[7:].strip() or None


def build_collaborators(token: str | None) -> Collaborators:
    """Create per-request collaborators bound to the caller's credentials."""
    cfg = current_app.config["APP_CONFIG"]
    client = build_client(
        cfg.keycloak_url,
        bearer_token=token,
        dev_user=cfg.dev_user,
        dev_password=cfg.dev_password,
        auth_realm=cfg.keycloak_realm,
        timeout=cfg.request_timeout,
    )
    search = DiscourseSearchService(cfg.discourse_url, timeout=cfg.request_timeout)
    return Collaborators.from_client(client, search)


@bp.errorhandler(AuthenticationRequiredError)
def handle_missing_credentials(error: AuthenticationRequiredError):
    return jsonify({"error": "Unauthorized", "message": str(error)}), 401


@bp.errorhandler(KeycloakError)
def handle_keycloak_login_error(error: KeycloakError):
    logger.error("Could not obtain a Keycloak session: %s", error)
    return jsonify({"error": "Bad Gateway", "message": "Keycloak authentication failed"}), 502


@bp.route("", methods=["GET"])
def list_operations():
    """List every operation with its parameter schema."""
    return jsonify([spec.describe() for spec in CATALOG.values()])


@bp.route("/<name>", methods=["POST"])
def run_operation(name: str):
    """Dispatch one operation.

    The body must be a JSON object (or empty for operations without fields).
    """
    # Validation happens before credentials are resolved, so a bad request
    # never triggers a Keycloak login
    prepared = prepare(name, request.get_data(cache=False) or None)
    if isinstance(prepared, Failure):
        return jsonify(prepared.to_dict()), FAILURE_STATUS[prepared.kind]

    dispatcher = OperationDispatcher(build_collaborators(_bearer_token()))
    envelope = dispatcher.run(prepared)

    if isinstance(envelope, Failure):
        status = FAILURE_STATUS[envelope.kind]
        return jsonify(envelope.to_dict()), status

    return jsonify({"operation": name, "result": envelope.payload}), 200
