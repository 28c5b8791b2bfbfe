"""Flask application factory and bootstrap.

This module provides the create_app() factory function for initializing
the operation gateway with its blueprints and configuration.
"""
from __future__ import annotations
import logging

from flask import Flask

from app.config import AppConfig, load_settings


# ─────────────────────────────────────────────────────────────────────────────
# Application Factory
# ─────────────────────────────────────────────────────────────────────────────
def create_app(cfg: AppConfig | None = None) -> Flask:
    """Create and configure Flask application."""
    # Load configuration
    cfg = cfg or load_settings()

    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Create Flask app
    app = Flask(__name__)

    # Store config for easy access in routes
    app.config["APP_CONFIG"] = cfg

    # Register blueprints
    from app.api import errors, health, operations

    app.register_blueprint(health.bp)
    app.register_blueprint(operations.bp)

    # Register error handlers
    errors.register_error_handlers(app)

    # Log startup info
    print(f"[flask_app] Keycloak={cfg.keycloak_url} realm={cfg.keycloak_realm}")
    print(f"[flask_app] {len(operations.CATALOG)} operations registered at /api/operations")

    if cfg.dev_credentials_configured:
        print("[flask_app] WARNING: requests without a bearer token fall back to development credentials")

    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
