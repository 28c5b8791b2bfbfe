"""Keycloak operation gateway.

To use the Flask app:
    from app.flask_app import create_app

To dispatch operations directly:
    from app.core.operations import Collaborators, OperationDispatcher
"""
# Note: flask_app is not imported here so the CLI and the core library
# do not pull in Flask
