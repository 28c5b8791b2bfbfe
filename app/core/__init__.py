"""Core Business Logic Module

Pure Python, independent of Flask, so the same operations serve the HTTP API
and the CLI.

Module Structure:
    - keycloak/    : Keycloak Admin API client and per-domain services
    - discourse.py : Keycloak community forum search
    - operations/  : Operation catalog, parameter extraction, dispatcher

Usage Pattern:
    Import explicitly when needed:
        from app.core.keycloak import build_client
        from app.core.operations import Collaborators, OperationDispatcher
"""
