"""Keycloak Admin API client library.

Architecture:
- client.py: HTTP client with caller-token pass-through and dev-credential fallback
- users.py: User lifecycle, group membership, role mappings, credentials
- realm.py: Realm listing and creation
- clients.py: OIDC clients, secrets and client roles
- roles.py: Realm role lookups
- groups.py: Groups and subgroups
- identity_providers.py: Identity brokering lookups
- authentication.py: Authentication flows and executions
- exceptions.py: Typed exceptions for error handling

Usage:
    from app.core.keycloak import KeycloakClient, UserService

    client = KeycloakClient.from_token("http://localhost:8180", token)
    users = UserService(client).list_users("demo")
"""
from .client import (
    KeycloakClient,
    build_client,
    REQUEST_TIMEOUT,
)
from .exceptions import (
    KeycloakError,
    KeycloakAPIError,
    AuthenticationRequiredError,
    NotFoundError,
    ResourceNotFoundError,
    UserNotFoundError,
    AuthenticationFlowNotFoundError,
)
from .users import UserService
from .realm import RealmService
from .clients import ClientService
from .roles import RoleService
from .groups import GroupService
from .identity_providers import IdentityProviderService
from .authentication import AuthenticationFlowService

__all__ = [
    # Client
    "KeycloakClient",
    "build_client",
    "REQUEST_TIMEOUT",

    # Exceptions
    "KeycloakError",
    "KeycloakAPIError",
    "AuthenticationRequiredError",
    "NotFoundError",
    "ResourceNotFoundError",
    "UserNotFoundError",
    "AuthenticationFlowNotFoundError",

    # Services
    "UserService",
    "RealmService",
    "ClientService",
    "RoleService",
    "GroupService",
    "IdentityProviderService",
    "AuthenticationFlowService",
]
