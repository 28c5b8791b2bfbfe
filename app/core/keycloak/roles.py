"""Keycloak realm role lookups."""
from __future__ import annotations
from typing import Optional, List

from .client import KeycloakClient
from .exceptions import ResourceNotFoundError


class RoleService:
    """Service for reading Keycloak realm roles."""

    def __init__(self, client: KeycloakClient):
        """Initialize role service.

        Args:
            client: Authenticated Keycloak client
        """
        self.client = client

    def list_realm_roles(self, realm: str) -> List[dict]:
        return self.client.get(f"/admin/realms/{realm}/roles").json() or []

    def get_realm_role(self, realm: str, role_name: str) -> Optional[dict]:
        """Return the realm role, or None if the realm has no such role."""
        try:
            return self.client.get(f"/admin/realms/{realm}/roles/{role_name}").json()
        except ResourceNotFoundError:
            return None
