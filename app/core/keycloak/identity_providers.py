"""Keycloak identity provider (brokering) lookups."""
from __future__ import annotations
from typing import Optional, List

from .client import KeycloakClient
from .exceptions import ResourceNotFoundError


class IdentityProviderService:
    """Service for reading identity providers configured in a realm."""

    def __init__(self, client: KeycloakClient):
        self.client = client

    def _instances_path(self, realm: str) -> str:
        return f"/admin/realms/{realm}/identity-provider/instances"

    def list_identity_providers(self, realm: str) -> List[dict]:
        return self.client.get(self._instances_path(realm)).json() or []

    def get_identity_provider(self, realm: str, alias: str) -> Optional[dict]:
        """Return the provider with this alias, or None if none is configured."""
        try:
            return self.client.get(f"{self._instances_path(realm)}/{alias}").json()
        except ResourceNotFoundError:
            return None

    def get_identity_provider_mappers(self, realm: str, alias: str) -> List[dict]:
        """Return the attribute mappers of a provider.

        Raises:
            ResourceNotFoundError: If no provider has this alias
        """
        return self.client.get(f"{self._instances_path(realm)}/{alias}/mappers").json() or []
