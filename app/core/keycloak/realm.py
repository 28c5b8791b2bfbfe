"""Keycloak realm management operations."""
from __future__ import annotations
import logging
from typing import Optional, List

from .client import KeycloakClient
from .exceptions import ResourceNotFoundError

logger = logging.getLogger(__name__)


class RealmService:
    """Service for managing Keycloak realms."""

    def __init__(self, client: KeycloakClient):
        """Initialize realm service.

        Args:
            client: Authenticated Keycloak client
        """
        self.client = client

    def list_realms(self) -> List[dict]:
        """Return every realm visible to the caller."""
        return self.client.get("/admin/realms").json() or []

    def get_realm(self, realm_name: str) -> Optional[dict]:
        """Return the realm representation, or None if the realm does not exist."""
        try:
            return self.client.get(f"/admin/realms/{realm_name}").json()
        except ResourceNotFoundError:
            return None

    def create_realm(self, realm_name: str, display_name: str, enabled: bool = False) -> str:
        """Create a new realm.

        Args:
            realm_name: Realm name (also its id)
            display_name: Human readable name shown on login pages
            enabled: Whether the realm accepts logins right away

        Returns:
            Status message
        """
        payload = {"realm": realm_name, "displayName": display_name, "enabled": enabled}
        self.client.post("/admin/realms", json=payload)
        logger.info("Realm '%s' created (enabled=%s)", realm_name, enabled)
        return f"Successfully created realm: {realm_name}"
