"""Keycloak client (OIDC application) management operations.

Except for ``find_client_by_client_id``, methods take the client's internal
UUID, not its human readable ``clientId``.
"""
from __future__ import annotations
import logging
from typing import Optional, List

from .client import KeycloakClient

logger = logging.getLogger(__name__)


class ClientService:
    """Service for managing Keycloak clients and their roles."""

    def __init__(self, client: KeycloakClient):
        """Initialize client service.

        Args:
            client: Authenticated Keycloak client
        """
        self.client = client

    def _client_path(self, realm: str, client_uuid: str) -> str:
        return f"/admin/realms/{realm}/clients/{client_uuid}"

    def list_clients(self, realm: str) -> List[dict]:
        return self.client.get(f"/admin/realms/{realm}/clients").json() or []

    def find_client_by_client_id(self, realm: str, client_id: str) -> Optional[dict]:
        """Return the client representation matching client_id, if it exists.

        Args:
            realm: Realm name
            client_id: Human readable client ID (e.g. "flask-app")

        Returns:
            Client representation or None if not found
        """
        resp = self.client.get(f"/admin/realms/{realm}/clients", params={"clientId": client_id})
        clients = resp.json()
        return clients[0] if clients else None

    def create_client(self, realm: str, client_id: str, redirect_uris: str) -> str:
        """Create a confidential OpenID Connect client.

        Args:
            realm: Realm name
            client_id: Client ID, also used as display name
            redirect_uris: Comma separated list of allowed redirect URIs

        Returns:
            Status message
        """
        uris = [uri.strip() for uri in redirect_uris.split(",") if uri.strip()]
        payload = {
            "clientId": client_id,
            "name": client_id,
            "protocol": "openid-connect",
            "enabled": True,
            "publicClient": False,
            "standardFlowEnabled": True,
            "directAccessGrantsEnabled": False,
            "serviceAccountsEnabled": False,
            "redirectUris": uris,
        }
        self.client.post(f"/admin/realms/{realm}/clients", json=payload)
        logger.info("Client '%s' created in realm '%s'", client_id, realm)
        return f"Successfully created client: {client_id}"

    def delete_client(self, realm: str, client_uuid: str) -> str:
        self.client.delete(self._client_path(realm, client_uuid))
        return f"Successfully deleted client: {client_uuid}"

    def generate_client_secret(self, realm: str, client_uuid: str) -> str:
        """Rotate the client secret and return the new value."""
        credential = self.client.post(f"{self._client_path(realm, client_uuid)}/client-secret").json() or {}
        secret = credential.get("value")
        if not secret:
            raise ValueError(f"Client {client_uuid} did not return a secret (is it a confidential client?)")
        return secret

    def get_client_roles(self, realm: str, client_uuid: str) -> List[dict]:
        return self.client.get(f"{self._client_path(realm, client_uuid)}/roles").json() or []

    def create_client_role(self, realm: str, client_uuid: str, role_name: str, description: str = "") -> str:
        payload = {"name": role_name, "description": description, "clientRole": True}
        self.client.post(f"{self._client_path(realm, client_uuid)}/roles", json=payload)
        return f"Successfully created client role: {role_name}"

    def delete_client_role(self, realm: str, client_uuid: str, role_name: str) -> str:
        self.client.delete(f"{self._client_path(realm, client_uuid)}/roles/{role_name}")
        return f"Successfully deleted client role: {role_name}"
