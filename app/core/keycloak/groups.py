"""Keycloak group management operations."""
from __future__ import annotations
import logging
from typing import List

from .client import KeycloakClient

logger = logging.getLogger(__name__)


class GroupService:
    """Service for managing Keycloak groups."""

    def __init__(self, client: KeycloakClient):
        """Initialize group service.

        Args:
            client: Authenticated Keycloak client
        """
        self.client = client

    def _group_path(self, realm: str, group_id: str) -> str:
        return f"/admin/realms/{realm}/groups/{group_id}"

    def list_groups(self, realm: str) -> List[dict]:
        """Return the realm's top-level groups (subgroups are nested)."""
        return self.client.get(f"/admin/realms/{realm}/groups").json() or []

    def get_group_members(self, realm: str, group_id: str) -> List[dict]:
        """Retrieve all members of a group.

        Args:
            realm: Realm name
            group_id: Group ID

        Returns:
            List of user representations
        """
        return self.client.get(f"{self._group_path(realm, group_id)}/members").json() or []

    def create_group(self, realm: str, name: str) -> str:
        self.client.post(f"/admin/realms/{realm}/groups", json={"name": name})
        logger.info("Group '%s' created in realm '%s'", name, realm)
        return f"Successfully created group: {name}"

    def update_group(self, realm: str, group_id: str, group: dict) -> str:
        self.client.put(self._group_path(realm, group_id), json=group)
        return f"Successfully updated group: {group_id}"

    def delete_group(self, realm: str, group_id: str) -> str:
        self.client.delete(self._group_path(realm, group_id))
        logger.info("Group '%s' deleted from realm '%s'", group_id, realm)
        return f"Successfully deleted group: {group_id}"

    def create_subgroup(self, realm: str, parent_group_id: str, name: str) -> str:
        """Create ``name`` as a child of an existing group.

        Raises:
            ResourceNotFoundError: If the parent group does not exist
        """
        self.client.post(f"{self._group_path(realm, parent_group_id)}/children", json={"name": name})
        return f"Successfully created subgroup: {parent_group_id} -> {name}"
