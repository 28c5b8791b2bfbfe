"""Keycloak user management operations."""
from __future__ import annotations
import logging
from typing import Optional, List

from .client import KeycloakClient
from .exceptions import UserNotFoundError, ResourceNotFoundError

logger = logging.getLogger(__name__)


class UserService:
    """Service for managing Keycloak users."""

    def __init__(self, client: KeycloakClient):
        """Initialize user service.

        Args:
            client: Authenticated Keycloak client
        """
        self.client = client

    def _user_path(self, realm: str, user_id: str) -> str:
        return f"/admin/realms/{realm}/users/{user_id}"

    def list_users(self, realm: str) -> List[dict]:
        """Return every user representation in the realm."""
        return self.client.get(f"/admin/realms/{realm}/users").json() or []

    def get_user_by_username(self, realm: str, username: str) -> Optional[dict]:
        """Return the user representation that exactly matches the username.

        Keycloak's ``search`` is a substring match, so the result is filtered.

        Args:
            realm: Realm name
            username: Username to search for

        Returns:
            User representation or None if not found
        """
        resp = self.client.get(f"/admin/realms/{realm}/users", params={"search": username})
        for user in resp.json() or []:
            if user.get("username") == username:
                return user
        return None

    def create_user(
        self,
        realm: str,
        username: str,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
    ) -> str:
        """Create an enabled user with a permanent password.

        Args:
            realm: Realm name
            username: Username
            first_name: First name
            last_name: Last name
            email: Email address
            password: Initial (non-temporary) password

        Returns:
            Status message
        """
        payload = {
            "username": username,
            "firstName": first_name,
            "lastName": last_name,
            "email": email,
            "enabled": True,
            "credentials": [{"type": "password", "value": password, "temporary": False}],
        }
        self.client.post(f"/admin/realms/{realm}/users", json=payload)
        logger.info("User '%s' created in realm '%s'", username, realm)
        return f"Successfully created user: {username}"

    def delete_user(self, realm: str, username: str) -> str:
        """Delete a user identified by username.

        Raises:
            UserNotFoundError: If no user has exactly this username
        """
        user = self.get_user_by_username(realm, username)
        if user is None:
            raise UserNotFoundError(f"User not found: {username}")
        self.client.delete(self._user_path(realm, user["id"]))
        logger.info("User '%s' deleted from realm '%s'", username, realm)
        return f"Successfully deleted user: {user['id']}"

    def update_user(self, realm: str, user_id: str, user: dict) -> str:
        """Replace the user's representation with ``user``."""
        self.client.put(self._user_path(realm, user_id), json=user)
        return f"Successfully updated user: {user_id}"

    def get_user_by_id(self, realm: str, user_id: str) -> Optional[dict]:
        """Return the user with this id, or None when Keycloak has no such user."""
        try:
            return self.client.get(self._user_path(realm, user_id)).json()
        except ResourceNotFoundError:
            return None

    def get_user_groups(self, realm: str, user_id: str) -> List[dict]:
        return self.client.get(f"{self._user_path(realm, user_id)}/groups").json() or []

    def add_user_to_group(self, realm: str, user_id: str, group_id: str) -> str:
        self.client.put(f"{self._user_path(realm, user_id)}/groups/{group_id}")
        return f"Successfully added user to group: {user_id} -> {group_id}"

    def remove_user_from_group(self, realm: str, user_id: str, group_id: str) -> str:
        self.client.delete(f"{self._user_path(realm, user_id)}/groups/{group_id}")
        return f"Successfully removed user from group: {user_id} -> {group_id}"

    def get_user_roles(self, realm: str, user_id: str) -> List[dict]:
        """Return the user's effective realm-level roles (composites expanded)."""
        resp = self.client.get(f"{self._user_path(realm, user_id)}/role-mappings/realm/composite")
        return resp.json() or []

    def _role_reference(self, realm: str, role_name: str) -> List[dict]:
        role = self.client.get(f"/admin/realms/{realm}/roles/{role_name}").json()
        return [{"id": role["id"], "name": role["name"]}]

    def add_role_to_user(self, realm: str, user_id: str, role_name: str) -> str:
        self.client.post(
            f"{self._user_path(realm, user_id)}/role-mappings/realm",
            json=self._role_reference(realm, role_name),
        )
        return f"Successfully added role to user: {user_id} -> {role_name}"

    def remove_role_from_user(self, realm: str, user_id: str, role_name: str) -> str:
        self.client.delete(
            f"{self._user_path(realm, user_id)}/role-mappings/realm",
            json=self._role_reference(realm, role_name),
        )
        return f"Successfully removed role from user: {user_id} -> {role_name}"

    def reset_password(self, realm: str, user_id: str, new_password: str, temporary: bool = False) -> str:
        """Set a new password credential.

        Args:
            realm: Realm name
            user_id: User ID
            new_password: Password value
            temporary: Force a password change on next login
        """
        self.client.put(
            f"{self._user_path(realm, user_id)}/reset-password",
            json={"type": "password", "value": new_password, "temporary": temporary},
        )
        return f"Successfully reset password for user: {user_id}"

    def send_verification_email(self, realm: str, user_id: str) -> str:
        self.client.put(f"{self._user_path(realm, user_id)}/send-verify-email")
        return f"Successfully sent verification email to user: {user_id}"

    def count_users(self, realm: str) -> int:
        return int(self.client.get(f"/admin/realms/{realm}/users/count").json())
