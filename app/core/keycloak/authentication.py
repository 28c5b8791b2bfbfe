"""Keycloak authentication flow management operations."""
from __future__ import annotations
import logging
from typing import Optional, List

from .client import KeycloakClient
from .exceptions import AuthenticationFlowNotFoundError

logger = logging.getLogger(__name__)

COPY_SUFFIX = "-copy"


class AuthenticationFlowService:
    """Service for managing authentication flows and their executions."""

    def __init__(self, client: KeycloakClient):
        """Initialize authentication flow service.

        Args:
            client: Authenticated Keycloak client
        """
        self.client = client

    def _flows_path(self, realm: str) -> str:
        return f"/admin/realms/{realm}/authentication/flows"

    def list_flows(self, realm: str) -> List[dict]:
        return self.client.get(self._flows_path(realm)).json() or []

    def get_flow(self, realm: str, flow_id: str) -> Optional[dict]:
        """Return the flow whose id matches, or None."""
        return next((flow for flow in self.list_flows(realm) if flow.get("id") == flow_id), None)

    def create_flow(self, realm: str, flow: dict) -> str:
        self.client.post(self._flows_path(realm), json=flow)
        logger.info("Authentication flow '%s' created in realm '%s'", flow.get("alias"), realm)
        return f"Successfully created authentication flow: {flow.get('alias')}"

    def copy_flow(self, realm: str, flow_id: str) -> str:
        """Create a new top-level flow from an existing one.

        The copy keeps every attribute of the source except its id, and its
        alias is ``<flow_id>-copy``.

        Raises:
            AuthenticationFlowNotFoundError: If no flow has this id
        """
        source = self.get_flow(realm, flow_id)
        if source is None:
            raise AuthenticationFlowNotFoundError(f"Authentication flow not found: {flow_id}")
        flow = {key: value for key, value in source.items() if key != "id"}
        flow["alias"] = f"{flow_id}{COPY_SUFFIX}"
        return self.create_flow(realm, flow)

    def delete_flow(self, realm: str, flow_id: str) -> str:
        self.client.delete(f"{self._flows_path(realm)}/{flow_id}")
        return f"Successfully deleted authentication flow: {flow_id}"

    def get_flow_executions(self, realm: str, flow_alias: str) -> List[dict]:
        return self.client.get(f"{self._flows_path(realm)}/{flow_alias}/executions").json() or []

    def update_flow_execution(self, realm: str, flow_alias: str, execution: dict) -> str:
        """Update one execution of a flow (requirement level, priority, ...)."""
        self.client.put(f"{self._flows_path(realm)}/{flow_alias}/executions", json=execution)
        label = execution.get("displayName") or execution.get("id")
        return f"Successfully updated flow execution: {label}"
