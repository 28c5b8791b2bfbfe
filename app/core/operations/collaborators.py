"""Domains and the container holding one collaborator service per domain."""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from app.core.discourse import DiscourseSearchService, DEFAULT_DISCOURSE_URL
from app.core.keycloak import (
    KeycloakClient,
    UserService,
    RealmService,
    ClientService,
    RoleService,
    GroupService,
    IdentityProviderService,
    AuthenticationFlowService,
)


class Domain(str, Enum):
    """Operation domain; the value is the attribute name on ``Collaborators``."""

    USER = "users"
    REALM = "realms"
    CLIENT = "clients"
    ROLE = "roles"
    GROUP = "groups"
    IDENTITY_PROVIDER = "identity_providers"
    AUTHENTICATION_FLOW = "authentication_flows"
    SEARCH = "search"


SERVICE_TYPES = {
    Domain.USER: UserService,
    Domain.REALM: RealmService,
    Domain.CLIENT: ClientService,
    Domain.ROLE: RoleService,
    Domain.GROUP: GroupService,
    Domain.IDENTITY_PROVIDER: IdentityProviderService,
    Domain.AUTHENTICATION_FLOW: AuthenticationFlowService,
    Domain.SEARCH: DiscourseSearchService,
}


@dataclass(frozen=True)
class Collaborators:
    users: Any
    realms: Any
    clients: Any
    roles: Any
    groups: Any
    identity_providers: Any
    authentication_flows: Any
    search: Any

    def for_domain(self, domain: Domain) -> Any:
        return getattr(self, domain.value)

    @classmethod
    def from_client(
        cls,
        client: KeycloakClient,
        search: Optional[DiscourseSearchService] = None,
    ) -> "Collaborators":
        """Wire every Keycloak service to one authenticated client."""
        return cls(
            users=UserService(client),
            realms=RealmService(client),
            clients=ClientService(client),
            roles=RoleService(client),
            groups=GroupService(client),
            identity_providers=IdentityProviderService(client),
            authentication_flows=AuthenticationFlowService(client),
            search=search or DiscourseSearchService(DEFAULT_DISCOURSE_URL, timeout=client.timeout),
        )
