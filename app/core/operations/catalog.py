"""Operation catalog: every supported operation, its fields and its handler.

The catalog is a table, not a switch. Adding an operation means adding an
``Operation`` member and one ``_entry`` line; ``build_catalog`` refuses to
start if the two ever disagree.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from .collaborators import Domain, SERVICE_TYPES
from .errors import CatalogError
from .fields import FieldKind, FieldSpec, required, optional


class Operation(str, Enum):
    # User
    GET_USERS = "GET_USERS"
    GET_USER_BY_USERNAME = "GET_USER_BY_USERNAME"
    CREATE_USER = "CREATE_USER"
    DELETE_USER = "DELETE_USER"
    UPDATE_USER = "UPDATE_USER"
    GET_USER_BY_ID = "GET_USER_BY_ID"
    GET_USER_GROUPS = "GET_USER_GROUPS"
    ADD_USER_TO_GROUP = "ADD_USER_TO_GROUP"
    REMOVE_USER_FROM_GROUP = "REMOVE_USER_FROM_GROUP"
    GET_USER_ROLES = "GET_USER_ROLES"
    ADD_ROLE_TO_USER = "ADD_ROLE_TO_USER"
    REMOVE_ROLE_FROM_USER = "REMOVE_ROLE_FROM_USER"
    RESET_PASSWORD = "RESET_PASSWORD"
    SEND_VERIFICATION_EMAIL = "SEND_VERIFICATION_EMAIL"
    COUNT_USERS = "COUNT_USERS"

    # Realm
    GET_REALMS = "GET_REALMS"
    GET_REALM = "GET_REALM"
    CREATE_REALM = "CREATE_REALM"

    # Client
    GET_CLIENTS = "GET_CLIENTS"
    GET_CLIENT = "GET_CLIENT"
    CREATE_CLIENT = "CREATE_CLIENT"
    DELETE_CLIENT = "DELETE_CLIENT"
    GENERATE_CLIENT_SECRET = "GENERATE_CLIENT_SECRET"
    GET_CLIENT_ROLES = "GET_CLIENT_ROLES"
    CREATE_CLIENT_ROLE = "CREATE_CLIENT_ROLE"
    DELETE_CLIENT_ROLE = "DELETE_CLIENT_ROLE"

    # Role
    GET_REALM_ROLES = "GET_REALM_ROLES"
    GET_REALM_ROLE = "GET_REALM_ROLE"

    # Group
    GET_GROUPS = "GET_GROUPS"
    GET_GROUP_MEMBERS = "GET_GROUP_MEMBERS"
    CREATE_GROUP = "CREATE_GROUP"
    UPDATE_GROUP = "UPDATE_GROUP"
    DELETE_GROUP = "DELETE_GROUP"
    CREATE_SUBGROUP = "CREATE_SUBGROUP"

    # Identity provider
    GET_IDENTITY_PROVIDERS = "GET_IDENTITY_PROVIDERS"
    GET_IDENTITY_PROVIDER = "GET_IDENTITY_PROVIDER"
    GET_IDENTITY_PROVIDER_MAPPERS = "GET_IDENTITY_PROVIDER_MAPPERS"

    # Authentication flow
    GET_AUTHENTICATION_FLOWS = "GET_AUTHENTICATION_FLOWS"
    GET_AUTHENTICATION_FLOW = "GET_AUTHENTICATION_FLOW"
    CREATE_AUTHENTICATION_FLOW = "CREATE_AUTHENTICATION_FLOW"
    DELETE_AUTHENTICATION_FLOW = "DELETE_AUTHENTICATION_FLOW"
    GET_FLOW_EXECUTIONS = "GET_FLOW_EXECUTIONS"
    UPDATE_FLOW_EXECUTION = "UPDATE_FLOW_EXECUTION"

    # Search
    SEARCH_DISCOURSE = "SEARCH_DISCOURSE"

    @classmethod
    def lookup(cls, name) -> Optional["Operation"]:
        """Resolve an exact, case-sensitive operation name."""
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            return None
        return cls.__members__.get(name)


@dataclass(frozen=True)
class OperationSpec:
    """Catalog entry: the collaborator method an operation calls and its fields."""

    operation: Operation
    domain: Domain
    method: str
    fields: Tuple[FieldSpec, ...]

    def describe(self) -> dict:
        return {
            "name": self.operation.value,
            "domain": self.domain.value,
            "fields": [spec.describe() for spec in self.fields],
        }


def _entry(operation: Operation, domain: Domain, method: str, *fields: FieldSpec) -> OperationSpec:
    return OperationSpec(operation, domain, method, tuple(fields))


# Shared fields
REALM = required("realm")
USER_ID = required("userId", "user_id")
GROUP_ID = required("groupId", "group_id")
ROLE_NAME = required("roleName", "role_name")
CLIENT_UUID = required("clientId", "client_uuid")
ALIAS = required("alias")
FLOW_ID = required("flowId", "flow_id")
FLOW_ALIAS = required("flowAlias", "flow_alias")

_ENTRIES = (
    # ── User ──────────────────────────────────────────────────────────────
    _entry(Operation.GET_USERS, Domain.USER, "list_users", REALM),
    _entry(Operation.GET_USER_BY_USERNAME, Domain.USER, "get_user_by_username", REALM, required("username")),
    _entry(
        Operation.CREATE_USER, Domain.USER, "create_user",
        REALM,
        required("username"),
        required("firstName", "first_name"),
        required("lastName", "last_name"),
        required("email"),
        required("password"),
    ),
    _entry(Operation.DELETE_USER, Domain.USER, "delete_user", REALM, required("username")),
    _entry(
        Operation.UPDATE_USER, Domain.USER, "update_user",
        REALM, USER_ID, required("userRepresentation", "user", FieldKind.OBJECT),
    ),
    _entry(Operation.GET_USER_BY_ID, Domain.USER, "get_user_by_id", REALM, USER_ID),
    _entry(Operation.GET_USER_GROUPS, Domain.USER, "get_user_groups", REALM, USER_ID),
    _entry(Operation.ADD_USER_TO_GROUP, Domain.USER, "add_user_to_group", REALM, USER_ID, GROUP_ID),
    _entry(Operation.REMOVE_USER_FROM_GROUP, Domain.USER, "remove_user_from_group", REALM, USER_ID, GROUP_ID),
    _entry(Operation.GET_USER_ROLES, Domain.USER, "get_user_roles", REALM, USER_ID),
    _entry(Operation.ADD_ROLE_TO_USER, Domain.USER, "add_role_to_user", REALM, USER_ID, ROLE_NAME),
    _entry(Operation.REMOVE_ROLE_FROM_USER, Domain.USER, "remove_role_from_user", REALM, USER_ID, ROLE_NAME),
    _entry(
        Operation.RESET_PASSWORD, Domain.USER, "reset_password",
        REALM, USER_ID,
        required("newPassword", "new_password"),
        optional("temporary", False, kind=FieldKind.BOOL),
    ),
    _entry(Operation.SEND_VERIFICATION_EMAIL, Domain.USER, "send_verification_email", REALM, USER_ID),
    _entry(Operation.COUNT_USERS, Domain.USER, "count_users", REALM),

    # ── Realm ─────────────────────────────────────────────────────────────
    _entry(Operation.GET_REALMS, Domain.REALM, "list_realms"),
    _entry(Operation.GET_REALM, Domain.REALM, "get_realm", required("realmName", "realm_name")),
    _entry(
        Operation.CREATE_REALM, Domain.REALM, "create_realm",
        required("realmName", "realm_name"),
        required("displayName", "display_name"),
        optional("enabled", False, kind=FieldKind.BOOL),
    ),

    # ── Client ────────────────────────────────────────────────────────────
    _entry(Operation.GET_CLIENTS, Domain.CLIENT, "list_clients", REALM),
    _entry(Operation.GET_CLIENT, Domain.CLIENT, "find_client_by_client_id", REALM, required("clientId", "client_id")),
    _entry(
        Operation.CREATE_CLIENT, Domain.CLIENT, "create_client",
        REALM, required("clientId", "client_id"), required("redirectUris", "redirect_uris"),
    ),
    _entry(Operation.DELETE_CLIENT, Domain.CLIENT, "delete_client", REALM, CLIENT_UUID),
    _entry(Operation.GENERATE_CLIENT_SECRET, Domain.CLIENT, "generate_client_secret", REALM, CLIENT_UUID),
    _entry(Operation.GET_CLIENT_ROLES, Domain.CLIENT, "get_client_roles", REALM, CLIENT_UUID),
    _entry(
        Operation.CREATE_CLIENT_ROLE, Domain.CLIENT, "create_client_role",
        REALM, CLIENT_UUID, ROLE_NAME, optional("description", ""),
    ),
    _entry(Operation.DELETE_CLIENT_ROLE, Domain.CLIENT, "delete_client_role", REALM, CLIENT_UUID, ROLE_NAME),

    # ── Role ──────────────────────────────────────────────────────────────
    _entry(Operation.GET_REALM_ROLES, Domain.ROLE, "list_realm_roles", REALM),
    _entry(Operation.GET_REALM_ROLE, Domain.ROLE, "get_realm_role", REALM, ROLE_NAME),

    # ── Group ─────────────────────────────────────────────────────────────
    _entry(Operation.GET_GROUPS, Domain.GROUP, "list_groups", REALM),
    _entry(Operation.GET_GROUP_MEMBERS, Domain.GROUP, "get_group_members", REALM, GROUP_ID),
    _entry(Operation.CREATE_GROUP, Domain.GROUP, "create_group", REALM, required("groupName", "name")),
    _entry(
        Operation.UPDATE_GROUP, Domain.GROUP, "update_group",
        REALM, GROUP_ID, required("groupRepresentation", "group", FieldKind.OBJECT),
    ),
    _entry(Operation.DELETE_GROUP, Domain.GROUP, "delete_group", REALM, GROUP_ID),
    _entry(
        Operation.CREATE_SUBGROUP, Domain.GROUP, "create_subgroup",
        REALM, required("parentGroupId", "parent_group_id"), required("subGroupName", "name"),
    ),

    # ── Identity provider ─────────────────────────────────────────────────
    _entry(Operation.GET_IDENTITY_PROVIDERS, Domain.IDENTITY_PROVIDER, "list_identity_providers", REALM),
    _entry(Operation.GET_IDENTITY_PROVIDER, Domain.IDENTITY_PROVIDER, "get_identity_provider", REALM, ALIAS),
    _entry(
        Operation.GET_IDENTITY_PROVIDER_MAPPERS, Domain.IDENTITY_PROVIDER, "get_identity_provider_mappers",
        REALM, ALIAS,
    ),

    # ── Authentication flow ───────────────────────────────────────────────
    _entry(Operation.GET_AUTHENTICATION_FLOWS, Domain.AUTHENTICATION_FLOW, "list_flows", REALM),
    _entry(Operation.GET_AUTHENTICATION_FLOW, Domain.AUTHENTICATION_FLOW, "get_flow", REALM, FLOW_ID),
    _entry(
        Operation.CREATE_AUTHENTICATION_FLOW, Domain.AUTHENTICATION_FLOW, "copy_flow",
        REALM, required("authFlowNameId", "flow_id"),
    ),
    _entry(Operation.DELETE_AUTHENTICATION_FLOW, Domain.AUTHENTICATION_FLOW, "delete_flow", REALM, FLOW_ID),
    _entry(Operation.GET_FLOW_EXECUTIONS, Domain.AUTHENTICATION_FLOW, "get_flow_executions", REALM, FLOW_ALIAS),
    _entry(
        Operation.UPDATE_FLOW_EXECUTION, Domain.AUTHENTICATION_FLOW, "update_flow_execution",
        REALM, FLOW_ALIAS, required("executionRepresentation", "execution", FieldKind.OBJECT),
    ),

    # ── Search ────────────────────────────────────────────────────────────
    _entry(Operation.SEARCH_DISCOURSE, Domain.SEARCH, "search", required("query")),
)


def build_catalog(
    entries: Iterable[OperationSpec],
    service_types: Mapping[Domain, type] = SERVICE_TYPES,
) -> Mapping[Operation, OperationSpec]:
    """Index catalog entries by operation, refusing any inconsistency.

    Raises:
        CatalogError: If an operation is missing or duplicated, or an entry
            names a method its domain's service does not define
    """
    catalog = {}
    for spec in entries:
        if spec.operation in catalog:
            raise CatalogError(f"duplicate catalog entry for {spec.operation.value}")
        service_type = service_types.get(spec.domain)
        if service_type is None or not callable(getattr(service_type, spec.method, None)):
            raise CatalogError(
                f"{spec.operation.value}: no handler '{spec.method}' on the {spec.domain.value} service"
            )
        catalog[spec.operation] = spec

    missing = [operation.value for operation in Operation if operation not in catalog]
    if missing:
        raise CatalogError(f"operations without a handler: {', '.join(missing)}")
    return MappingProxyType(catalog)


CATALOG = build_catalog(_ENTRIES)
