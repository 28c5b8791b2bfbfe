"""Tests for the Keycloak collaborator services against a faked admin API."""
import pytest

from app.core.keycloak import (
    AuthenticationFlowNotFoundError,
    AuthenticationFlowService,
    ClientService,
    GroupService,
    IdentityProviderService,
    KeycloakClient,
    RealmService,
    ResourceNotFoundError,
    RoleService,
    UserNotFoundError,
    UserService,
)

BASE = "http://kc/admin/realms/demo"


@pytest.fixture
def kc_client():
    return KeycloakClient.from_token("http://kc", "token")


# ============================================================================
# Users
# ============================================================================

def test_get_user_by_username_requires_exact_match(fake_http, kc_client):
    fake_http.reply([{"id": "1", "username": "alice2"}, {"id": "2", "username": "alice"}])

    user = UserService(kc_client).get_user_by_username("demo", "alice")

    assert user["id"] == "2"
    assert fake_http.calls[0][2]["params"] == {"search": "alice"}


def test_get_user_by_username_returns_none_without_match(fake_http, kc_client):
    fake_http.reply([{"id": "1", "username": "alice2"}])

    assert UserService(kc_client).get_user_by_username("demo", "alice") is None


def test_create_user_sets_permanent_password(fake_http, kc_client):
    fake_http.reply(None, 201)

    message = UserService(kc_client).create_user("demo", "jdoe", "J", "Doe", "j@x.com", "pw")

    method, url, kwargs = fake_http.calls[0]
    assert message == "Successfully created user: jdoe"
    assert (method, url) == ("POST", f"{BASE}/users")
    assert kwargs["json"]["enabled"] is True
    assert kwargs["json"]["credentials"] == [{"type": "password", "value": "pw", "temporary": False}]


def test_delete_user_resolves_username_first(fake_http, kc_client):
    fake_http.reply([{"id": "u1", "username": "bob"}]).reply(None, 204)

    message = UserService(kc_client).delete_user("demo", "bob")

    assert message == "Successfully deleted user: u1"
    assert fake_http.calls[1][:2] == ("DELETE", f"{BASE}/users/u1")


def test_delete_missing_user_raises_without_deleting(fake_http, kc_client):
    fake_http.reply([])

    with pytest.raises(UserNotFoundError, match="ghost"):
        UserService(kc_client).delete_user("demo", "ghost")
    assert len(fake_http.calls) == 1


def test_get_user_by_id_returns_none_on_404(fake_http, kc_client):
    fake_http.reply({"error": "User not found"}, 404)

    assert UserService(kc_client).get_user_by_id("demo", "missing") is None


def test_add_role_to_user_posts_role_reference(fake_http, kc_client):
    fake_http.reply({"id": "r1", "name": "analyst", "composite": False}).reply(None, 204)

    UserService(kc_client).add_role_to_user("demo", "u1", "analyst")

    method, url, kwargs = fake_http.calls[1]
    assert (method, url) == ("POST", f"{BASE}/users/u1/role-mappings/realm")
    assert kwargs["json"] == [{"id": "r1", "name": "analyst"}]


def test_add_unknown_role_raises_not_found(fake_http, kc_client):
    fake_http.reply({"error": "Could not find role"}, 404)

    with pytest.raises(ResourceNotFoundError):
        UserService(kc_client).add_role_to_user("demo", "u1", "ghost-role")


def test_reset_password_passes_temporary_flag(fake_http, kc_client):
    UserService(kc_client).reset_password("demo", "u1", "new", temporary=True)

    method, url, kwargs = fake_http.calls[0]
    assert (method, url) == ("PUT", f"{BASE}/users/u1/reset-password")
    assert kwargs["json"] == {"type": "password", "value": "new", "temporary": True}


def test_count_users_returns_int(fake_http, kc_client):
    fake_http.reply(12)

    assert UserService(kc_client).count_users("demo") == 12


# ============================================================================
# Realms, roles, identity providers
# ============================================================================

def test_get_realm_returns_none_on_404(fake_http, kc_client):
    fake_http.reply(None, 404)

    assert RealmService(kc_client).get_realm("nope") is None


def test_create_realm_is_disabled_by_default(fake_http, kc_client):
    RealmService(kc_client).create_realm("demo", "Demo")

    assert fake_http.calls[0][2]["json"] == {"realm": "demo", "displayName": "Demo", "enabled": False}


def test_get_realm_role_returns_none_on_404(fake_http, kc_client):
    fake_http.reply(None, 404)

    assert RoleService(kc_client).get_realm_role("demo", "nope") is None


def test_identity_provider_mappers_of_unknown_alias_raise(fake_http, kc_client):
    fake_http.reply(None, 404)

    with pytest.raises(ResourceNotFoundError):
        IdentityProviderService(kc_client).get_identity_provider_mappers("demo", "nope")


# ============================================================================
# Clients
# ============================================================================

def test_create_client_splits_redirect_uris(fake_http, kc_client):
    ClientService(kc_client).create_client("demo", "portal", "https://a/cb, https://b/cb,")

    payload = fake_http.calls[0][2]["json"]
    assert payload["redirectUris"] == ["https://a/cb", "https://b/cb"]
    assert payload["publicClient"] is False


def test_find_client_by_client_id_returns_first_or_none(fake_http, kc_client):
    fake_http.reply([{"id": "uuid-1", "clientId": "portal"}]).reply([])
    service = ClientService(kc_client)

    assert service.find_client_by_client_id("demo", "portal")["id"] == "uuid-1"
    assert service.find_client_by_client_id("demo", "other") is None


def test_generate_client_secret_returns_value(fake_http, kc_client):
    fake_http.reply({"type": "secret", "value": "s3cr3t"})

    assert ClientService(kc_client).generate_client_secret("demo", "uuid-1") == "s3cr3t"
    assert fake_http.calls[0][:2] == ("POST", f"{BASE}/clients/uuid-1/client-secret")


def test_generate_client_secret_for_public_client_fails(fake_http, kc_client):
    fake_http.reply({"type": "secret"})

    with pytest.raises(ValueError):
        ClientService(kc_client).generate_client_secret("demo", "uuid-1")


# ============================================================================
# Groups
# ============================================================================

def test_create_subgroup_posts_to_parent_children(fake_http, kc_client):
    GroupService(kc_client).create_subgroup("demo", "g1", "team-a")

    method, url, kwargs = fake_http.calls[0]
    assert (method, url) == ("POST", f"{BASE}/groups/g1/children")
    assert kwargs["json"] == {"name": "team-a"}


# ============================================================================
# Authentication flows
# ============================================================================

def test_get_flow_filters_by_id(fake_http, kc_client):
    fake_http.reply([{"id": "f1", "alias": "browser"}, {"id": "f2", "alias": "direct grant"}])

    assert AuthenticationFlowService(kc_client).get_flow("demo", "f2")["alias"] == "direct grant"


def test_copy_flow_names_copy_after_requested_flow_id(fake_http, kc_client):
    fake_http.reply([{"id": "f1", "alias": "browser", "providerId": "basic-flow", "topLevel": True}])

    message = AuthenticationFlowService(kc_client).copy_flow("demo", "f1")

    method, url, kwargs = fake_http.calls[1]
    assert (method, url) == ("POST", f"{BASE}/authentication/flows")
    assert kwargs["json"] == {"alias": "f1-copy", "providerId": "basic-flow", "topLevel": True}
    assert message == "Successfully created authentication flow: f1-copy"


def test_copy_of_unknown_flow_raises(fake_http, kc_client):
    fake_http.reply([])

    with pytest.raises(AuthenticationFlowNotFoundError):
        AuthenticationFlowService(kc_client).copy_flow("demo", "missing")
    assert len(fake_http.calls) == 1


def test_update_flow_execution_puts_representation(fake_http, kc_client):
    execution = {"id": "e1", "requirement": "REQUIRED", "displayName": "OTP Form"}

    message = AuthenticationFlowService(kc_client).update_flow_execution("demo", "browser", execution)

    method, url, kwargs = fake_http.calls[0]
    assert (method, url) == ("PUT", f"{BASE}/authentication/flows/browser/executions")
    assert kwargs["json"] == execution
    assert message.endswith("OTP Form")


def test_update_flow_execution_without_display_name_reports_id(fake_http, kc_client):
    message = AuthenticationFlowService(kc_client).update_flow_execution(
        "demo", "browser", {"id": "e7", "requirement": "DISABLED"}
    )

    assert message == "Successfully updated flow execution: e7"
