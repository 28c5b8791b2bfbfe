"""Low-level HTTP client for Keycloak Admin API.

Handles authentication, token management, and HTTP operations.
"""
from __future__ import annotations
import logging
from typing import Optional, Dict, Any
from datetime import datetime, timedelta

import requests

from .exceptions import KeycloakAPIError, ResourceNotFoundError, AuthenticationRequiredError

REQUEST_TIMEOUT = 5

# Password-grant tokens are re-requested this long after issue
TOKEN_LIFETIME = timedelta(seconds=60)
TOKEN_REFRESH_LEEWAY = timedelta(seconds=10)

logger = logging.getLogger(__name__)


class KeycloakClient:
    """HTTP client for Keycloak Admin API.

    Two ways to authenticate:
    - ``from_token``: reuse the bearer token the caller presented (no refresh)
    - ``authenticate_admin``: password grant on ``admin-cli``, refreshed before expiry

    Usage:
        client = KeycloakClient("http://localhost:8180", timeout=5)
        client.authenticate_admin("admin", "password")
        users = client.get("/admin/realms/demo/users").json()
    """

    def __init__(self, base_url: str, timeout: float = REQUEST_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._token: Optional[str] = None
        self._token_expires_at: Optional[datetime] = None
        self._credentials: Dict[str, str] = {}

    @classmethod
    def from_token(cls, base_url: str, token: str, timeout: float = REQUEST_TIMEOUT) -> "KeycloakClient":
        """Build a client that forwards a caller-supplied bearer token as is."""
        client = cls(base_url, timeout=timeout)
        client._token = token
        return client

    def authenticate_admin(self, username: str, password: str, realm: str = "master") -> str:
        """Authenticate with a password grant and keep credentials for refresh.

        Args:
            username: Admin username
            password: Admin password
            realm: Authentication realm (default: master)

        Returns:
            Access token
        """
        self._credentials = {"username": username, "password": password, "realm": realm}
        self._token = self._request_password_token(username, password, realm)
        self._token_expires_at = datetime.now() + TOKEN_LIFETIME
        return self._token

    def _ensure_authenticated(self) -> None:
        if not self._token:
            raise AuthenticationRequiredError(
                "Not authenticated - use from_token() or authenticate_admin() first"
            )
        if self._token_expires_at is None or not self._credentials:
            return
        if datetime.now() >= self._token_expires_at - TOKEN_REFRESH_LEEWAY:
            logger.debug("Refreshing admin token for realm %s", self._credentials["realm"])
            self._token = self._request_password_token(
                self._credentials["username"],
                self._credentials["password"],
                self._credentials["realm"],
            )
            self._token_expires_at = datetime.now() + TOKEN_LIFETIME

    def request(self, method: str, path: str, **kwargs) -> requests.Response:
        """Execute an authenticated request against the admin API.

        Args:
            method: HTTP verb
            path: API endpoint path (e.g., "/admin/realms/demo/users")
            **kwargs: Passed through to ``requests.request`` (params, json, ...)

        Returns:
            Response object

        Raises:
            ResourceNotFoundError: On HTTP 404
            KeycloakAPIError: On any other HTTP error
        """
        self._ensure_authenticated()
        headers = kwargs.pop("headers", {})
        headers["Authorization"] = f"Bearer {self._token}"
        resp = requests.request(
            method,
            f"{self.base_url}{path}",
            headers=headers,
            timeout=self.timeout,
            **kwargs,
        )
        self._handle_error(resp)
        return resp

    def get(self, path: str, params: Optional[Dict[str, Any]] = None, **kwargs) -> requests.Response:
        return self.request("GET", path, params=params, **kwargs)

    def post(self, path: str, json: Any = None, **kwargs) -> requests.Response:
        return self.request("POST", path, json=json, **kwargs)

    def put(self, path: str, json: Any = None, **kwargs) -> requests.Response:
        return self.request("PUT", path, json=json, **kwargs)

    def delete(self, path: str, **kwargs) -> requests.Response:
        return self.request("DELETE", path, **kwargs)

    def _request_password_token(self, username: str, password: str, realm: str) -> str:
        url = f"{self.base_url}/realms/{realm}/protocol/openid-connect/token"
        data = {
            "grant_type": "password",
            "client_id": "admin-cli",
            "username": username,
            "password": password,
        }
        resp = requests.request("POST", url, data=data, timeout=self.timeout)
        if resp.status_code != 200:
            raise KeycloakAPIError(resp.status_code, resp.text, url)
        return resp.json()["access_token"]

    @staticmethod
    def _handle_error(resp: requests.Response) -> None:
        """Raise a typed error for any 4xx/5xx response."""
        if resp.status_code == 404:
            raise ResourceNotFoundError(resp.status_code, resp.text, resp.url)
        if resp.status_code >= 400:
            raise KeycloakAPIError(resp.status_code, resp.text, resp.url)


def build_client(
    base_url: str,
    bearer_token: Optional[str] = None,
    dev_user: Optional[str] = None,
    dev_password: Optional[str] = None,
    auth_realm: str = "master",
    timeout: float = REQUEST_TIMEOUT,
) -> KeycloakClient:
    """Create an admin client for the current caller.

    The caller's own token wins, so Keycloak enforces that caller's permissions.
    Development credentials are only a fallback for local use.

    Raises:
        AuthenticationRequiredError: If neither a token nor dev credentials exist
    """
    if bearer_token:
        return KeycloakClient.from_token(base_url, bearer_token, timeout=timeout)

    if dev_user and dev_password:
        logger.warning("Using development credentials for user %s (DEV MODE ONLY)", dev_user)
        client = KeycloakClient(base_url, timeout=timeout)
        client.authenticate_admin(dev_user, dev_password, auth_realm)
        return client

    raise AuthenticationRequiredError(
        "Authentication required. Provide 'Authorization: Bearer <token>' obtained from "
        f"{base_url}/realms/{auth_realm}/protocol/openid-connect/token "
        "(grant_type=password, client_id=admin-cli), or set KC_DEV_USER and "
        "KC_DEV_PASSWORD for local development."
    )
