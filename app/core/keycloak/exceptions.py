"""Keycloak-specific exceptions for error handling."""


class KeycloakError(Exception):
    """Base exception for all Keycloak operations."""
    pass


class KeycloakAPIError(KeycloakError):
    """HTTP error from Keycloak Admin API.

    Attributes:
        status_code: HTTP status code
        message: Error message from response
        endpoint: API endpoint that failed
    """

    def __init__(self, status_code: int, message: str, endpoint: str):
        self.status_code = status_code
        self.message = message
        self.endpoint = endpoint
        super().__init__(f"[{status_code}] {endpoint}: {message}")


class AuthenticationRequiredError(KeycloakError):
    """No caller token and no development credentials are available."""
    pass


class NotFoundError(KeycloakError):
    """A referenced entity does not exist.

    The operation dispatcher reports every subclass as ``NotFound``.
    """
    pass


class ResourceNotFoundError(KeycloakAPIError, NotFoundError):
    """Keycloak answered 404 for the requested resource."""
    pass


class UserNotFoundError(NotFoundError):
    """User lookup failed - username does not exist."""
    pass


class AuthenticationFlowNotFoundError(NotFoundError):
    """Authentication flow does not exist in realm."""
    pass
