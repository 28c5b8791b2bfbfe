"""Pytest shared fixtures."""
import pathlib
import sys
from unittest.mock import MagicMock

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests

from app.config import AppConfig
from app.core.operations import Collaborators, Domain, OperationDispatcher
from app.core.operations.collaborators import SERVICE_TYPES


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def _block_network(monkeypatch, request):
    """
    Prevent unit tests from reaching Keycloak or the forum.

    Integration tests are explicitly marked with @pytest.mark.integration and
    are allowed to perform real HTTP calls by skipping this fixture.
    """
    if request.node.get_closest_marker("integration"):
        return

    def _refuse(method, url, *args, **kwargs):
        raise AssertionError(f"Unexpected network call: {method} {url}")

    monkeypatch.setattr(requests, "request", _refuse)


# ─────────────────────────────────────────────────────────────────────────────
# Collaborators
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture
def collaborators():
    """One MagicMock per domain, restricted to the real service's methods."""
    services = {domain.value: MagicMock(spec=service_type) for domain, service_type in SERVICE_TYPES.items()}
    return Collaborators(**services)


@pytest.fixture
def dispatcher(collaborators):
    return OperationDispatcher(collaborators)


@pytest.fixture
def all_calls(collaborators):
    """Return every method call recorded on every collaborator mock."""
    def _calls():
        calls = []
        for domain in Domain:
            calls.extend(collaborators.for_domain(domain).method_calls)
        return calls
    return _calls


# ─────────────────────────────────────────────────────────────────────────────
# Keycloak HTTP fakes
# ─────────────────────────────────────────────────────────────────────────────
class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload=None, status_code: int = 200, url: str = "http://kc/"):
        self._payload = payload
        self.status_code = status_code
        self.url = url
        self.text = "" if payload is None else str(payload)

    def json(self):
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


@pytest.fixture
def fake_http(monkeypatch):
    """Route requests.request to a queue of canned responses and record each call."""
    class _Recorder:
        def __init__(self):
            self.calls = []
            self.responses = []

        def reply(self, payload=None, status_code: int = 200):
            self.responses.append(FakeResponse(payload, status_code))
            return self

        def __call__(self, method, url, **kwargs):
            self.calls.append((method, url, kwargs))
            if not self.responses:
                return FakeResponse(None, 204, url)
            response = self.responses.pop(0)
            response.url = url
            return response

    recorder = _Recorder()
    monkeypatch.setattr(requests, "request", recorder)
    return recorder


@pytest.fixture
def app_config():
    return AppConfig(
        keycloak_url="http://kc",
        keycloak_realm="master",
        dev_user=None,
        dev_password=None,
        discourse_url="http://forum",
        request_timeout=2,
        log_level="DEBUG",
    )
