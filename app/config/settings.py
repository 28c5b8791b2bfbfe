"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from app.core.discourse import DEFAULT_DISCOURSE_URL
from app.core.keycloak.client import REQUEST_TIMEOUT


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = Path("/run/secrets") / secret_name

    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
            if secret_value:
                print(f"[settings] ✓ Loaded {secret_name} from /run/secrets")
                return secret_value
        except OSError as e:
            print(f"[settings] ✗ Failed to read /run/secrets/{secret_name}: {e}")

    if env_var:
        return os.getenv(env_var) or None

    return None


def _float_env(var_name: str, default: float) -> float:
    raw = os.environ.get(var_name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise RuntimeError(f"Environment variable {var_name} must be a number, got '{raw}'") from exc
    if value <= 0:
        raise RuntimeError(f"Environment variable {var_name} must be positive, got '{raw}'")
    return value


@dataclass
class AppConfig:
    """Application configuration container."""
    # Keycloak
    keycloak_url: str = "http://localhost:8180"
    keycloak_realm: str = "master"

    # Development fallback when the caller sends no token
    dev_user: Optional[str] = None
    dev_password: Optional[str] = None

    # Search
    discourse_url: str = DEFAULT_DISCOURSE_URL

    # Transport
    request_timeout: float = REQUEST_TIMEOUT

    log_level: str = "INFO"

    @property
    def dev_credentials_configured(self) -> bool:
        return bool(self.dev_user and self.dev_password)


def load_settings() -> AppConfig:
    """Load application settings from environment and /run/secrets."""
    cfg = AppConfig(
        keycloak_url=os.environ.get("KC_URL", "http://localhost:8180").rstrip("/"),
        keycloak_realm=os.environ.get("KC_REALM", "master"),
        dev_user=os.environ.get("KC_DEV_USER") or None,
        dev_password=_load_secret_from_file("kc_dev_password", "KC_DEV_PASSWORD"),
        discourse_url=os.environ.get("DISCOURSE_URL", DEFAULT_DISCOURSE_URL).rstrip("/"),
        request_timeout=_float_env("REQUEST_TIMEOUT", REQUEST_TIMEOUT),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    )

    if cfg.dev_credentials_configured:
        print(f"[settings] WARNING: development credentials configured for '{cfg.dev_user}'")

    return cfg
