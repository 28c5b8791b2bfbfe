"""Configuration module for the Keycloak operation gateway."""
from .settings import AppConfig, load_settings

__all__ = ["AppConfig", "load_settings"]
