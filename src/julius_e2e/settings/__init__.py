"""Layered configuration (TOML files + ``JULIUS_E2E_*`` env vars)."""

from julius_e2e.settings.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
