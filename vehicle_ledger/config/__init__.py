"""Configuration package."""

from vehicle_ledger.config.settings import (
    AppSettings,
    AuditSettings,
    IdentitySettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "AuditSettings",
    "IdentitySettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
