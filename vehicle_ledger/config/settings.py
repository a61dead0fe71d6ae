"""
Configuration Management for Vehicle Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

All tunables of the identifier, validation and audit layers live here so a
deployment can change placeholder labels or the audit sink without code
changes.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class IdentitySettings(BaseSettings):
    """Identifier normalization and vehicle placeholder configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_IDS_",
        extra="ignore"
    )

    temp_id_prefix: str = Field(
        default="temp",
        min_length=1,
        description="Prefix of synthesized temporary identifiers"
    )
    short_id_length: int = Field(
        default=8,
        ge=1,
        le=64,
        description="How many identifier characters go into a fallback vehicle name"
    )
    name_fallback: Literal["short_id", "unknown"] = Field(
        default="short_id",
        description="Fallback label policy for vehicles without a usable name"
    )
    unknown_vehicle_label: str = Field(
        default="Unknown Vehicle",
        min_length=1,
        description="Label used when no identity-derived name is possible"
    )


class AuditSettings(BaseSettings):
    """Audit trail configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_AUDIT_",
        extra="ignore"
    )

    enabled: bool = Field(
        default=True,
        description="Emit audit events for repairs applied to records"
    )
    log_path: Optional[str] = Field(
        default=None,
        description="Path of the JSON-lines audit file (in-memory only if unset)"
    )
    max_recent_events: int = Field(
        default=100,
        ge=1,
        le=10000,
        description="Upper bound for recent-event queries"
    )

    @field_validator('log_path')
    @classmethod
    def validate_log_path(cls, v: Optional[str]) -> Optional[str]:
        """Warn if the audit directory doesn't exist (it is created on first write)."""
        if v and not Path(v).parent.exists():
            import warnings
            warnings.warn(
                f"Audit log directory {Path(v).parent} does not exist yet. "
                "It will be created on the first write."
            )
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Root log level"
    )
    log_format: Literal["json", "console"] = Field(
        default="json",
        description="Structured log renderer"
    )

    # Money
    base_currency: str = Field(
        default="USD",
        min_length=3,
        max_length=3,
        description="Currency used for cross-currency totals"
    )
    max_entry_amount: float = Field(
        default=1000000.0,
        gt=0,
        description="Maximum reasonable entry amount (for sanity checking)"
    )
    future_date_tolerance_days: int = Field(
        default=1,
        ge=0,
        description="How many days in the future an entry date can be"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator('base_currency')
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return v.strip().upper()


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def identity(self) -> IdentitySettings:
        return IdentitySettings()

    @property
    def audit(self) -> AuditSettings:
        return AuditSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a
    `<setting_name>_error` entry for each group that failed to load.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    for name in ("identity", "audit", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
