"""Core configuration - centralized config for the fieldproof package.

All environment-based configuration should flow through this module.
This provides a single source of truth and consistent defaults.

Usage:
    from fieldproof.core.config import get_config
    config = get_config()

    # Access settings
    schemes = config.scheme_set
    log_level = config.log_level
"""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigException


class CoreSettings(BaseSettings):
    """Core configuration settings for fieldproof.

    Settings can be configured via environment variables with the
    FIELDPROOF_ prefix, or from a local ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # LOGGING SETTINGS
    # ==========================================================================

    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
        validation_alias="FIELDPROOF_LOG_LEVEL",
    )
    log_format: str = Field(
        default="",
        description="Log format: 'json', 'text', or '' (auto-detect)",
        validation_alias="FIELDPROOF_LOG_FORMAT",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (optional)",
        validation_alias="FIELDPROOF_LOG_FILE",
    )

    # ==========================================================================
    # VERIFICATION SETTINGS
    # ==========================================================================

    accepted_schemes: str = Field(
        default="http,https",
        description="Comma-separated URL schemes eligible for verification",
        validation_alias="FIELDPROOF_ACCEPTED_SCHEMES",
    )
    invisible_class: str = Field(
        default="invisible",
        description="Class token marking decoration spans hidden from sighted readers",
        validation_alias="FIELDPROOF_INVISIBLE_CLASS",
    )

    # ==========================================================================
    # PROFILE FIELD SETTINGS
    # ==========================================================================

    local_value_limit: int = Field(
        default=255,
        gt=0,
        description="Maximum characters kept for a local field name or value",
        validation_alias="FIELDPROOF_LOCAL_VALUE_LIMIT",
    )
    remote_value_limit: int = Field(
        default=2047,
        gt=0,
        description="Maximum characters kept for a remote field name or value",
        validation_alias="FIELDPROOF_REMOTE_VALUE_LIMIT",
    )
    max_fields: int = Field(
        default=4,
        gt=0,
        description="Maximum number of fields on a profile",
        validation_alias="FIELDPROOF_MAX_FIELDS",
    )

    @field_validator("accepted_schemes")
    @classmethod
    def _require_schemes(cls, value: str) -> str:
        if not any(part.strip() for part in value.split(",")):
            raise ValueError("at least one URL scheme must be accepted")
        return value

    @field_validator("invisible_class")
    @classmethod
    def _require_class_token(cls, value: str) -> str:
        value = value.strip()
        if not value or any(c.isspace() for c in value):
            raise ValueError("invisible_class must be a single class token")
        return value

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def scheme_set(self) -> frozenset[str]:
        """Accepted schemes, lower-cased."""
        return frozenset(part.strip().lower() for part in self.accepted_schemes.split(",") if part.strip())

    def value_limit(self, is_local: bool) -> int:
        """Character limit for field names and values of a local or remote identity."""
        return self.local_value_limit if is_local else self.remote_value_limit


# ==========================================================================
# GLOBAL CONFIG INSTANCE (lazy loaded)
# ==========================================================================

_config: CoreSettings | None = None


def get_config() -> CoreSettings:
    """Get the global configuration instance.

    Returns:
        The singleton CoreSettings instance.

    Raises:
        ConfigException: If the environment holds invalid settings.
    """
    global _config
    if _config is None:
        try:
            _config = CoreSettings()
        except ValidationError as e:
            invalid = [".".join(str(loc) for loc in err["loc"]) for err in e.errors()]
            raise ConfigException(f"Invalid configuration: {e.error_count()} error(s)", invalid_settings=invalid) from e
    return _config


def clear_config_cache() -> None:
    """Clear the config cache. Useful for testing."""
    global _config
    _config = None
