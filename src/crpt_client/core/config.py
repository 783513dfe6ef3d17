# src/crpt_client/core/config.py
"""
Configuration schema and loading for the registry client.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from datetime import timedelta
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

DEFAULT_BASE_URL = "https://ismp.crpt.ru/api/v3"
CREATE_DOCUMENTS_PATH = "/lk/documents/create"


class RateLimitSettings(BaseModel):
    """Quota applied to outbound registry requests.

    Example YAML:
        rate_limit:
          enabled: true
          capacity: 4
          refill_period_seconds: 3
    """

    model_config = {"frozen": True}

    enabled: bool = Field(
        default=True, description="Enable rate limiting for registry calls"
    )
    capacity: int = Field(
        default=4, gt=0, description="Maximum requests per refill period"
    )
    refill_period_seconds: float = Field(
        default=3.0, gt=0, description="Length of one refill period in seconds"
    )

    @property
    def refill_period(self) -> timedelta:
        return timedelta(seconds=self.refill_period_seconds)


class TransportSettings(BaseModel):
    """HTTP transport configuration."""

    model_config = {"frozen": True}

    base_url: str = Field(
        default=DEFAULT_BASE_URL, description="Registry API base URL"
    )
    timeout_seconds: float = Field(
        default=30.0, gt=0, description="Per-request timeout"
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got '{v}'")
        return v.rstrip("/")

    @property
    def create_documents_url(self) -> str:
        return self.base_url + CREATE_DOCUMENTS_PATH


class LoggingSettings(BaseModel):
    """Logging output configuration."""

    model_config = {"frozen": True}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    json_output: bool = Field(
        default=False, description="Render log events as JSON lines"
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v


class ClientSettings(BaseModel):
    """Top-level client configuration.

    Every section has defaults, so an empty settings file is valid.
    """

    model_config = {"frozen": True}

    rate_limit: RateLimitSettings = Field(
        default_factory=RateLimitSettings,
        description="Request quota configuration",
    )
    transport: TransportSettings = Field(
        default_factory=TransportSettings,
        description="HTTP transport configuration",
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )


def load_settings(config_path: Path) -> ClientSettings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (CRPT_*) - highest priority
    2. Config file (settings.yaml)
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: CRPT_RATE_LIMIT__CAPACITY for nested keys.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated ClientSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="CRPT",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; pydantic fields are lowercase
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {
        k.lower(): _lower_keys(v)
        for k, v in dynaconf_settings.as_dict().items()
        if k not in internal_keys
    }
    return ClientSettings(**raw_config)


def _lower_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in value.items()}
    return value
