# ABOUTME: Base configuration classes for the relay framework
# ABOUTME: Provides fundamental configuration settings and validation logic

from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class BaseRelaySettings(BaseSettings):
    """Defines the foundational configuration for the relay framework.

    Settings are loaded with `pydantic-settings` from ``RELAY_``-prefixed
    environment variables or a `.env` file. They cover the framework's own
    concerns only (logging, chain seeding, instrumentation); the host
    application's configuration is its own business.

    Attributes:
        APP_NAME: Name used to identify the application in logs and events.
        ENV: The runtime environment.
        DEBUG: Enables verbose diagnostics.
        LOG_LEVEL: The minimum level for log messages to be processed.
        LOG_FORMAT: Structured (json) or human-readable (txt) log output.
        DEFAULT_SEED_KEYS: Context keys the caller always supplies before any middleware runs.
        INSTRUMENTATION_ENABLED: Whether handlers publish lifecycle events.
        INSTRUMENTATION_SINK: Sink used by handlers that were not given one explicitly.
        FILTERED_HEADERS: Request headers whose values are masked in event payloads.
    """

    # Application Identity
    APP_NAME: str = Field(
        default="Relay",
        description="The name of the application, used for identification in logs and events.",
    )

    # Environment Configuration
    ENV: Literal["development", "staging", "production"] = Field(
        default="development",
        description="The application's runtime environment.",
    )
    DEBUG: bool = Field(
        default=False,
        description="Flag to enable or disable debug mode. Should be False in production.",
    )

    # Logging Configuration
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="The minimum level for log messages to be processed.",
    )
    LOG_FORMAT: Literal["json", "txt"] = Field(
        default="txt",
        description="The output format for logs. Use 'json' for production environments.",
    )

    # Chain Configuration
    DEFAULT_SEED_KEYS: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["request"],
        description="Context keys available before the first middleware runs.",
    )

    # Instrumentation
    INSTRUMENTATION_ENABLED: bool = Field(
        default=True,
        description="Whether handlers publish lifecycle events to their sink.",
    )
    INSTRUMENTATION_SINK: Literal["noop", "log"] = Field(
        default="noop",
        description="Default sink for handlers created without an explicit one.",
    )
    FILTERED_HEADERS: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["authorization", "cookie"],
        description="Header names whose values are replaced with [FILTERED] in event payloads.",
    )

    model_config = SettingsConfigDict(
        env_prefix="RELAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("ENV", mode="before")
    @classmethod
    def validate_env_case_insensitive(cls, v: str) -> str:
        """Validate ENV field with case-insensitive mapping.

        Accepts common environment aliases and normalizes them:
        - dev, develop -> development
        - prod -> production
        - stage -> staging
        """
        if isinstance(v, str):
            v_lower = v.lower().strip()
            env_mapping = {
                "dev": "development",
                "develop": "development",
                "development": "development",
                "stage": "staging",
                "staging": "staging",
                "prod": "production",
                "production": "production",
            }
            return env_mapping.get(v_lower, v_lower)
        return v

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def validate_log_level_case_insensitive(cls, v: str) -> str:
        """Validate LOG_LEVEL field with case-insensitive normalization."""
        if isinstance(v, str):
            return v.upper().strip()
        return v

    @field_validator("LOG_FORMAT", "INSTRUMENTATION_SINK", mode="before")
    @classmethod
    def validate_choice_case_insensitive(cls, v: str) -> str:
        """Normalize LOG_FORMAT and INSTRUMENTATION_SINK, accepting a few aliases."""
        if isinstance(v, str):
            v_lower = v.lower().strip()
            aliases = {
                "structured": "json",
                "text": "txt",
                "none": "noop",
                "logging": "log",
            }
            return aliases.get(v_lower, v_lower)
        return v

    @field_validator("DEFAULT_SEED_KEYS", mode="before")
    @classmethod
    def validate_seed_keys(cls, v):
        """Accept a comma-separated string and drop blank or repeated names."""
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, (list, tuple, set, frozenset)):
            keys: list[str] = []
            for key in v:
                key = str(key).strip()
                if key and key not in keys:
                    keys.append(key)
            if "request" not in keys:
                keys.insert(0, "request")
            return keys
        return v

    @field_validator("FILTERED_HEADERS", mode="before")
    @classmethod
    def validate_filtered_headers(cls, v):
        """Accept a comma-separated string; header names are compared lower-cased."""
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, (list, tuple, set, frozenset)):
            return [str(header).strip().lower() for header in v if str(header).strip()]
        return v
