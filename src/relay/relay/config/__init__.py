# ABOUTME: Configuration package initialization
# ABOUTME: Exports configuration classes and utilities for the relay framework

from relay.config.settings import RelaySettings, get_settings
from relay.config.logging import (
    LoggerConfig,
    LoggingSettings,
    setup_logging,
    get_logger,
    configure_for_testing,
    configure_for_production,
    configure_for_development,
)

__all__ = [
    "RelaySettings",
    "get_settings",
    "LoggerConfig",
    "LoggingSettings",
    "setup_logging",
    "get_logger",
    "configure_for_testing",
    "configure_for_production",
    "configure_for_development",
]
