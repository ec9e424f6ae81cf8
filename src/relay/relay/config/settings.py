# ABOUTME: Main configuration composition for the relay framework.
# ABOUTME: Assembles all configuration classes into a single, accessible object.

from functools import lru_cache

from ._base import BaseRelaySettings


class RelaySettings(BaseRelaySettings):
    """Represents the complete, composed configuration for the framework.

    This class is the final aggregator for all configuration settings and is
    designed to be extended by applications through inheritance.

    The `get_settings` function provides a singleton instance of this class.
    """

    pass


@lru_cache
def get_settings() -> RelaySettings:
    """Provides a singleton instance of the framework settings.

    The cache ensures environment variables and `.env` files are read once,
    giving every handler the same configuration state.

    Returns:
        A single, cached instance of the RelaySettings class.
    """
    return RelaySettings()
