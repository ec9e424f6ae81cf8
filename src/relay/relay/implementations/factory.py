# ABOUTME: Factory for instrumentation sinks selected by configuration
# ABOUTME: Maps INSTRUMENTATION_SINK names to sink implementations

from typing import Callable, Dict, Optional

from relay.exceptions import ConfigurationException
from relay.interfaces.observability import AbstractInstrumentationSink

from .log import LogInstrumentationSink
from .noop import NoOpInstrumentationSink

_SINKS: Dict[str, Callable[[], AbstractInstrumentationSink]] = {
    "noop": NoOpInstrumentationSink,
    "log": LogInstrumentationSink,
}


def create_instrumentation_sink(name: Optional[str] = None) -> AbstractInstrumentationSink:
    """
    Create the sink named ``name``.

    Args:
        name: Sink name; defaults to the configured ``INSTRUMENTATION_SINK``.

    Raises:
        ConfigurationException: If the name is unknown.
    """
    if name is None:
        from relay.config import get_settings

        name = get_settings().INSTRUMENTATION_SINK
    try:
        return _SINKS[name.lower()]()
    except KeyError:
        raise ConfigurationException(
            f"Unknown instrumentation sink {name!r}; expected one of {sorted(_SINKS)}",
            code="UNKNOWN_SINK",
            details={"sink": name},
        ) from None
