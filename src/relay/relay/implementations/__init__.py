# ABOUTME: Relay implementations package exports
# ABOUTME: Contains concrete implementations of relay interfaces

"""
Relay Implementations

This module contains the concrete chain builder, handler and instrumentation sinks.
"""

from .factory import create_instrumentation_sink
from .log import LogInstrumentationSink
from .noop import NoOpInstrumentationSink
from .memory import ChainBuilder, MiddlewareHandler, default_chain_builder, InMemoryInstrumentationSink

__all__ = [
    "create_instrumentation_sink",
    "LogInstrumentationSink",
    "NoOpInstrumentationSink",
    "ChainBuilder",
    "MiddlewareHandler",
    "default_chain_builder",
    "InMemoryInstrumentationSink",
]
