# ABOUTME: In-memory implementations package
# ABOUTME: Chain building, execution and recording sink, all held in process memory

from .middleware import ChainBuilder, MiddlewareHandler, default_chain_builder
from .observability import InMemoryInstrumentationSink

__all__ = [
    "ChainBuilder",
    "MiddlewareHandler",
    "default_chain_builder",
    "InMemoryInstrumentationSink",
]
