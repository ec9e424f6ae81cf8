# ABOUTME: Relay interfaces package exports
# ABOUTME: Exports all abstract interfaces for middleware and observability

# Observability interfaces
from .observability import AbstractInstrumentationSink

# Middleware interfaces
from .middleware import AbstractMiddleware, AbstractChainBuilder, AbstractHandler

__all__ = [
    "AbstractInstrumentationSink",
    "AbstractMiddleware",
    "AbstractChainBuilder",
    "AbstractHandler",
]
