# ABOUTME: Models package initialization
# ABOUTME: Exports all relay data models and related classes

# Middleware models
from .middleware import (
    METADATA_KEY,
    RESERVED_KEYS,
    MiddlewareSpec,
    Chain,
    ExecutionContext,
    Response,
    MiddlewareTiming,
    RequestBenchmark,
)

# Observability models
from .observability import InstrumentationEvent, InstrumentationEventName

# Type definitions
from .types import EventPayload, RequestMetadata

__all__ = [
    # Middleware
    "METADATA_KEY",
    "RESERVED_KEYS",
    "MiddlewareSpec",
    "Chain",
    "ExecutionContext",
    "Response",
    "MiddlewareTiming",
    "RequestBenchmark",
    # Observability
    "InstrumentationEvent",
    "InstrumentationEventName",
    # Types
    "EventPayload",
    "RequestMetadata",
]
