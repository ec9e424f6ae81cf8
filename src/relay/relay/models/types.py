# ABOUTME: Common type definitions shared across the relay framework
# ABOUTME: Provides TypedDict classes and type aliases for event payloads

from typing import Any, Mapping, TypedDict

# Payload handed to instrumentation sinks
EventPayload = Mapping[str, Any]


class RequestMetadata(TypedDict, total=False):
    """Serialized view of a request used in instrumentation events.

    All fields are optional: the request object is opaque to the framework and
    only the attributes it actually exposes are included.
    """

    method: str
    path: str
    headers: dict[str, str]
