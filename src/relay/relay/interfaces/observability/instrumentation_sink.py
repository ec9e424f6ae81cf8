# ABOUTME: Abstract instrumentation sink interface for lifecycle events
# ABOUTME: Defines the publish contract handlers use to emit tracing and profiling data

from abc import ABC, abstractmethod

from relay.models.types import EventPayload


class AbstractInstrumentationSink(ABC):
    """
    Abstract base class for instrumentation event consumers.

    A sink receives every lifecycle event a handler publishes: handler and
    middleware start/finish events plus the aggregate request event. Delivery
    mechanism and wire format are up to the implementation (in-memory
    recording, structured logs, a tracing backend).

    Sinks are called best-effort: an exception raised from ``publish`` is
    logged by the caller and never reaches the request being processed.
    """

    @abstractmethod
    async def publish(self, name: str, payload: EventPayload) -> None:
        """
        Publish one event.

        Args:
            name: Event name, e.g. ``start_middleware.relay``.
            payload: Structured event data: timestamps, chain identity,
                middleware identity, request metadata and durations.
        """
        pass
