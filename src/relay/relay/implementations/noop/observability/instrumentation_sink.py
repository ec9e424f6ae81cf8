# ABOUTME: NoOp instrumentation sink implementation
# ABOUTME: Accepts and discards every event

from relay.interfaces.observability import AbstractInstrumentationSink
from relay.models.types import EventPayload


class NoOpInstrumentationSink(AbstractInstrumentationSink):
    """
    No-operation implementation of AbstractInstrumentationSink.

    Satisfies the interface contract while discarding every event. Used when
    no observability backend is configured and as a performance baseline.
    """

    async def publish(self, name: str, payload: EventPayload) -> None:
        return None
