# ABOUTME: Best-effort publisher of instrumentation events to a sink
# ABOUTME: Shields request processing from failures in event consumers

from loguru import logger

from relay.interfaces.observability import AbstractInstrumentationSink
from relay.models.observability import InstrumentationEvent


class Instrumenter:
    """
    Publishes ``InstrumentationEvent`` models to a sink.

    Publishing never alters control flow: when the sink raises, the failure is
    logged and the event is dropped.
    """

    def __init__(self, sink: AbstractInstrumentationSink, enabled: bool = True):
        """
        Args:
            sink: Destination of the events.
            enabled: When False, ``publish`` does nothing.
        """
        self.sink = sink
        self.enabled = enabled
        self._logger = logger.bind(name=__name__)
        self._dropped = 0

    @property
    def dropped_events(self) -> int:
        """Number of events lost to sink failures."""
        return self._dropped

    async def publish(self, event: InstrumentationEvent) -> None:
        if not self.enabled:
            return
        try:
            await self.sink.publish(event.event.value, event.to_payload())
        except Exception as e:
            self._dropped += 1
            self._logger.opt(exception=e).warning(
                f"Instrumentation sink {self.sink.__class__.__name__} failed on {event.event.value} "
                f"for chain {event.chain_id}; event dropped"
            )
