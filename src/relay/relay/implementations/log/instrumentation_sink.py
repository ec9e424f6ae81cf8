# ABOUTME: Loguru-backed instrumentation sink
# ABOUTME: Writes lifecycle events as structured log records for centralized logging

from loguru import logger

from relay.interfaces.observability import AbstractInstrumentationSink
from relay.models.observability import InstrumentationEventName
from relay.models.types import EventPayload


class LogInstrumentationSink(AbstractInstrumentationSink):
    """
    Instrumentation sink writing events through loguru.

    The payload is bound to the record's ``extra`` so structured (JSON) log
    handlers carry the full event. The aggregate request event is logged at
    ``request_level``; the finer-grained lifecycle events at ``event_level``.
    """

    def __init__(self, request_level: str = "INFO", event_level: str = "DEBUG"):
        """
        Args:
            request_level: Log level of ``request.relay`` events.
            event_level: Log level of start/finish events.
        """
        self.request_level = request_level
        self.event_level = event_level
        self._logger = logger.bind(name=__name__)

    async def publish(self, name: str, payload: EventPayload) -> None:
        if name == InstrumentationEventName.REQUEST.value:
            breakdown = ", ".join(
                f"{entry['name']}={entry.get('duration_ms') or 0.0:.2f}ms" for entry in payload.get("chain", [])
            )
            self._logger.bind(event=name, payload=dict(payload)).log(
                self.request_level,
                f"{payload.get('chain_id')} -> {payload.get('status')} "
                f"in {payload.get('duration_ms') or 0.0:.2f}ms [{breakdown}]",
            )
            return

        subject = payload.get("middleware_name") or payload.get("chain_id")
        self._logger.bind(event=name, payload=dict(payload)).log(self.event_level, f"{name} {subject}")
