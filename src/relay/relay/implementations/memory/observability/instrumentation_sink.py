# ABOUTME: In-memory implementation of AbstractInstrumentationSink for testing and development
# ABOUTME: Records every published event in order with optional failure simulation

import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Any, Deque, Dict, List, Optional

from relay.interfaces.observability import AbstractInstrumentationSink
from relay.models.types import EventPayload


@dataclass
class RecordedEvent:
    """One event received by the sink."""

    name: str
    payload: Dict[str, Any]
    received_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class InMemoryInstrumentationSink(AbstractInstrumentationSink):
    """
    In-memory implementation of AbstractInstrumentationSink.

    Keeps the most recent events in publish order, which makes it the sink of
    choice for asserting on lifecycle ordering in tests. ``fail_on`` makes
    ``publish`` raise for the given event names to exercise best-effort
    delivery.
    """

    def __init__(self, max_events: int = 10000, fail_on: Optional[set[str]] = None):
        """
        Args:
            max_events: Maximum number of events kept; the oldest are dropped first.
            fail_on: Event names for which ``publish`` raises RuntimeError.
        """
        self.max_events = max_events
        self.fail_on = set(fail_on or ())
        self._events: Deque[RecordedEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    async def publish(self, name: str, payload: EventPayload) -> None:
        if name in self.fail_on:
            raise RuntimeError(f"Simulated instrumentation failure for {name}")
        with self._lock:
            self._events.append(RecordedEvent(name=name, payload=dict(payload)))

    @property
    def events(self) -> List[RecordedEvent]:
        with self._lock:
            return list(self._events)

    def get_events(self, name: Optional[str] = None, middleware_name: Optional[str] = None) -> List[RecordedEvent]:
        """
        Get recorded events, optionally filtered.

        Args:
            name: Only events with this name.
            middleware_name: Only events about this middleware.
        """
        events = self.events
        if name is not None:
            events = [event for event in events if event.name == name]
        if middleware_name is not None:
            events = [event for event in events if event.payload.get("middleware_name") == middleware_name]
        return events

    def names(self) -> List[str]:
        """Names of the recorded events, in publish order."""
        return [event.name for event in self.events]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def __len__(self) -> int:
        return len(self._events)
