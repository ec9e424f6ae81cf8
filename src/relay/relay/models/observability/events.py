# ABOUTME: Instrumentation event names and payload model
# ABOUTME: Describes the lifecycle events a handler publishes around chain execution

from datetime import datetime, UTC
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class InstrumentationEventName(str, Enum):
    """
    Names of the lifecycle events published by a handler.

    ``REQUEST`` is the aggregate event published once the chain has produced
    its response; it carries the per-middleware duration breakdown.
    """

    HANDLER_START = "start_handler.relay"
    HANDLER_FINISH = "finish_handler.relay"
    MIDDLEWARE_START = "start_middleware.relay"
    MIDDLEWARE_FINISH = "finish_middleware.relay"
    REQUEST = "request.relay"


class InstrumentationEvent(BaseModel):
    """
    One structured lifecycle event.

    Start events only carry ``started_at``; finish events add ``finished_at``,
    ``duration_ms`` and either the response ``status`` or the ``exception``
    that aborted the activation.
    """

    event: InstrumentationEventName = Field(description="Name of the event")
    chain_id: str = Field(description="Identity of the chain being executed")
    context_id: str = Field(description="Identity of the per-request execution context")
    middleware_name: Optional[str] = Field(default=None, description="Middleware the event is about, if any")
    position: Optional[int] = Field(default=None, description="Index of that middleware in the chain")
    request: Dict[str, Any] = Field(default_factory=dict, description="Serialized request metadata")
    started_at: datetime = Field(default_factory=lambda: datetime.now(UTC), description="Start timestamp")
    finished_at: Optional[datetime] = Field(default=None, description="Finish timestamp")
    duration_ms: Optional[float] = Field(default=None, description="Duration in milliseconds")
    status: Optional[int] = Field(default=None, description="Status of the produced response")
    exception: Optional[Dict[str, str]] = Field(default=None, description="Type and message of a raised exception")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Metadata logged by middleware")
    chain: List[Dict[str, Any]] = Field(default_factory=list, description="Per-middleware breakdown (request event)")

    def to_payload(self) -> Dict[str, Any]:
        """Dump the event to the mapping handed to sinks, without unset optional fields."""
        payload = self.model_dump(exclude_none=True)
        payload["event"] = self.event.value
        return payload
