# ABOUTME: Observability models package for the relay framework
# ABOUTME: Exports instrumentation event names and payload model

from .events import InstrumentationEvent, InstrumentationEventName

__all__ = ["InstrumentationEvent", "InstrumentationEventName"]
