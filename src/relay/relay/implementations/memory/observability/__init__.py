# ABOUTME: Memory-based observability implementations package
# ABOUTME: Provides the recording instrumentation sink

from .instrumentation_sink import InMemoryInstrumentationSink, RecordedEvent

__all__ = ["InMemoryInstrumentationSink", "RecordedEvent"]
