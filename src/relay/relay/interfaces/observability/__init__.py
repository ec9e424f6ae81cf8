# ABOUTME: Observability interfaces package
# ABOUTME: Exports the abstract instrumentation sink

from .instrumentation_sink import AbstractInstrumentationSink

__all__ = ["AbstractInstrumentationSink"]
