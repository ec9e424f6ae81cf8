# ABOUTME: NoOp observability implementations package
# ABOUTME: Provides the discarding instrumentation sink

from .instrumentation_sink import NoOpInstrumentationSink

__all__ = ["NoOpInstrumentationSink"]
