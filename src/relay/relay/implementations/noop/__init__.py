# ABOUTME: NoOp implementations package
# ABOUTME: Contains no-operation implementations for testing and benchmarking

# Observability implementations
from .observability.instrumentation_sink import NoOpInstrumentationSink

__all__ = ["NoOpInstrumentationSink"]
