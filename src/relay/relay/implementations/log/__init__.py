# ABOUTME: Log-based implementations package
# ABOUTME: Provides the loguru-backed instrumentation sink

from .instrumentation_sink import LogInstrumentationSink

__all__ = ["LogInstrumentationSink"]
