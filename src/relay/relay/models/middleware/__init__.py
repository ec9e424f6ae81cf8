# ABOUTME: Middleware models package for the relay framework
# ABOUTME: Exports middleware spec, chain, context, response and timing models

from .spec import METADATA_KEY, REQUEST_KEY, RESERVED_KEYS, MiddlewareSpec
from .chain import Chain
from .context import ExecutionContext
from .response import Response
from .benchmark import MiddlewareTiming, RequestBenchmark

__all__ = [
    "METADATA_KEY",
    "REQUEST_KEY",
    "RESERVED_KEYS",
    "MiddlewareSpec",
    "Chain",
    "ExecutionContext",
    "Response",
    "MiddlewareTiming",
    "RequestBenchmark",
]
