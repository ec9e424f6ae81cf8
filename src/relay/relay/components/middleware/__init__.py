# ABOUTME: Middleware components package
# ABOUTME: Exports the spec builder and the process-wide middleware registry

from .registry import MiddlewareRegistry, middleware_registry
from .spec_builder import MiddlewareSpecBuilder

__all__ = ["MiddlewareRegistry", "middleware_registry", "MiddlewareSpecBuilder"]
