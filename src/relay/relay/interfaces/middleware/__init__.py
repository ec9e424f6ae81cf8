# ABOUTME: Middleware interfaces package for the relay framework
# ABOUTME: Exports abstract interfaces for middleware, chain building and handlers

from .middleware import AbstractMiddleware
from .chain_builder import AbstractChainBuilder
from .handler import AbstractHandler

__all__ = ["AbstractMiddleware", "AbstractChainBuilder", "AbstractHandler"]
