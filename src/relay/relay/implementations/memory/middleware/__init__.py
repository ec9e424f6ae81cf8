# ABOUTME: Memory-based middleware implementations package
# ABOUTME: Provides the chain builder, per-request execution engine and handler

from .activation import Continuation, MiddlewareActivation, TerminalContinuation
from .chain_builder import ChainBuilder, default_chain_builder
from .execution import ChainExecution
from .handler import MiddlewareHandler

__all__ = [
    "Continuation",
    "MiddlewareActivation",
    "TerminalContinuation",
    "ChainBuilder",
    "default_chain_builder",
    "ChainExecution",
    "MiddlewareHandler",
]
