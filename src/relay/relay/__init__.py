# ABOUTME: Relay package initialization for the middleware chain framework
# ABOUTME: Provides declarative middleware, chain resolution and instrumented execution

"""
Relay middleware chain framework.

Middleware declare which other middleware they use, which context keys they
provide and which they require. Relay resolves those declarations into a
verified, ordered chain once at setup time and executes it per request with
explicit continuation, short-circuiting and lifecycle instrumentation.
"""

__version__ = "0.1.0"
