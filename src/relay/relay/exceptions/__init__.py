# ABOUTME: Exceptions package exports
# ABOUTME: Exports the root exception and the middleware exception family

from relay.exceptions.base import RelayException, ConfigurationException

from relay.exceptions.middleware import (
    MiddlewareError,
    MiddlewareConfigurationError,
    MiddlewareDependencyError,
    MiddlewareCircularDependencyError,
    ReservedKeyError,
    MiddlewareRegistrationError,
    MiddlewareExecutionError,
    ChainExhaustedError,
    UndeclaredProvideError,
)

__all__ = [
    "RelayException",
    "ConfigurationException",
    # Middleware exceptions
    "MiddlewareError",
    "MiddlewareConfigurationError",
    "MiddlewareDependencyError",
    "MiddlewareCircularDependencyError",
    "ReservedKeyError",
    "MiddlewareRegistrationError",
    "MiddlewareExecutionError",
    "ChainExhaustedError",
    "UndeclaredProvideError",
]
