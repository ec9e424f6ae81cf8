# ABOUTME: Middleware-specific exception classes for chain building and execution
# ABOUTME: Separates configuration errors (boot time) from contract violations (request time)

from relay.exceptions.base import RelayException


class MiddlewareError(RelayException):
    """Base exception class for middleware-related errors.

    Should be used as a base for more specific middleware exceptions
    rather than being raised directly.
    """

    pass


class MiddlewareConfigurationError(MiddlewareError):
    """Exception raised when a middleware chain is misconfigured.

    Configuration errors are detected at declaration or chain-build time,
    before any request is served. They abort startup.
    """

    pass


class MiddlewareDependencyError(MiddlewareConfigurationError):
    """Exception raised when a middleware requires keys no earlier middleware provides.

    The message names the offending middleware and the missing keys; ``details``
    carries them as ``middleware`` and ``missing_keys``.
    """

    pass


class MiddlewareCircularDependencyError(MiddlewareConfigurationError):
    """Exception raised when the ``uses`` graph of a middleware contains a cycle.

    ``details["cycle"]`` lists the middleware names that form the cycle, with the
    first name repeated at the end.
    """

    pass


class ReservedKeyError(MiddlewareConfigurationError):
    """Exception raised when a reserved context key is declared or seeded."""

    pass


class MiddlewareRegistrationError(MiddlewareConfigurationError):
    """Exception raised for invalid registry operations.

    Used when a middleware class is registered twice, or when a class that was
    never registered is looked up.
    """

    pass


class MiddlewareExecutionError(MiddlewareError):
    """Exception raised when middleware code breaks the execution contract.

    These are programmer errors surfaced at request time, such as returning
    something other than a Response or invoking a continuation twice. They
    propagate uncaught and abort the in-flight request.
    """

    pass


class ChainExhaustedError(MiddlewareExecutionError):
    """Exception raised when the last middleware of a chain invokes its continuation."""

    pass


class UndeclaredProvideError(MiddlewareError, NameError):
    """Exception raised when a middleware provides a key it did not declare.

    Also a ``NameError``: the key is an unknown name for that middleware.
    """

    pass
