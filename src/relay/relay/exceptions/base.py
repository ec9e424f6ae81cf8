# ABOUTME: Root exception classes for the relay middleware framework
# ABOUTME: Provides structured error handling with context and error codes

from typing import Dict, Any


class RelayException(Exception):
    """Base exception class for the relay framework.

    Provides structured error handling with optional error codes and contextual
    details. All custom exceptions in the framework inherit from this class so
    setup tooling can catch and inspect them uniformly.

    Attributes:
        message: Human-readable error message
        code: Optional error code for programmatic handling
        details: Optional dictionary containing contextual information
    """

    def __init__(self, message: str, code: str | None = None, details: Dict[str, Any] | None = None):
        """Initialize RelayException with message, optional code and details.

        Args:
            message: Human-readable error message
            code: Optional error code for programmatic handling
            details: Optional dictionary containing contextual information
        """
        self.message = message
        self.code = code
        self.details = details.copy() if details else {}
        super().__init__(self.message)


class ConfigurationException(RelayException):
    """Exception raised for configuration errors.

    Used when framework configuration is invalid or missing, such as:
    - Invalid settings values
    - Unknown instrumentation sink names
    - Environment setup issues

    Should include details about the configuration issue.
    """

    pass
