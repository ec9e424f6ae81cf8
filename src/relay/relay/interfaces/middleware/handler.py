# ABOUTME: Abstract handler interface executing a built chain per request
# ABOUTME: A handler is pinned to one terminal middleware type and its Chain

from abc import ABC, abstractmethod
from typing import Any

from relay.models.middleware import Chain, Response


class AbstractHandler(ABC):
    """
    Abstract base class for request handlers.

    A handler is constructed once per terminal middleware type, at setup
    time, and then executes its chain for every incoming request.
    """

    @property
    @abstractmethod
    def chain(self) -> Chain:
        """The verified chain this handler runs."""
        pass

    @abstractmethod
    async def execute(self, request: Any, **initial: Any) -> Response:
        """
        Run the chain against one request.

        Args:
            request: The raw request handed in by the transport layer.
            **initial: Additional seed values for the execution context.

        Returns:
            Response: The response produced by the first middleware.

        Raises:
            MiddlewareExecutionError: If a seed key the chain was built with is missing
                from ``initial``, or middleware code breaks the execution contract.
            UndeclaredProvideError: If middleware writes an undeclared key.
        """
        pass
