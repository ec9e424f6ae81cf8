# ABOUTME: Per-request middleware activation and continuation handles
# ABOUTME: Links each chain position to the next one through an explicit, single-use handle

from typing import TYPE_CHECKING, Any

from relay.exceptions import ChainExhaustedError, MiddlewareExecutionError
from relay.models.middleware import ExecutionContext, MiddlewareSpec, Response

if TYPE_CHECKING:
    from .execution import ChainExecution


class Continuation:
    """
    Handle to the next position of a chain.

    Invoking it runs the next activation and returns its response. A handle
    can be invoked once; a second call is a programming error.
    """

    __slots__ = ("_execution", "position", "_invoked")

    def __init__(self, execution: "ChainExecution", position: int):
        self._execution = execution
        self.position = position
        self._invoked = False

    @property
    def is_terminal(self) -> bool:
        return False

    @property
    def invoked(self) -> bool:
        return self._invoked

    async def __call__(self) -> Response:
        if self._invoked:
            raise MiddlewareExecutionError(
                f"Continuation to position {self.position} of chain {self._execution.chain.id} was already invoked",
                code="CONTINUATION_REUSED",
                details={"chain_id": self._execution.chain.id, "position": self.position},
            )
        self._invoked = True
        return await self._execution.run(self.position)


class TerminalContinuation:
    """Sentinel continuation given to the last activation of a chain."""

    __slots__ = ("owner", "chain_id")

    def __init__(self, owner: str, chain_id: str):
        self.owner = owner
        self.chain_id = chain_id

    @property
    def is_terminal(self) -> bool:
        return True

    @property
    def invoked(self) -> bool:
        return False

    async def __call__(self) -> Response:
        raise ChainExhaustedError(
            f"{self.owner} is the last middleware of chain {self.chain_id} and has no next middleware",
            code="CHAIN_EXHAUSTED",
            details={"middleware": self.owner, "chain_id": self.chain_id},
        )


class MiddlewareActivation:
    """
    One middleware position, activated for one request.

    Binds the middleware spec to the shared execution context and to the
    continuation handle of the following position.
    """

    __slots__ = ("spec", "position", "context", "continuation")

    def __init__(
        self,
        spec: MiddlewareSpec,
        position: int,
        context: ExecutionContext,
        continuation: "Continuation | TerminalContinuation",
    ):
        self.spec = spec
        self.position = position
        self.context = context
        self.continuation = continuation

    @property
    def request(self) -> Any:
        return self.context.request

    @property
    def is_last(self) -> bool:
        return self.continuation.is_terminal

    def provide(self, key: str, value: Any) -> None:
        self.context.provide(self.spec, key, value)

    def __repr__(self) -> str:
        return f"MiddlewareActivation(middleware={self.spec.name!r}, position={self.position})"
