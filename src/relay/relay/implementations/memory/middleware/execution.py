# ABOUTME: ChainExecution running one built chain for one request
# ABOUTME: Activates middleware lazily in chain order and instruments every activation

from typing import Any, Dict, Optional

from loguru import logger

from relay.components.observability import Instrumenter
from relay.exceptions import MiddlewareExecutionError
from relay.models.middleware import Chain, ExecutionContext, MiddlewareTiming, RequestBenchmark, Response
from relay.models.observability import InstrumentationEvent, InstrumentationEventName

from .activation import Continuation, MiddlewareActivation, TerminalContinuation


class ChainExecution:
    """
    Execution state of one chain for one request.

    Activations are created only when execution reaches their position, so a
    short-circuit leaves every later middleware uninstantiated: no logic, no
    events, no timing entry. Activations run strictly nested; a middleware's
    ``call`` does not return until everything after it has.
    """

    def __init__(
        self,
        chain: Chain,
        context: ExecutionContext,
        instrumenter: Instrumenter,
        request_metadata: Optional[Dict[str, Any]] = None,
    ):
        """
        Args:
            chain: The verified chain to run.
            context: Freshly seeded context for this request.
            instrumenter: Publisher of the per-activation events.
            request_metadata: Serialized request attached to every event.
        """
        self.chain = chain
        self.context = context
        self.instrumenter = instrumenter
        self.request_metadata = request_metadata or {}
        self.benchmark = RequestBenchmark(chain_id=chain.id)
        self._logger = logger.bind(name=f"{__name__}.{chain.id}")

    async def run(self, position: int = 0) -> Response:
        """
        Activate the middleware at ``position`` and return its response.

        Raises:
            MiddlewareExecutionError: If the middleware returns something other than a Response.
        """
        spec = self.chain[position]
        if position + 1 < len(self.chain):
            continuation = Continuation(self, position + 1)
        else:
            continuation = TerminalContinuation(spec.name, self.chain.id)

        activation = MiddlewareActivation(spec, position, self.context, continuation)
        middleware = spec.middleware(activation)

        self.context.add_execution_step(spec.name)
        timing = self.benchmark.start(spec.name, position)
        await self.instrumenter.publish(self._event(InstrumentationEventName.MIDDLEWARE_START, timing))
        self._logger.debug(f"Context {self.context.id}: starting middleware {position + 1}/{len(self.chain)} {spec.name}")

        try:
            response = await middleware.call()
            if not isinstance(response, Response):
                raise MiddlewareExecutionError(
                    f"{spec.name} returned {type(response).__name__} instead of a Response",
                    code="INVALID_RESPONSE",
                    details={"middleware": spec.name, "returned": type(response).__name__},
                )
        except Exception as e:
            timing.mark_completed(failed=True)
            await self.instrumenter.publish(
                self._event(
                    InstrumentationEventName.MIDDLEWARE_FINISH,
                    timing,
                    exception={"type": type(e).__name__, "message": str(e)},
                )
            )
            raise

        timing.mark_completed()
        await self.instrumenter.publish(
            self._event(InstrumentationEventName.MIDDLEWARE_FINISH, timing, status=response.status)
        )
        short_circuit = not continuation.is_terminal and not continuation.invoked
        self._logger.debug(
            f"Context {self.context.id}: middleware {spec.name} returned {response.status} "
            f"in {timing.execution_time_ms:.2f}ms{' (short-circuit)' if short_circuit else ''}"
        )
        return response

    def _event(self, name: InstrumentationEventName, timing: MiddlewareTiming, **fields: Any) -> InstrumentationEvent:
        return InstrumentationEvent(
            event=name,
            chain_id=self.chain.id,
            context_id=self.context.id,
            middleware_name=timing.middleware_name,
            position=timing.position,
            request=self.request_metadata,
            started_at=timing.started_at,
            finished_at=timing.completed_at,
            duration_ms=timing.execution_time_ms,
            **fields,
        )
