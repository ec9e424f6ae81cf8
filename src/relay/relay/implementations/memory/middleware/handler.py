# ABOUTME: MiddlewareHandler executing a pre-built chain for each request
# ABOUTME: Builds the chain at construction time and instruments every execution

import threading
from typing import Any, Dict, Iterable, Optional

from loguru import logger

from relay.components.observability import Instrumenter, RequestSerializer
from relay.config import get_settings
from relay.exceptions import MiddlewareExecutionError
from relay.interfaces.middleware import AbstractChainBuilder, AbstractHandler
from relay.interfaces.observability import AbstractInstrumentationSink
from relay.models.middleware import REQUEST_KEY, Chain, ExecutionContext, Response
from relay.models.observability import InstrumentationEvent, InstrumentationEventName
from relay.models.types import RequestMetadata
from relay.implementations.factory import create_instrumentation_sink

from .chain_builder import default_chain_builder
from .execution import ChainExecution


class MiddlewareHandler(AbstractHandler):
    """
    Handler pinned to one terminal middleware type.

    The chain is resolved when the handler is constructed, so configuration
    errors (unmet requirements, cycles) surface at setup time and no request
    is ever served through a chain that failed to build. Each ``execute`` call
    gets its own execution context and activations; handlers are safe to share
    across concurrent requests.

    Published events for a chain that runs to the end: ``start_handler``, one
    ``start_middleware``/``finish_middleware`` pair per activation, then
    ``finish_handler`` and the aggregate ``request`` event. Middleware events
    nest around the continuation call rather than following one another, so
    a two-middleware chain emits::

        start_handler
        start_middleware(first)
        start_middleware(second)
        finish_middleware(second)
        finish_middleware(first)
        finish_handler
        request

    Requests missing a seed key the chain was built with are rejected before
    any event is published.
    """

    def __init__(
        self,
        terminal: type,
        *,
        seed_keys: Optional[Iterable[str]] = None,
        sink: Optional[AbstractInstrumentationSink] = None,
        builder: Optional[AbstractChainBuilder] = None,
        request_serializer: Optional[RequestSerializer] = None,
        instrumentation_enabled: Optional[bool] = None,
    ):
        """
        Initialize the handler and build its chain.

        Args:
            terminal: The middleware type the chain ends in.
            seed_keys: Keys the caller supplies with every request.
            sink: Destination of instrumentation events; defaults to the configured sink.
            builder: Chain builder; defaults to the shared builder.
            request_serializer: Serializer for the request section of events.
            instrumentation_enabled: Overrides ``INSTRUMENTATION_ENABLED``.

        Raises:
            MiddlewareConfigurationError: If the chain cannot be built.
        """
        settings = get_settings()
        self._builder = builder if builder is not None else default_chain_builder
        self._chain = self._builder.build(terminal, seed_keys)

        if instrumentation_enabled is None:
            instrumentation_enabled = settings.INSTRUMENTATION_ENABLED
        self._instrumenter = Instrumenter(
            sink if sink is not None else create_instrumentation_sink(settings.INSTRUMENTATION_SINK),
            enabled=instrumentation_enabled,
        )
        self._request_serializer = request_serializer or RequestSerializer(settings.FILTERED_HEADERS)

        self._logger = logger.bind(name=f"{__name__}.{self._chain.id}")

        # Performance statistics
        self._lock = threading.Lock()
        self._execution_count = 0
        self._total_execution_time_ms = 0.0

    @property
    def chain(self) -> Chain:
        return self._chain

    @property
    def sink(self) -> AbstractInstrumentationSink:
        return self._instrumenter.sink

    async def execute(self, request: Any, **initial: Any) -> Response:
        missing = sorted(self._chain.seed_keys - {REQUEST_KEY} - set(initial))
        if missing:
            raise MiddlewareExecutionError(
                f"Chain {self._chain.id} was built with seed keys [{', '.join(missing)}] the caller did not supply",
                code="MISSING_SEED_KEYS",
                details={"chain": self._chain.id, "keys": missing},
            )

        request_metadata = self._serialize_request(request)
        context = ExecutionContext.seed(request, initial, chain_id=self._chain.id)
        execution = ChainExecution(self._chain, context, self._instrumenter, dict(request_metadata))
        benchmark = execution.benchmark

        with self._lock:
            self._execution_count += 1
            execution_id = self._execution_count

        self._logger.debug(f"Execution #{execution_id}: context {context.id} entering chain {self._chain.id}")
        await self._instrumenter.publish(self._event(InstrumentationEventName.HANDLER_START, execution))

        try:
            response = await execution.run(0)
        except Exception as e:
            benchmark.mark_completed()
            await self._instrumenter.publish(
                self._event(
                    InstrumentationEventName.HANDLER_FINISH,
                    execution,
                    exception={"type": type(e).__name__, "message": str(e)},
                )
            )
            self._logger.error(
                f"Execution #{execution_id}: chain {self._chain.id} aborted in "
                f"{context.execution_path[-1] if context.execution_path else '<none>'}: {e}"
            )
            raise

        benchmark.mark_completed()
        duration_ms = benchmark.get_execution_time_ms() or 0.0
        with self._lock:
            self._total_execution_time_ms += duration_ms

        await self._instrumenter.publish(
            self._event(InstrumentationEventName.HANDLER_FINISH, execution, status=response.status)
        )
        summary = benchmark.get_summary()
        await self._instrumenter.publish(
            self._event(
                InstrumentationEventName.REQUEST,
                execution,
                status=response.status,
                metadata=context.metadata,
                chain=summary["chain"],
            )
        )

        self._logger.debug(
            f"Execution #{execution_id} completed in {duration_ms:.2f}ms with status {response.status}. "
            f"Executed {summary['executed_middlewares']}/{len(self._chain)} middleware"
        )
        return response

    def get_handler_info(self) -> Dict[str, Any]:
        """
        Get information about the handler and its execution statistics.

        Returns:
            dict: Chain identity and order, seed keys and timing statistics.
        """
        with self._lock:
            count = self._execution_count
            total = self._total_execution_time_ms
        return {
            "chain_id": self._chain.id,
            "chain": self._chain.names,
            "seed_keys": sorted(self._chain.seed_keys),
            "instrumentation_enabled": self._instrumenter.enabled,
            "dropped_events": self._instrumenter.dropped_events,
            "sink": self._instrumenter.sink.__class__.__name__,
            "performance_stats": {
                "total_executions": count,
                "total_execution_time_ms": total,
                "average_execution_time_ms": total / count if count else 0.0,
            },
        }

    def _serialize_request(self, request: Any) -> RequestMetadata:
        try:
            return self._request_serializer.serialize(request)
        except Exception as e:
            self._logger.opt(exception=e).warning(f"Could not serialize request for chain {self._chain.id}")
            return {}

    def _event(self, name: InstrumentationEventName, execution: ChainExecution, **fields: Any) -> InstrumentationEvent:
        benchmark = execution.benchmark
        return InstrumentationEvent(
            event=name,
            chain_id=self._chain.id,
            context_id=execution.context.id,
            request=execution.request_metadata,
            started_at=benchmark.started_at,
            finished_at=benchmark.completed_at,
            duration_ms=benchmark.get_execution_time_ms(),
            **fields,
        )

    def __repr__(self) -> str:
        return f"MiddlewareHandler(chain={' -> '.join(self._chain.names)})"
