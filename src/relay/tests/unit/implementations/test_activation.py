# ABOUTME: Unit tests for middleware activations and continuation handles
# ABOUTME: Tests terminal continuation, single-use handles and gated provide on activations

import pytest

from relay.components.observability import Instrumenter
from relay.exceptions import ChainExhaustedError, MiddlewareExecutionError, UndeclaredProvideError
from relay.implementations.memory.middleware import (
    ChainExecution,
    Continuation,
    MiddlewareActivation,
    TerminalContinuation,
)
from relay.implementations.noop import NoOpInstrumentationSink
from relay.models.middleware import ExecutionContext
from tests.fixtures.middleware import Authentication, Greeter


class TestTerminalContinuation:
    """Test suite for TerminalContinuation."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_invoking_raises(self):
        continuation = TerminalContinuation("Greeter", "Greeter")

        with pytest.raises(ChainExhaustedError, match="Greeter is the last middleware") as exc_info:
            await continuation()

        assert exc_info.value.code == "CHAIN_EXHAUSTED"
        assert continuation.is_terminal
        assert not continuation.invoked


class TestContinuation:
    """Test suite for single-use continuations."""

    @pytest.fixture
    def execution(self, builder):
        chain = builder.build(Greeter)
        context = ExecutionContext.seed({"headers": {"Authorization": "secret-token"}}, chain_id=chain.id)
        return ChainExecution(chain, context, Instrumenter(NoOpInstrumentationSink()))

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_runs_next_position(self, execution):
        execution.context.provide(Authentication.spec(), "user", "Jamie")
        continuation = Continuation(execution, 1)

        response = await continuation()

        assert response.text == "hello Jamie"
        assert continuation.invoked
        assert not continuation.is_terminal
        assert execution.context.execution_path == ["Greeter"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_second_invocation_fails(self, execution):
        execution.context.provide(Authentication.spec(), "user", "Jamie")
        continuation = Continuation(execution, 1)
        await continuation()

        with pytest.raises(MiddlewareExecutionError) as exc_info:
            await continuation()

        assert exc_info.value.code == "CONTINUATION_REUSED"
        assert execution.context.execution_path == ["Greeter"]


class TestMiddlewareActivation:
    """Test suite for MiddlewareActivation."""

    @pytest.mark.unit
    def test_provide_is_gated_by_spec(self):
        request = {"path": "/"}
        context = ExecutionContext.seed(request)
        activation = MiddlewareActivation(Greeter.spec(), 1, context, TerminalContinuation("Greeter", "Greeter"))

        with pytest.raises(UndeclaredProvideError, match="Greeter does not provide 'user'"):
            activation.provide("user", "Jamie")

        assert activation.request is request
        assert activation.is_last
        assert repr(activation) == "MiddlewareActivation(middleware='Greeter', position=1)"
