# ABOUTME: Contract tests for AbstractInstrumentationSink interface
# ABOUTME: Verifies that all sink implementations accept every lifecycle event

from typing import List, Type

import pytest

from relay.implementations import InMemoryInstrumentationSink, LogInstrumentationSink, NoOpInstrumentationSink
from relay.interfaces.observability import AbstractInstrumentationSink
from relay.models.observability import InstrumentationEvent, InstrumentationEventName
from tests.contract.base_contract_test import ContractTestBase


class TestAbstractInstrumentationSinkContract(ContractTestBase[AbstractInstrumentationSink]):
    """Contract tests for AbstractInstrumentationSink interface."""

    @property
    def interface_class(self) -> Type[AbstractInstrumentationSink]:
        return AbstractInstrumentationSink

    @property
    def implementations(self) -> List[Type[AbstractInstrumentationSink]]:
        return [InMemoryInstrumentationSink, LogInstrumentationSink, NoOpInstrumentationSink]

    @pytest.mark.contract
    @pytest.mark.asyncio
    @pytest.mark.parametrize("event_name", list(InstrumentationEventName))
    async def test_publish_accepts_every_event(self, event_name):
        """Every sink accepts every event name and returns None."""
        payload = InstrumentationEvent(
            event=event_name,
            chain_id="Greeter",
            context_id="ctx-1",
            middleware_name="Authentication",
            position=0,
            duration_ms=1.0,
            status=200,
            chain=[{"name": "Authentication", "position": 0, "duration_ms": 1.0, "failed": False}],
        ).to_payload()

        for impl_class in self.implementations:
            instance = impl_class()
            assert await instance.publish(event_name.value, payload) is None
