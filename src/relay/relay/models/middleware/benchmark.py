# ABOUTME: Timing models for one request's journey through a chain
# ABOUTME: Collects per-middleware durations and builds the aggregate request summary

from datetime import datetime, UTC
from time import perf_counter
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, PrivateAttr


class MiddlewareTiming(BaseModel):
    """
    Timing of one middleware activation.

    Durations are inclusive: a middleware that invoked its continuation is
    charged for everything that ran downstream of it as well. Timestamps come
    from the wall clock, durations from the monotonic performance counter.
    """

    middleware_name: str = Field(description="Name of the middleware that ran")
    position: int = Field(description="Index of the middleware in the chain")
    started_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), description="When the activation started"
    )
    completed_at: Optional[datetime] = Field(default=None, description="When the activation returned or raised")
    execution_time_ms: Optional[float] = Field(default=None, description="Execution time in milliseconds")
    failed: bool = Field(default=False, description="Whether the activation raised")

    _started: float = PrivateAttr(default_factory=lambda: perf_counter())

    def mark_completed(self, failed: bool = False) -> None:
        """
        Mark the activation as completed.

        This method sets the completion timestamp and calculates execution time.
        """
        self.completed_at = datetime.now(UTC)
        self.failed = failed
        if self.execution_time_ms is None:
            self.execution_time_ms = (perf_counter() - self._started) * 1000

    def get_execution_summary(self) -> Dict[str, Any]:
        return {
            "name": self.middleware_name,
            "position": self.position,
            "duration_ms": self.execution_time_ms,
            "failed": self.failed,
        }


class RequestBenchmark(BaseModel):
    """
    Aggregate timing for one request through one chain.

    The engine records one ``MiddlewareTiming`` per activation that actually
    ran; middleware skipped by a short-circuit never appear.
    """

    chain_id: str = Field(description="Identity of the chain that ran")
    started_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), description="When the request entered the chain"
    )
    completed_at: Optional[datetime] = Field(default=None, description="When the first activation returned")
    timings: List[MiddlewareTiming] = Field(default_factory=list, description="Per-activation timings, start order")

    _started: float = PrivateAttr(default_factory=lambda: perf_counter())
    _elapsed_ms: Optional[float] = PrivateAttr(default=None)

    def start(self, middleware_name: str, position: int) -> MiddlewareTiming:
        """Open a timing entry for the activation at ``position``."""
        timing = MiddlewareTiming(middleware_name=middleware_name, position=position)
        self.timings.append(timing)
        return timing

    def mark_completed(self) -> None:
        """Mark the request as completed."""
        self.completed_at = datetime.now(UTC)
        self._elapsed_ms = (perf_counter() - self._started) * 1000

    def get_execution_time_ms(self) -> Optional[float]:
        """
        Get the total execution time in milliseconds.

        Returns:
            Optional[float]: Execution time in milliseconds, or None if not completed.
        """
        return self._elapsed_ms

    def get_summary(self) -> Dict[str, Any]:
        """
        Get the aggregate summary published with the request event.

        Returns:
            Dict[str, Any]: Chain identity, total duration and the per-middleware breakdown.
        """
        return {
            "chain_id": self.chain_id,
            "started_at": self.started_at,
            "duration_ms": self.get_execution_time_ms(),
            "executed_middlewares": len(self.timings),
            "chain": [timing.get_execution_summary() for timing in self.timings],
        }
