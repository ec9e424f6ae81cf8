# ABOUTME: Chain model holding the verified, ordered middleware sequence for a terminal type
# ABOUTME: Built once at setup time and shared read-only across concurrent requests

from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field

from .spec import MiddlewareSpec


class Chain(BaseModel):
    """
    Ordered sequence of distinct middleware specs ending in the terminal type.

    Every spec appears once, after all of its ``uses`` dependencies, and its
    required keys are covered by the seed keys plus the keys provided by the
    specs before it. Chains are frozen; the builder is the only producer.
    """

    terminal: MiddlewareSpec = Field(description="Spec of the middleware type the chain was built for")
    specs: tuple[MiddlewareSpec, ...] = Field(description="Specs in execution order, terminal last")
    seed_keys: frozenset[str] = Field(default=frozenset(), description="Keys supplied before any middleware runs")

    model_config = ConfigDict(frozen=True)

    @property
    def id(self) -> str:
        """Opaque identity of the chain used in instrumentation events."""
        return self.terminal.name

    @property
    def names(self) -> list[str]:
        """Middleware names in execution order."""
        return [spec.name for spec in self.specs]

    def provided_keys(self) -> frozenset[str]:
        """All keys available once the whole chain has run: seed keys plus every declared provide."""
        keys = set(self.seed_keys)
        for spec in self.specs:
            keys |= spec.provides
        return frozenset(keys)

    def position_of(self, middleware: type) -> int:
        """Return the index of ``middleware`` in the chain.

        Raises:
            ValueError: If the middleware is not part of this chain.
        """
        for index, spec in enumerate(self.specs):
            if spec.middleware is middleware:
                return index
        raise ValueError(f"{middleware.__name__} is not part of chain {self.id}")

    def iter_specs(self) -> Iterator[MiddlewareSpec]:
        return iter(self.specs)

    def __len__(self) -> int:
        return len(self.specs)

    def __getitem__(self, index: int) -> MiddlewareSpec:
        return self.specs[index]

    def __repr__(self) -> str:
        return f"Chain(id={self.id!r}, specs=[{' -> '.join(self.names)}])"
