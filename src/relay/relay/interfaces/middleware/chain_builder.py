# ABOUTME: Abstract chain builder interface
# ABOUTME: Defines how a terminal middleware type is resolved into a verified Chain

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from relay.models.middleware import Chain, MiddlewareSpec


class AbstractChainBuilder(ABC):
    """
    Abstract base class for chain builders.

    A chain builder turns a terminal middleware type into a ``Chain``: the
    transitive ``uses`` graph linearized so dependencies come first, then
    statically checked so every required key is produced earlier. Building
    happens at setup time; failures are configuration errors.
    """

    @abstractmethod
    def build(self, terminal: type, seed_keys: Optional[Iterable[str]] = None) -> Chain:
        """
        Build, or return the cached, chain for ``terminal``.

        Args:
            terminal: The middleware type the chain ends in.
            seed_keys: Keys available before any middleware runs. Defaults
                to the configured seed keys.

        Returns:
            Chain: The verified chain.

        Raises:
            MiddlewareCircularDependencyError: If the ``uses`` graph has a cycle.
            MiddlewareDependencyError: If a required key is never provided earlier.
        """
        pass

    @abstractmethod
    def linearize(self, terminal: type) -> List[MiddlewareSpec]:
        """
        Order the transitive dependencies of ``terminal``, terminal last.

        Raises:
            MiddlewareCircularDependencyError: If the ``uses`` graph has a cycle.
        """
        pass

    @abstractmethod
    def verify(self, candidate: List[MiddlewareSpec], seed_keys: Iterable[str]) -> None:
        """
        Check that every spec's required keys are provided by the seed or an earlier spec.

        Raises:
            MiddlewareDependencyError: Naming the first offending middleware and its missing keys.
        """
        pass
