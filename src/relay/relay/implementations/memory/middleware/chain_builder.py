# ABOUTME: ChainBuilder resolving a terminal middleware type into a verified Chain
# ABOUTME: Linearizes the uses graph depth-first, checks required keys and caches the result

import threading
from typing import Dict, Iterable, List, Optional, Tuple

from loguru import logger

from relay.components.middleware import MiddlewareRegistry, middleware_registry
from relay.exceptions import MiddlewareCircularDependencyError, MiddlewareConfigurationError, MiddlewareDependencyError
from relay.interfaces.middleware import AbstractChainBuilder
from relay.models.middleware import REQUEST_KEY, Chain, MiddlewareSpec


class ChainBuilder(AbstractChainBuilder):
    """
    Builds chains from the specs in a middleware registry.

    Linearization is a depth-first pre-order walk of the ``uses`` graph:
    each middleware's dependencies are visited in declaration order before the
    middleware itself is appended, and a middleware reached a second time is
    skipped. Diamond dependencies therefore collapse to their first position.

    Built chains are cached per (terminal, seed keys), so a chain is resolved
    once at setup time and reused for every request.
    """

    def __init__(self, registry: Optional[MiddlewareRegistry] = None, name: str = "ChainBuilder"):
        """
        Initialize the chain builder.

        Args:
            registry: Registry to read specs from. Defaults to the process-wide registry.
            name: Name of the builder for identification and logging.
        """
        self.name = name
        self._registry = registry if registry is not None else middleware_registry
        self._cache: Dict[Tuple[type, frozenset[str]], Chain] = {}

        # Thread safety
        self._lock = threading.RLock()

        self._logger = logger.bind(name=f"{__name__}.{self.name}")

        # Statistics
        self._build_count = 0
        self._cache_hits = 0

    def build(self, terminal: type, seed_keys: Optional[Iterable[str]] = None) -> Chain:
        seeds = self._resolve_seed_keys(seed_keys)
        cache_key = (terminal, seeds)

        with self._lock:
            cached = self._cache.get(cache_key)
            if cached is not None:
                self._cache_hits += 1
                self._logger.debug(f"Chain cache hit for {cached.id}")
                return cached

            try:
                candidate = self.linearize(terminal)
                self.verify(candidate, seeds)
            except MiddlewareConfigurationError as e:
                self._logger.error(f"Failed to build chain for {getattr(terminal, '__qualname__', terminal)}: {e}")
                raise

            chain = Chain(terminal=candidate[-1], specs=tuple(candidate), seed_keys=seeds)
            self._cache[cache_key] = chain
            self._build_count += 1

        self._logger.info(f"Built chain {chain.id}: {' -> '.join(chain.names)} (seed keys: {sorted(seeds)})")
        return chain

    def linearize(self, terminal: type) -> List[MiddlewareSpec]:
        order: List[MiddlewareSpec] = []
        visited: set[type] = set()
        in_progress: List[type] = []

        def visit(middleware: type) -> None:
            if middleware in visited:
                return
            if middleware in in_progress:
                cycle = in_progress[in_progress.index(middleware) :] + [middleware]
                names = [self._registry.get(member).name for member in cycle]
                raise MiddlewareCircularDependencyError(
                    f"Circular middleware dependency: {' -> '.join(names)}",
                    code="CIRCULAR_DEPENDENCY",
                    details={"cycle": names},
                )

            spec = self._registry.get(middleware)
            in_progress.append(middleware)
            for dependency in spec.uses:
                visit(dependency)
            in_progress.pop()

            visited.add(middleware)
            order.append(spec)

        visit(terminal)
        return order

    def verify(self, candidate: List[MiddlewareSpec], seed_keys: Iterable[str]) -> None:
        available = set(seed_keys)
        for position, spec in enumerate(candidate):
            missing = sorted(spec.requires - available)
            if missing:
                raise MiddlewareDependencyError(
                    f"{spec.name} requires keys [{', '.join(missing)}] that are not provided by the middleware chain",
                    code="DEPENDENCY_NOT_MET",
                    details={
                        "middleware": spec.name,
                        "missing_keys": missing,
                        "position": position,
                        "available_keys": sorted(available),
                    },
                )
            available |= spec.provides

    def clear_cache(self) -> None:
        """Drop every cached chain; the next ``build`` resolves from the registry again."""
        with self._lock:
            self._logger.info(f"Clearing {len(self._cache)} cached chains")
            self._cache.clear()

    def get_cache_info(self) -> dict:
        """
        Get cache statistics for the builder.

        Returns:
            dict: Number of cached chains, builds performed and cache hits.
        """
        with self._lock:
            return {
                "name": self.name,
                "cached_chains": len(self._cache),
                "builds": self._build_count,
                "cache_hits": self._cache_hits,
                "chains": sorted(chain.id for chain in self._cache.values()),
            }

    def _resolve_seed_keys(self, seed_keys: Optional[Iterable[str]]) -> frozenset[str]:
        if seed_keys is None:
            from relay.config import get_settings

            seed_keys = get_settings().DEFAULT_SEED_KEYS
        elif isinstance(seed_keys, str):
            seed_keys = [seed_keys]
        # The raw request is always stored in the context
        return frozenset(seed_keys) | {REQUEST_KEY}


# Builder shared by handlers that are not given one explicitly
default_chain_builder = ChainBuilder(name="default")
