# ABOUTME: Process-wide, append-only registry of middleware specs
# ABOUTME: Maps each middleware class to the MiddlewareSpec declared for it

from __future__ import annotations

import threading
from typing import Dict, List

from loguru import logger

from relay.exceptions import MiddlewareRegistrationError
from relay.models.middleware import MiddlewareSpec


class MiddlewareRegistry:
    """
    Registry of middleware specs keyed by middleware class.

    Specs are added once, when their class is defined, and never replaced or
    removed. Reads are safe from any thread once startup has finished.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._specs: Dict[type, MiddlewareSpec] = {}
        self._names: Dict[str, type] = {}
        self._lock = threading.RLock()
        self._logger = logger.bind(name=__name__)

    def register(self, spec: MiddlewareSpec) -> MiddlewareSpec:
        """
        Register ``spec`` for its middleware class.

        Args:
            spec: The spec to add.

        Returns:
            The registered spec.

        Raises:
            MiddlewareRegistrationError: If the class already has a spec, or another
                class is registered under the same name.
        """
        with self._lock:
            if spec.middleware in self._specs:
                raise MiddlewareRegistrationError(
                    f"{spec.name} is already registered",
                    code="DUPLICATE_REGISTRATION",
                    details={"middleware": spec.name},
                )
            owner = self._names.get(spec.name)
            if owner is not None:
                raise MiddlewareRegistrationError(
                    f"{spec.name} is already the name of {owner.__module__}.{owner.__qualname__}",
                    code="DUPLICATE_NAME",
                    details={"middleware": spec.name, "registered": owner.__qualname__},
                )
            self._specs[spec.middleware] = spec
            self._names[spec.name] = spec.middleware
        self._logger.debug(f"Registered middleware {spec!r}")
        return spec

    def get(self, middleware: type) -> MiddlewareSpec:
        """
        Get the spec registered for ``middleware``.

        Raises:
            MiddlewareRegistrationError: If the class was never registered.
        """
        try:
            return self._specs[middleware]
        except KeyError:
            name = getattr(middleware, "__qualname__", repr(middleware))
            raise MiddlewareRegistrationError(
                f"{name} is not a registered middleware",
                code="UNKNOWN_MIDDLEWARE",
                details={"middleware": name},
            ) from None

    def names(self) -> List[str]:
        """Names of every registered middleware, in registration order."""
        with self._lock:
            return [spec.name for spec in self._specs.values()]

    def __contains__(self, middleware: object) -> bool:
        return middleware in self._specs

    def __len__(self) -> int:
        return len(self._specs)

    def __repr__(self) -> str:
        return f"MiddlewareRegistry(size={len(self._specs)})"


# The registry every AbstractMiddleware subclass registers into
middleware_registry = MiddlewareRegistry()
