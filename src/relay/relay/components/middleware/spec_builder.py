# ABOUTME: Builder collecting uses/provides/requires declarations into a MiddlewareSpec
# ABOUTME: Validates declarations eagerly so mistakes fail at class definition time

from typing import Iterable, List, Optional

from relay.exceptions import MiddlewareConfigurationError, ReservedKeyError
from relay.models.middleware import RESERVED_KEYS, MiddlewareSpec


class MiddlewareSpecBuilder:
    """
    Accumulates the declarations of one middleware type.

    Each declaration method may be called any number of times. ``uses`` keeps
    the first-declared order and merges duplicates; ``provides`` and
    ``requires`` merge into sets. ``build`` freezes the result.
    """

    def __init__(self, middleware: type, name: Optional[str] = None):
        """
        Args:
            middleware: The middleware class being declared.
            name: Display name; defaults to the class's qualified name.
        """
        self.middleware = middleware
        self.name = name or middleware.__qualname__
        self._uses: List[type] = []
        self._provides: set[str] = set()
        self._requires: set[str] = set()

    def uses(self, *middlewares: type) -> "MiddlewareSpecBuilder":
        """
        Append upstream dependencies.

        Raises:
            MiddlewareConfigurationError: If an entry is not a class or is the middleware itself.
        """
        for dependency in middlewares:
            if not isinstance(dependency, type):
                raise MiddlewareConfigurationError(
                    f"{self.name} uses {dependency!r}, which is not a middleware class",
                    code="INVALID_DEPENDENCY",
                    details={"middleware": self.name, "dependency": repr(dependency)},
                )
            if dependency is self.middleware:
                raise MiddlewareConfigurationError(
                    f"{self.name} cannot use itself",
                    code="SELF_DEPENDENCY",
                    details={"middleware": self.name},
                )
            if dependency not in self._uses:
                self._uses.append(dependency)
        return self

    def provides(self, *keys: str) -> "MiddlewareSpecBuilder":
        """
        Register keys this middleware may write.

        Raises:
            ReservedKeyError: If any key is reserved for framework use.
        """
        keys = self._validate_keys(keys, "provides")
        reserved = sorted(RESERVED_KEYS.intersection(keys))
        if reserved:
            raise ReservedKeyError(
                f"{self.name} cannot provide {', '.join(reserved)}: relay uses this key internally",
                code="RESERVED_KEY",
                details={"middleware": self.name, "keys": reserved},
            )
        self._provides.update(keys)
        return self

    def requires(self, *keys: str) -> "MiddlewareSpecBuilder":
        """Register keys that must already be in the context when this middleware runs."""
        self._requires.update(self._validate_keys(keys, "requires"))
        return self

    def declare(
        self,
        uses: Iterable[type] = (),
        provides: Iterable[str] = (),
        requires: Iterable[str] = (),
    ) -> "MiddlewareSpecBuilder":
        """Apply all three declarations at once."""
        return self.uses(*uses).provides(*provides).requires(*requires)

    def build(self) -> MiddlewareSpec:
        return MiddlewareSpec(
            middleware=self.middleware,
            name=self.name,
            uses=tuple(self._uses),
            provides=frozenset(self._provides),
            requires=frozenset(self._requires),
        )

    def _validate_keys(self, keys: Iterable[str], declaration: str) -> list[str]:
        validated = []
        for key in keys:
            if not isinstance(key, str) or not key:
                raise MiddlewareConfigurationError(
                    f"{self.name} {declaration} {key!r}: keys must be non-empty strings",
                    code="INVALID_KEY",
                    details={"middleware": self.name, "key": repr(key)},
                )
            validated.append(key)
        return validated
