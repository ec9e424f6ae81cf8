# ABOUTME: MiddlewareSpec model describing one middleware type's static declarations
# ABOUTME: Holds the declared upstream dependencies, produced keys and required keys

from typing import Final

from pydantic import BaseModel, ConfigDict, Field

# Context keys the framework writes itself; middleware may never provide them
REQUEST_KEY: Final[str] = "request"
METADATA_KEY: Final[str] = "_metadata"
RESERVED_KEYS: Final[frozenset[str]] = frozenset({REQUEST_KEY, METADATA_KEY})


class MiddlewareSpec(BaseModel):
    """
    Immutable declaration of one middleware type.

    A spec is built once per middleware class at definition time and registered
    in the middleware registry. The chain builder only ever works with specs,
    so everything it needs to order and verify a chain is inspectable without
    instantiating the middleware.
    """

    middleware: type = Field(description="The middleware class this spec describes")
    name: str = Field(description="Display name of the middleware, used in errors and events")
    uses: tuple[type, ...] = Field(default=(), description="Upstream middleware classes, in declaration order")
    provides: frozenset[str] = Field(default=frozenset(), description="Context keys this middleware may write")
    requires: frozenset[str] = Field(default=frozenset(), description="Context keys that must exist before it runs")

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def provides_key(self, key: str) -> bool:
        """Return whether ``key`` is in the declared produced set."""
        return key in self.provides

    def requires_key(self, key: str) -> bool:
        """Return whether ``key`` is in the declared required set."""
        return key in self.requires

    def __repr__(self) -> str:
        uses = ", ".join(dependency.__name__ for dependency in self.uses)
        return (
            f"MiddlewareSpec(name={self.name!r}, uses=[{uses}], "
            f"provides={sorted(self.provides)}, requires={sorted(self.requires)})"
        )
