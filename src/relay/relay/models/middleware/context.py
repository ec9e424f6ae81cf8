# ABOUTME: ExecutionContext model holding the per-request key/value store
# ABOUTME: Seeded by the caller, written to only through gated provide calls

from datetime import datetime, UTC
from typing import Any, Dict, List, Mapping, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from relay.exceptions import ReservedKeyError, UndeclaredProvideError
from .spec import METADATA_KEY, REQUEST_KEY, RESERVED_KEYS, MiddlewareSpec


class ExecutionContext(BaseModel):
    """
    Per-request shared context.

    The context is a read-only mapping from the point of view of middleware:
    values are seeded at request start and every later write goes through
    ``provide``, which checks the writer's declared ``provides`` set. One
    context is created per request and discarded when the request ends.
    """

    id: str = Field(default_factory=lambda: str(uuid4()), description="Unique context identifier")
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC), description="Context creation timestamp")
    chain_id: Optional[str] = Field(default=None, description="Identity of the chain this context runs through")
    execution_path: List[str] = Field(default_factory=list, description="Middleware names that have started")

    model_config = ConfigDict(arbitrary_types_allowed=True)

    _values: Dict[str, Any] = PrivateAttr(default_factory=dict)

    @classmethod
    def seed(
        cls,
        request: Any,
        initial: Optional[Mapping[str, Any]] = None,
        *,
        chain_id: Optional[str] = None,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> "ExecutionContext":
        """
        Create a fresh context for one request.

        Args:
            request: The raw request, stored under ``request``.
            initial: Caller-supplied seed values.
            chain_id: Identity of the chain the context is created for.
            metadata: Initial request metadata stored under the reserved key.

        Raises:
            ReservedKeyError: If ``initial`` uses a reserved key.
        """
        initial = dict(initial or {})
        reserved = sorted(RESERVED_KEYS.intersection(initial))
        if reserved:
            raise ReservedKeyError(
                f"Cannot seed reserved keys {reserved}: relay uses them internally",
                code="RESERVED_KEY",
                details={"keys": reserved},
            )

        context = cls(chain_id=chain_id)
        context._values.update(initial)
        context._values[REQUEST_KEY] = request
        context._values[METADATA_KEY] = dict(metadata or {})
        return context

    def provide(self, spec: MiddlewareSpec, key: str, value: Any) -> None:
        """
        Write ``value`` under ``key`` on behalf of the middleware described by ``spec``.

        Raises:
            UndeclaredProvideError: If ``key`` is not in ``spec.provides``.
        """
        if not spec.provides_key(key):
            raise UndeclaredProvideError(
                f"{spec.name} does not provide {key!r}",
                code="UNDECLARED_PROVIDE",
                details={"middleware": spec.name, "key": key, "provides": sorted(spec.provides)},
            )
        self._values[key] = value

    def add_metadata(self, **values: Any) -> None:
        """Merge ``values`` into the request metadata kept under the reserved key."""
        self._values[METADATA_KEY].update(values)

    @property
    def metadata(self) -> Dict[str, Any]:
        return dict(self._values[METADATA_KEY])

    @property
    def request(self) -> Any:
        return self._values.get(REQUEST_KEY)

    def add_execution_step(self, middleware_name: str) -> None:
        """
        Add a middleware to the execution path.

        Args:
            middleware_name: Name of the middleware that started.
        """
        self.execution_path.append(middleware_name)

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def keys(self) -> List[str]:
        return list(self._values)

    def as_dict(self) -> Dict[str, Any]:
        """
        Get a shallow copy of every value in the context.

        Returns:
            Dictionary of all context values, reserved keys included.
        """
        return dict(self._values)

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __contains__(self, key: object) -> bool:
        return key in self._values
