# ABOUTME: Abstract middleware interface with static dependency declarations
# ABOUTME: Subclasses declare uses/provides/requires as class keywords and implement call()

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Iterable, Optional, Union

from relay.components.middleware import MiddlewareSpecBuilder, middleware_registry
from relay.exceptions import MiddlewareConfigurationError
from relay.models.middleware import ExecutionContext, MiddlewareSpec, Response

if TYPE_CHECKING:
    from relay.implementations.memory.middleware.activation import MiddlewareActivation


def _as_tuple(value: Union[Any, Iterable[Any]], single: type) -> tuple:
    if isinstance(value, single):
        return (value,)
    return tuple(value)


class AbstractMiddleware(ABC):
    """
    Abstract base class for all middleware.

    A middleware is one unit of request-handling logic. Its data contract is
    declared once, when the class is defined::

        class Greeter(AbstractMiddleware, uses=[Authentication], requires=["user"]):
            async def call(self) -> Response:
                return Response(status=200, body=f"hello {self.context['user']}")

    The declarations are frozen into a ``MiddlewareSpec`` and registered in the
    process-wide middleware registry; the chain builder reads them from there.

    One instance is created per request, when execution reaches the
    middleware's position in the chain. ``call`` must either return a
    ``Response`` of its own (short-circuiting the rest of the chain) or return
    the one obtained from ``await self.next()``, optionally transformed.
    """

    def __init_subclass__(
        cls,
        *,
        uses: Union[type, Iterable[type]] = (),
        provides: Union[str, Iterable[str]] = (),
        requires: Union[str, Iterable[str]] = (),
        name: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        """
        Declare and register the subclass.

        Args:
            uses: Upstream middleware classes this middleware depends on.
            provides: Context keys this middleware may write.
            requires: Context keys that must exist before it runs.
            name: Display name; defaults to the class's qualified name.

        Raises:
            MiddlewareConfigurationError: If a dependency is not a middleware class.
            ReservedKeyError: If a provided key is reserved.
            MiddlewareRegistrationError: If another middleware already uses the same name.
        """
        super().__init_subclass__(**kwargs)
        uses = _as_tuple(uses, type)
        for dependency in uses:
            if not (isinstance(dependency, type) and issubclass(dependency, AbstractMiddleware)):
                raise MiddlewareConfigurationError(
                    f"{name or cls.__qualname__} uses {dependency!r}, which is not a middleware class",
                    code="INVALID_DEPENDENCY",
                    details={"middleware": name or cls.__qualname__, "dependency": repr(dependency)},
                )

        spec = (
            MiddlewareSpecBuilder(cls, name)
            .declare(uses=uses, provides=_as_tuple(provides, str), requires=_as_tuple(requires, str))
            .build()
        )
        middleware_registry.register(spec)

    def __init__(self, activation: "MiddlewareActivation"):
        """
        Bind the middleware to its activation for the current request.

        Args:
            activation: Per-request activation holding the context, the request
                and the continuation handle.
        """
        self.activation = activation

    @abstractmethod
    async def call(self) -> Response:
        """
        Run the middleware logic for the current request.

        Returns:
            Response: Either constructed here (short-circuit) or obtained from
            ``await self.next()``.
        """
        pass

    @classmethod
    def spec(cls) -> MiddlewareSpec:
        """Return the registered spec of this middleware type."""
        return middleware_registry.get(cls)

    @classmethod
    def provides_key(cls, key: str) -> bool:
        """Return whether this middleware type declares that it provides ``key``."""
        return cls.spec().provides_key(key)

    @classmethod
    def requires_key(cls, key: str) -> bool:
        """Return whether this middleware type declares that it requires ``key``."""
        return cls.spec().requires_key(key)

    @property
    def context(self) -> ExecutionContext:
        return self.activation.context

    @property
    def request(self) -> Any:
        return self.activation.request

    def provide(self, key: str, value: Any) -> None:
        """
        Write ``value`` into the shared context under ``key``.

        Raises:
            UndeclaredProvideError: If ``key`` was not declared in ``provides``.
        """
        self.activation.provide(key, value)

    async def next(self) -> Response:
        """
        Run the rest of the chain and return its response.

        Raises:
            ChainExhaustedError: If this is the last middleware of the chain.
        """
        return await self.activation.continuation()

    def log_metadata(self, **values: Any) -> None:
        """Attach metadata to the request; it is published with the request event."""
        self.context.add_metadata(**values)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(position={self.activation.position})"
