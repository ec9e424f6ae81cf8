# ABOUTME: Unit tests for MiddlewareSpecBuilder and MiddlewareRegistry
# ABOUTME: Tests declaration merging, key validation and append-only registration

import pytest

from relay.components.middleware import MiddlewareRegistry, MiddlewareSpecBuilder
from relay.exceptions import MiddlewareConfigurationError, MiddlewareRegistrationError, ReservedKeyError


class Session:
    pass


class Audit:
    pass


class Checkout:
    pass


class TestMiddlewareSpecBuilder:
    """Test suite for MiddlewareSpecBuilder."""

    @pytest.mark.unit
    def test_empty_declaration(self):
        spec = MiddlewareSpecBuilder(Checkout).build()

        assert spec.middleware is Checkout
        assert spec.name == "Checkout"
        assert spec.uses == ()
        assert spec.provides == frozenset()
        assert spec.requires == frozenset()

    @pytest.mark.unit
    def test_repeated_declarations_merge(self):
        spec = (
            MiddlewareSpecBuilder(Checkout, name="checkout")
            .uses(Session, Audit)
            .uses(Session)
            .provides("order")
            .provides("order", "receipt")
            .requires("user")
            .requires("cart", "user")
            .build()
        )

        assert spec.name == "checkout"
        assert spec.uses == (Session, Audit)
        assert spec.provides == frozenset({"order", "receipt"})
        assert spec.requires == frozenset({"user", "cart"})

    @pytest.mark.unit
    def test_declare_all_at_once(self):
        spec = MiddlewareSpecBuilder(Checkout).declare(uses=[Audit], provides=["foo/bar"], requires=["user"]).build()

        assert spec.uses == (Audit,)
        assert spec.provides_key("foo/bar")
        assert spec.requires_key("user")

    @pytest.mark.unit
    def test_reserved_key_cannot_be_provided(self):
        builder = MiddlewareSpecBuilder(Checkout)

        with pytest.raises(ReservedKeyError, match="Checkout cannot provide _metadata") as exc_info:
            builder.provides("order", "_metadata")

        assert exc_info.value.code == "RESERVED_KEY"

    @pytest.mark.unit
    def test_raw_request_cannot_be_provided(self):
        with pytest.raises(ReservedKeyError, match="Checkout cannot provide request") as exc_info:
            MiddlewareSpecBuilder(Checkout).provides("request")

        assert exc_info.value.details == {"middleware": "Checkout", "keys": ["request"]}

    @pytest.mark.unit
    def test_reserved_key_may_be_required(self):
        spec = MiddlewareSpecBuilder(Checkout).requires("_metadata").build()

        assert spec.requires_key("_metadata")

    @pytest.mark.unit
    @pytest.mark.parametrize("key", ["", 42, None])
    def test_invalid_keys(self, key):
        with pytest.raises(MiddlewareConfigurationError, match="keys must be non-empty strings"):
            MiddlewareSpecBuilder(Checkout).requires(key)

    @pytest.mark.unit
    def test_uses_requires_classes(self):
        with pytest.raises(MiddlewareConfigurationError) as exc_info:
            MiddlewareSpecBuilder(Checkout).uses("Session")

        assert exc_info.value.code == "INVALID_DEPENDENCY"

    @pytest.mark.unit
    def test_uses_rejects_self(self):
        with pytest.raises(MiddlewareConfigurationError, match="cannot use itself"):
            MiddlewareSpecBuilder(Checkout).uses(Checkout)


class TestMiddlewareRegistry:
    """Test suite for MiddlewareRegistry."""

    @pytest.mark.unit
    def test_register_and_get(self):
        registry = MiddlewareRegistry()
        spec = MiddlewareSpecBuilder(Session).provides("session").build()

        assert registry.register(spec) is spec
        assert registry.get(Session) is spec
        assert Session in registry
        assert len(registry) == 1
        assert registry.names() == ["Session"]
        assert repr(registry) == "MiddlewareRegistry(size=1)"

    @pytest.mark.unit
    def test_duplicate_registration(self):
        registry = MiddlewareRegistry()
        registry.register(MiddlewareSpecBuilder(Session).build())

        with pytest.raises(MiddlewareRegistrationError) as exc_info:
            registry.register(MiddlewareSpecBuilder(Session).provides("other").build())

        assert exc_info.value.code == "DUPLICATE_REGISTRATION"
        assert registry.get(Session).provides == frozenset()

    @pytest.mark.unit
    def test_duplicate_name(self):
        registry = MiddlewareRegistry()
        registry.register(MiddlewareSpecBuilder(Session, name="Shared").build())

        with pytest.raises(MiddlewareRegistrationError, match="Shared is already the name of") as exc_info:
            registry.register(MiddlewareSpecBuilder(Audit, name="Shared").build())

        assert exc_info.value.code == "DUPLICATE_NAME"
        assert exc_info.value.details == {"middleware": "Shared", "registered": "Session"}
        assert Audit not in registry
        assert registry.names() == ["Shared"]

    @pytest.mark.unit
    def test_unknown_middleware(self):
        registry = MiddlewareRegistry()

        with pytest.raises(MiddlewareRegistrationError, match="Audit is not a registered middleware") as exc_info:
            registry.get(Audit)

        assert exc_info.value.code == "UNKNOWN_MIDDLEWARE"
