# ABOUTME: Unit tests for MiddlewareSpec and Chain models
# ABOUTME: Tests declaration queries, immutability and chain lookups

import pytest
from pydantic import ValidationError

from relay.models.middleware import METADATA_KEY, REQUEST_KEY, RESERVED_KEYS, Chain, MiddlewareSpec


class Producer:
    pass


class Consumer:
    pass


def _spec(middleware, uses=(), provides=(), requires=()):
    return MiddlewareSpec(
        middleware=middleware,
        name=middleware.__name__,
        uses=tuple(uses),
        provides=frozenset(provides),
        requires=frozenset(requires),
    )


class TestMiddlewareSpec:
    """Test suite for MiddlewareSpec."""

    @pytest.mark.unit
    def test_reserved_keys(self):
        assert METADATA_KEY == "_metadata"
        assert REQUEST_KEY == "request"
        assert RESERVED_KEYS == frozenset({REQUEST_KEY, METADATA_KEY})

    @pytest.mark.unit
    def test_key_queries(self):
        spec = _spec(Producer, provides=["user", "foo/bar"], requires=["request"])

        assert spec.provides_key("user")
        assert spec.provides_key("foo/bar")
        assert not spec.provides_key("account")
        assert spec.requires_key("request")
        assert not spec.requires_key("user")

    @pytest.mark.unit
    def test_frozen(self):
        spec = _spec(Producer)

        with pytest.raises(ValidationError):
            spec.name = "Renamed"

    @pytest.mark.unit
    def test_repr(self):
        spec = _spec(Consumer, uses=[Producer], provides=["b", "a"])

        assert repr(spec) == "MiddlewareSpec(name='Consumer', uses=[Producer], provides=['a', 'b'], requires=[])"


class TestChain:
    """Test suite for Chain."""

    @pytest.fixture
    def chain(self):
        producer = _spec(Producer, provides=["user"])
        consumer = _spec(Consumer, uses=[Producer], requires=["user"], provides=["greeting"])
        return Chain(terminal=consumer, specs=(producer, consumer), seed_keys=frozenset({"request"}))

    @pytest.mark.unit
    def test_identity_and_order(self, chain):
        assert chain.id == "Consumer"
        assert chain.names == ["Producer", "Consumer"]
        assert len(chain) == 2
        assert chain[0].middleware is Producer
        assert [spec.name for spec in chain.iter_specs()] == ["Producer", "Consumer"]

    @pytest.mark.unit
    def test_provided_keys(self, chain):
        assert chain.provided_keys() == frozenset({"request", "user", "greeting"})

    @pytest.mark.unit
    def test_position_of(self, chain):
        assert chain.position_of(Consumer) == 1

        with pytest.raises(ValueError, match="not part of chain Consumer"):
            chain.position_of(int)

    @pytest.mark.unit
    def test_repr(self, chain):
        assert repr(chain) == "Chain(id='Consumer', specs=[Producer -> Consumer])"
