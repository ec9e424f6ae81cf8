# ABOUTME: Unit tests for RequestSerializer
# ABOUTME: Tests request metadata extraction from mappings, objects and WSGI environs

from types import SimpleNamespace

import pytest

from relay.components.observability import FILTERED_VALUE, RequestSerializer


class TestRequestSerializer:
    """Test suite for RequestSerializer."""

    @pytest.mark.unit
    def test_none(self):
        assert RequestSerializer([]).serialize(None) == {}

    @pytest.mark.unit
    def test_mapping(self):
        serializer = RequestSerializer(["Authorization"])

        metadata = serializer.serialize(
            {"method": "post", "path": "/orders", "headers": {"Authorization": "secret", "Accept": "json"}}
        )

        assert metadata == {
            "method": "POST",
            "path": "/orders",
            "headers": {"Authorization": FILTERED_VALUE, "Accept": "json"},
        }

    @pytest.mark.unit
    def test_object_attributes(self):
        request = SimpleNamespace(method="GET", path="/", headers={"Cookie": "session=1"})

        metadata = RequestSerializer(["cookie"]).serialize(request)

        assert metadata == {"method": "GET", "path": "/", "headers": {"Cookie": "[FILTERED]"}}

    @pytest.mark.unit
    def test_wsgi_environ(self):
        environ = {
            "REQUEST_METHOD": "get",
            "PATH_INFO": "",
            "HTTP_AUTHORIZATION": "Bearer abc",
            "HTTP_X_FORWARDED_FOR": "10.0.0.1",
            "wsgi.input": object(),
        }

        metadata = RequestSerializer(["authorization"]).serialize(environ)

        assert metadata == {
            "method": "GET",
            "path": "/",
            "headers": {"authorization": FILTERED_VALUE, "x-forwarded-for": "10.0.0.1"},
        }

    @pytest.mark.unit
    def test_opaque_objects_yield_nothing(self):
        assert RequestSerializer([]).serialize(object()) == {}
        assert RequestSerializer([]).serialize("raw body") == {}

    @pytest.mark.unit
    def test_filtered_headers_default_to_settings(self, monkeypatch):
        monkeypatch.setenv("RELAY_FILTERED_HEADERS", "X-Api-Key")

        serializer = RequestSerializer()

        assert serializer.filtered_headers == frozenset({"x-api-key"})
