# ABOUTME: Serializer turning an opaque request object into event metadata
# ABOUTME: Extracts method, path and headers, masking sensitive header values

from typing import Any, Iterable, Mapping, Optional

from relay.models.types import RequestMetadata

FILTERED_VALUE = "[FILTERED]"


class RequestSerializer:
    """
    Build the ``request`` section of instrumentation events.

    The request is opaque to the framework, so the serializer only picks up
    what it can find: attributes ``method``/``path``/``headers`` on an object,
    the same keys on a mapping, or a WSGI environ (``REQUEST_METHOD``,
    ``PATH_INFO`` and ``HTTP_*`` entries). Anything else is omitted.
    """

    def __init__(self, filtered_headers: Optional[Iterable[str]] = None):
        """
        Args:
            filtered_headers: Header names whose values are masked. Compared case-insensitively.
        """
        if filtered_headers is None:
            from relay.config import get_settings

            filtered_headers = get_settings().FILTERED_HEADERS
        self.filtered_headers = frozenset(header.lower() for header in filtered_headers)

    def serialize(self, request: Any) -> RequestMetadata:
        if request is None:
            return {}
        if isinstance(request, Mapping):
            if "REQUEST_METHOD" in request:
                return self._serialize_environ(request)
            method = request.get("method")
            path = request.get("path")
            headers = request.get("headers")
        else:
            method = getattr(request, "method", None)
            path = getattr(request, "path", None)
            headers = getattr(request, "headers", None)

        metadata: RequestMetadata = {}
        if method is not None:
            metadata["method"] = str(method).upper()
        if path is not None:
            metadata["path"] = str(path)
        if isinstance(headers, Mapping) or hasattr(headers, "items"):
            metadata["headers"] = self._filter_headers(headers.items())
        return metadata

    def _serialize_environ(self, environ: Mapping[str, Any]) -> RequestMetadata:
        headers = [
            (key[5:].replace("_", "-").lower(), value) for key, value in environ.items() if key.startswith("HTTP_")
        ]
        metadata: RequestMetadata = {"method": str(environ["REQUEST_METHOD"]).upper()}
        if "PATH_INFO" in environ:
            metadata["path"] = str(environ["PATH_INFO"]) or "/"
        if headers:
            metadata["headers"] = self._filter_headers(headers)
        return metadata

    def _filter_headers(self, items: Iterable[tuple[Any, Any]]) -> dict[str, str]:
        filtered = {}
        for name, value in items:
            name = str(name)
            filtered[name] = FILTERED_VALUE if name.lower() in self.filtered_headers else str(value)
        return filtered
