# ABOUTME: Response model returned by every middleware activation
# ABOUTME: Carries status code, headers and body chunks back to the transport layer

from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, Field, field_validator

BodyChunk = Union[str, bytes]


class Response(BaseModel):
    """
    Structured result of running a chain against one request.

    The body is a sequence of output chunks so streaming transports can write
    it piece by piece. Middleware may inspect or rebuild the response returned
    by their continuation before handing it upward.
    """

    status: int = Field(ge=100, le=599, description="HTTP status code")
    headers: Dict[str, str] = Field(default_factory=dict, description="Header names mapped to values")
    body: List[BodyChunk] = Field(default_factory=list, description="Sequence of output chunks")

    @field_validator("body", mode="before")
    @classmethod
    def validate_body(cls, v: Any) -> Any:
        """Wrap a single string or bytes body into a one-chunk list."""
        if isinstance(v, (str, bytes)):
            return [v]
        return v

    @property
    def text(self) -> str:
        """Body chunks joined into one string, bytes decoded as UTF-8."""
        return "".join(chunk.decode("utf-8") if isinstance(chunk, bytes) else chunk for chunk in self.body)

    def is_success(self) -> bool:
        return 200 <= self.status < 300

    def is_client_error(self) -> bool:
        return 400 <= self.status < 500

    def is_server_error(self) -> bool:
        return self.status >= 500

    def with_headers(self, headers: Optional[Mapping[str, str]] = None, **extra: str) -> "Response":
        """
        Return a copy with new headers merged over the existing ones.

        Header names usually contain hyphens, so pass them in ``headers``;
        keyword arguments are merged last.
        """
        return self.model_copy(update={"headers": {**self.headers, **dict(headers or {}), **extra}})

    def as_tuple(self) -> tuple[int, Dict[str, str], List[BodyChunk]]:
        """Return the ``(status, headers, body)`` triple consumed by transports."""
        return self.status, dict(self.headers), list(self.body)
