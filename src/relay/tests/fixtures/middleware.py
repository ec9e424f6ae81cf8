# ABOUTME: Sample middleware used across the relay test suite
# ABOUTME: Models a token-authenticated greeting endpoint and a few tracing helpers

from relay.interfaces.middleware import AbstractMiddleware
from relay.models.middleware import Response

USERS = {"secret-token": "Jamie"}


def trace(middleware: AbstractMiddleware, label: str) -> None:
    """Append ``label`` to the request's trace list, when the request carries one."""
    request = middleware.request
    if isinstance(request, dict) and "trace" in request:
        request["trace"].append(label)


class Authentication(AbstractMiddleware, provides=["user"], name="Authentication"):
    async def call(self) -> Response:
        trace(self, "Authentication")
        token = self.request.get("headers", {}).get("Authorization")
        if token not in USERS:
            return Response(status=401, body="unauthorized")
        self.provide("user", USERS[token])
        self.log_metadata(user=USERS[token])
        return await self.next()


class Greeter(AbstractMiddleware, uses=[Authentication], requires=["user"], name="Greeter"):
    async def call(self) -> Response:
        trace(self, "Greeter")
        return Response(status=200, body=f"hello {self.context['user']}")


class RequestId(AbstractMiddleware, provides="request_id", name="RequestId"):
    async def call(self) -> Response:
        trace(self, "RequestId:before")
        self.provide("request_id", "req-1")
        response = await self.next()
        trace(self, "RequestId:after")
        return response.with_headers({"X-Request-Id": self.context["request_id"]})


class Personalized(
    AbstractMiddleware,
    uses=[RequestId, Authentication],
    requires=["user", "request_id"],
    name="Personalized",
):
    async def call(self) -> Response:
        trace(self, "Personalized")
        return Response(status=200, body=[f"hello {self.context['user']}", f" ({self.context['request_id']})"])


def authenticated_request(token: str = "secret-token", **extra) -> dict:
    """Build a request mapping carrying the given bearer token and an empty trace."""
    request = {"method": "get", "path": "/greeting", "headers": {"Authorization": token}, "trace": []}
    request.update(extra)
    return request
