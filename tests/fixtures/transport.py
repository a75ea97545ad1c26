"""
Wire-level test helpers: a scripted httpx transport and a hand-driven clock.
"""

import base64
import json
from typing import Any

import httpx


class ScriptedTransport(httpx.MockTransport):
    """Mock transport answering each command path from a table of handlers.

    A handler is either a ``(status, body)`` tuple, a list of such tuples consumed one
    per request (the last one repeats), or a callable taking the request.
    """

    def __init__(self, routes: dict[str, Any] | None = None):
        self.routes = routes or {}
        self.requests_made: list[httpx.Request] = []
        super().__init__(self._handle_request)

    def _handle_request(self, request: httpx.Request) -> httpx.Response:
        self.requests_made.append(request)

        for path, handler in self.routes.items():
            if request.url.path.endswith("/" + path):
                if callable(handler):
                    return handler(request)
                if isinstance(handler, list):
                    status, body = handler.pop(0) if len(handler) > 1 else handler[0]
                else:
                    status, body = handler
                if isinstance(body, (dict, list)):
                    return httpx.Response(status, json=body, request=request)
                return httpx.Response(status, text=body or "", request=request)

        return httpx.Response(404, json={"code": "generic_err_command_not_found"}, request=request)

    def requests_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests_made if r.url.path.endswith("/" + path)]


def request_json(request: httpx.Request) -> dict[str, Any]:
    """Decode the JSON body of a recorded request."""
    return json.loads(request.content) if request.content else {}


def encode_message(text: str) -> str:
    """Encode task output the way the management server embeds it."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds
