import asyncio
import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
from fastmcp import Client

from reddable_mcp.config import Settings
from reddable_mcp.server import create_server

API_KEY = "test-key"
BASE_URL = "https://backend.test"


class FakeBackend:
    """Records outbound requests and answers them from a route table."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.routes: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}

    def route(self, path: str, status_code: int = 200, payload: Any = None) -> None:
        self.routes[path] = lambda request: httpx.Response(status_code, json=payload)

    def fail(self, path: str, exc: Exception) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise exc

        self.routes[path] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get(request.url.path)
        if handler is None:
            return httpx.Response(404, json={"error": "not found"})
        return handler(request)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request reached the backend"
        return self.requests[-1]

    def last_body(self) -> Dict[str, Any]:
        return json.loads(self.last.content)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def server(backend):
    return create_server(Settings(api_key=API_KEY, api_base_url=BASE_URL), transport=backend.transport())


@pytest.fixture
def call_tool(server):
    def _call(name: str, arguments: Optional[Dict[str, Any]] = None):
        async def _run():
            async with Client(server) as client:
                return await client.call_tool(name, arguments or {}, raise_on_error=False)

        return asyncio.run(_run())

    return _call
