"""Async test client for sprig applications.

Drives ``App.handle`` directly with the same ``RequestContext`` and
``Response`` types used in production. No ASGI server involved.
"""

from __future__ import annotations

import json as json_module
from typing import Any
from urllib.parse import urlencode

from sprig.app import App
from sprig.http.request import RequestContext
from sprig.http.response import Response


class TestClient:
    """Async test client.

    Usage::

        async with TestClient(app) as client:
            response = await client.post("/api/users", json={"name": "Ada"})
            assert response.status == 201
            assert response.json()["data"]["name"] == "Ada"

    Entering the client connects the app's database (if any) the way
    ASGI lifespan startup would; leaving it disconnects.
    """

    __test__ = False  # Tell pytest this is not a test class
    __slots__ = ("app",)

    def __init__(self, app: App) -> None:
        self.app = app

    async def __aenter__(self) -> TestClient:
        if self.app._db is not None:
            await self.app._db.connect()
        return self

    async def __aexit__(self, *args: object) -> None:
        if self.app._db is not None:
            await self.app._db.disconnect()

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        query: dict[str, Any] | None = None,
        body: bytes | str | None = None,
        json: Any = None,
    ) -> Response:
        """Send a request and return the app's response."""
        merged: dict[str, str] = {}
        if json is not None:
            body = json_module.dumps(json).encode("utf-8")
            merged["content-type"] = "application/json"
        merged.update(headers or {})
        uri = f"{path}?{urlencode(query, doseq=True)}" if query else path
        request = RequestContext.from_uri(method, uri, body or b"", merged)
        return await self.app.handle(request)

    async def get(self, path: str, *, headers: dict[str, str] | None = None, query: dict[str, Any] | None = None) -> Response:
        return await self.request("GET", path, headers=headers, query=query)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | str | None = None,
        json: Any = None,
    ) -> Response:
        return await self.request("POST", path, headers=headers, body=body, json=json)

    async def put(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | str | None = None,
        json: Any = None,
    ) -> Response:
        return await self.request("PUT", path, headers=headers, body=body, json=json)

    async def patch(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | str | None = None,
        json: Any = None,
    ) -> Response:
        return await self.request("PATCH", path, headers=headers, body=body, json=json)

    async def delete(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("DELETE", path, headers=headers)
