"""Outbound JSON API client.

::

    async with ApiClient("https://api.example.com/v1/") as api:
        users = await api.send("users", {"page": 2})
        created = await api.send("users", {"name": "Ada"}, method="POST")

GET sends *data* as the query string; POST, PUT, PATCH and DELETE send
it as a JSON body. JSON responses are decoded; anything else comes back
as text.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from sprig.errors import SprigError

logger = logging.getLogger("sprig.http")

BODY_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})
SUPPORTED_METHODS = BODY_METHODS | {"GET"}


class ClientError(SprigError):
    """Raised for unsupported methods and transport failures.

    ``status`` is set when the failure came with an HTTP response.
    """

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class ApiClient:
    """Send JSON requests to one base URL.

    Non-2xx responses are returned like any other: the decoded body is
    usually the server's error envelope. Pass ``raise_for_status=True``
    to get a ``ClientError`` instead.
    """

    __slots__ = ("_base_url", "_client", "_raise_for_status")

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        headers: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        raise_for_status: bool = False,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers={"Content-Type": "application/json", **(headers or {})},
            transport=transport,
        )
        self._raise_for_status = raise_for_status

    @property
    def base_url(self) -> str:
        return self._base_url

    def url(self, endpoint: str) -> str:
        return f"{self._base_url}/{endpoint.lstrip('/')}"

    async def send(
        self,
        endpoint: str,
        data: Mapping[str, Any] | None = None,
        method: str = "GET",
    ) -> Any:
        """Send *data* to *endpoint* and return the decoded response body."""
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            msg = f"Unsupported HTTP method: {method}"
            raise ClientError(msg)

        url = self.url(endpoint)
        payload = dict(data or {})
        try:
            if method == "GET":
                response = await self._client.request(method, url, params=payload or None)
            else:
                response = await self._client.request(method, url, json=payload)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise ClientError(str(exc)) from exc

        logger.debug("%s %s -> %d", method, url, response.status_code)
        if self._raise_for_status and response.is_error:
            msg = f"{method} {url} returned {response.status_code}"
            raise ClientError(msg, status=response.status_code)
        return decode_body(response)

    async def get(self, endpoint: str, data: Mapping[str, Any] | None = None) -> Any:
        return await self.send(endpoint, data, "GET")

    async def post(self, endpoint: str, data: Mapping[str, Any] | None = None) -> Any:
        return await self.send(endpoint, data, "POST")

    async def put(self, endpoint: str, data: Mapping[str, Any] | None = None) -> Any:
        return await self.send(endpoint, data, "PUT")

    async def patch(self, endpoint: str, data: Mapping[str, Any] | None = None) -> Any:
        return await self.send(endpoint, data, "PATCH")

    async def delete(self, endpoint: str, data: Mapping[str, Any] | None = None) -> Any:
        return await self.send(endpoint, data, "DELETE")

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.aclose()


def decode_body(response: httpx.Response) -> Any:
    """JSON-decode *response* when its content type says JSON, else return text."""
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            return response.text
    return response.text
