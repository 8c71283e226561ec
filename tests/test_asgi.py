"""Tests for sprig._internal.asgi — body reading and response emission."""

from typing import Any

from sprig._internal.asgi import read_body, request_from_scope, send_response
from sprig.http.response import Response


def _receiver(messages: list[dict[str, Any]]):
    async def receive() -> dict[str, Any]:
        return messages.pop(0)

    return receive


class TestReadBody:
    async def test_joins_chunks(self) -> None:
        receive = _receiver(
            [
                {"type": "http.request", "body": b"ab", "more_body": True},
                {"type": "http.request", "body": b"cd"},
            ]
        )
        assert await read_body(receive) == b"abcd"

    async def test_stops_on_disconnect(self) -> None:
        receive = _receiver(
            [
                {"type": "http.request", "body": b"ab", "more_body": True},
                {"type": "http.disconnect"},
            ]
        )
        assert await read_body(receive) == b"ab"


class TestRequestFromScope:
    def test_headers_lowercased(self) -> None:
        scope = {
            "type": "http",
            "method": "get",
            "path": "/api/x",
            "query_string": b"a=1",
            "headers": [(b"X-Custom", b"v")],
        }
        request = request_from_scope(scope, b"")
        assert request.method == "GET"
        assert request.header("x-custom") == "v"
        assert request.query.get("a") == "1"


class TestSendResponse:
    async def test_content_length_and_headers(self) -> None:
        messages: list[dict[str, Any]] = []

        async def send(message: dict[str, Any]) -> None:
            messages.append(message)

        await send_response(Response("héllo").with_header("X-Id", "7"), send)

        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == str(len("héllo".encode())).encode()
        assert headers[b"x-id"] == b"7"
        assert messages[1]["body"] == "héllo".encode()

    async def test_204_drops_body(self) -> None:
        messages: list[dict[str, Any]] = []

        async def send(message: dict[str, Any]) -> None:
            messages.append(message)

        await send_response(Response("unexpected-body").with_status(204), send)

        assert dict(messages[0]["headers"])[b"content-length"] == b"0"
        assert messages[1]["body"] == b""
