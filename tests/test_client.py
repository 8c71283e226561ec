"""Tests for sprig.http.client.ApiClient — driven through httpx.MockTransport."""

import json

import httpx
import pytest

from sprig.http.client import ApiClient, ClientError


def _recorder(calls: list[httpx.Request], response: httpx.Response | None = None):
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return response or httpx.Response(200, json={"ok": True})

    return httpx.MockTransport(handler)


class TestApiClient:
    async def test_base_url_trailing_slash_stripped(self) -> None:
        calls: list[httpx.Request] = []
        async with ApiClient("https://api.test/v1/", transport=_recorder(calls)) as api:
            assert api.base_url == "https://api.test/v1"
            await api.send("/users")
        assert str(calls[0].url) == "https://api.test/v1/users"

    async def test_get_sends_query_string(self) -> None:
        calls: list[httpx.Request] = []
        async with ApiClient("https://api.test", transport=_recorder(calls)) as api:
            result = await api.send("users", {"page": 2, "q": "ada"})
        assert result == {"ok": True}
        assert calls[0].method == "GET"
        assert calls[0].url.params["page"] == "2"
        assert calls[0].url.params["q"] == "ada"
        assert calls[0].content == b""

    @pytest.mark.parametrize("method", ["POST", "PUT", "PATCH", "DELETE", "post"])
    async def test_body_methods_send_json(self, method: str) -> None:
        calls: list[httpx.Request] = []
        async with ApiClient("https://api.test", transport=_recorder(calls)) as api:
            await api.send("users/1", {"name": "Ada"}, method=method)
        assert calls[0].method == method.upper()
        assert json.loads(calls[0].content) == {"name": "Ada"}
        assert calls[0].headers["content-type"] == "application/json"

    async def test_shortcuts(self) -> None:
        calls: list[httpx.Request] = []
        async with ApiClient("https://api.test", transport=_recorder(calls)) as api:
            await api.post("a", {"x": 1})
            await api.delete("a/1")
        assert [c.method for c in calls] == ["POST", "DELETE"]

    async def test_non_json_body_returned_as_text(self) -> None:
        calls: list[httpx.Request] = []
        transport = _recorder(calls, httpx.Response(200, text="pong"))
        async with ApiClient("https://api.test", transport=transport) as api:
            assert await api.send("ping") == "pong"

    async def test_error_status_returns_body(self) -> None:
        calls: list[httpx.Request] = []
        transport = _recorder(calls, httpx.Response(404, json={"success": False}))
        async with ApiClient("https://api.test", transport=transport) as api:
            assert await api.send("missing") == {"success": False}

    async def test_raise_for_status(self) -> None:
        calls: list[httpx.Request] = []
        transport = _recorder(calls, httpx.Response(500, json={}))
        async with ApiClient("https://api.test", transport=transport, raise_for_status=True) as api:
            with pytest.raises(ClientError) as exc_info:
                await api.send("boom")
        assert exc_info.value.status == 500

    async def test_unsupported_method(self) -> None:
        async with ApiClient("https://api.test", transport=_recorder([])) as api:
            with pytest.raises(ClientError, match="Unsupported HTTP method: HEAD"):
                await api.send("x", method="HEAD")

    async def test_transport_error_wrapped(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with ApiClient("https://api.test", transport=httpx.MockTransport(handler)) as api:
            with pytest.raises(ClientError, match="connection refused"):
                await api.send("x")
