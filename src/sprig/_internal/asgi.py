"""ASGI plumbing: type aliases, request reading, response sending.

Internal only. ``App.__call__`` is the sole user.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any

from sprig.http.request import RequestContext
from sprig.http.response import Response

type Scope = MutableMapping[str, Any]
type Receive = Callable[[], Awaitable[MutableMapping[str, Any]]]
type Send = Callable[[MutableMapping[str, Any]], Awaitable[None]]


async def read_body(receive: Receive) -> bytes:
    """Drain ``http.request`` messages into one body."""
    chunks: list[bytes] = []
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            break
        chunks.append(message.get("body", b""))
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


def request_from_scope(scope: Scope, body: bytes) -> RequestContext:
    """Build a ``RequestContext`` from an HTTP scope and its body."""
    return RequestContext(
        method=scope["method"].upper(),
        path=scope["path"],
        raw_body=body,
        raw_query=scope.get("query_string", b""),
        headers=tuple(
            (name.decode("latin-1").lower(), value.decode("latin-1"))
            for name, value in scope.get("headers", ())
        ),
    )


def _body_allowed(status: int) -> bool:
    # 1xx, 204, and 304 responses do not include a message body
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send) -> None:
    """Translate a sprig Response into ASGI send() calls."""
    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    for name, value in response.headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    body = response.body_bytes if _body_allowed(response.status) else b""
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send({"type": "http.response.start", "status": response.status, "headers": raw_headers})
    await send({"type": "http.response.body", "body": body})
