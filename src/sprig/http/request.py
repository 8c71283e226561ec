"""Immutable request context.

Everything the dispatcher and handlers need to know about an incoming
request, passed explicitly instead of read from process-wide state.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

from sprig.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class RequestContext:
    """An immutable HTTP request as seen by sprig.

    ``path`` is the URL path without the query string. ``raw_body`` is
    the full request body; sprig never streams bodies.
    """

    method: str
    path: str
    raw_body: bytes = b""
    raw_query: bytes = b""
    headers: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_uri(
        cls,
        method: str,
        uri: str,
        body: bytes | str = b"",
        headers: Mapping[str, str] | None = None,
    ) -> RequestContext:
        """Build a context from a raw request URI such as ``/api/users?page=2``."""
        parts = urlsplit(uri)
        if isinstance(body, str):
            body = body.encode("utf-8")
        return cls(
            method=method.upper(),
            path=parts.path or "/",
            raw_body=body,
            raw_query=parts.query.encode("latin-1"),
            headers=tuple((k.lower(), v) for k, v in (headers or {}).items()),
        )

    @property
    def query(self) -> QueryParams:
        return QueryParams(self.raw_query)

    @property
    def content_type(self) -> str | None:
        return self.header("content-type")

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return the first header named *name* (case-insensitive)."""
        wanted = name.lower()
        for key, value in self.headers:
            if key == wanted:
                return value
        return default

    def text(self) -> str:
        """The body decoded as UTF-8."""
        return self.raw_body.decode("utf-8")

    def json(self) -> Any:
        """Parse the body as JSON.

        Raises ``ValueError`` (``json.JSONDecodeError`` or
        ``UnicodeDecodeError``) when the body is not valid JSON.
        """
        return json_module.loads(self.raw_body)
