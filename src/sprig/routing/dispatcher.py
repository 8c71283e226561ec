"""Request dispatch over a ``RouteTable``.

One dispatcher serves both the JSON API and server-rendered views. What
differs is how a matched route is invoked and how failures look, and
that is delegated to a ``RouteInvoker``::

    api = Dispatcher(table, JsonInvoker())                       # strips ^/api/
    pages = Dispatcher(view_table, ViewInvoker(renderer), prefix=None)

    response = await api.run(RequestContext.from_uri("GET", "/api/users/7"))
"""

import logging
import re
from collections.abc import Callable, Mapping
from typing import Any, Protocol

from sprig._internal.invoke import call_handler
from sprig.errors import HTTPError, InvalidHandler
from sprig.http import envelope
from sprig.http.request import RequestContext
from sprig.http.response import Response
from sprig.routing.route import Route, RouteMatch
from sprig.routing.table import RouteTable

logger = logging.getLogger("sprig.routing")

DEFAULT_PREFIX = r"^/api/"


class RouteInvoker(Protocol):
    """How a dispatcher turns matches and failures into responses."""

    async def invoke(
        self, route: Route, request: RequestContext, params: dict[str, str]
    ) -> Response: ...

    async def not_found(self, request: RequestContext) -> Response: ...

    async def error(self, request: RequestContext, exc: HTTPError) -> Response: ...


def resolve_handler(handler: Any) -> Callable[..., Any] | None:
    """Resolve a route handler to something callable.

    Accepts a callable or a two-element ``(receiver, "method_name")``
    pair. Returns ``None`` for anything else, including a pair whose
    attribute is missing or not callable.
    """
    if isinstance(handler, (tuple, list)):
        if len(handler) != 2:
            return None
        receiver, name = handler
        if not isinstance(name, str):
            return None
        target = getattr(receiver, name, None)
        return target if callable(target) else None
    if callable(handler):
        return handler
    return None


def url_for(template: str, params: Mapping[str, Any]) -> str:
    """Substitute ``{key}`` placeholders in *template* with *params* values.

    Plain text replacement: values are not URL-encoded, and placeholders
    without a value are left in place.
    """
    url = template
    for key, value in params.items():
        url = url.replace("{" + key + "}", str(value))
    return url


class JsonInvoker:
    """Invoke handlers for the JSON API.

    A ``Response`` returned by the handler is passed through untouched;
    any other return value becomes the ``data`` of a success envelope.
    """

    __slots__ = ()

    async def invoke(
        self, route: Route, request: RequestContext, params: dict[str, str]
    ) -> Response:
        func = resolve_handler(route.handler)
        if func is None:
            logger.error("invalid handler for %s %s: %r", route.method, route.template, route.handler)
            raise InvalidHandler()
        result = await call_handler(func, request, params)
        if isinstance(result, Response):
            return result
        return envelope.success(result)

    async def not_found(self, request: RequestContext) -> Response:
        return envelope.not_found("Endpoint not found")

    async def error(self, request: RequestContext, exc: HTTPError) -> Response:
        return envelope.from_http_error(exc)


class Dispatcher:
    """Match a request against a route table and run the winning handler.

    ``prefix`` is a regex removed once from the start of the request path
    before matching (``None`` disables it). Surrounding slashes are
    stripped afterwards.

    Handler failures never escape ``run()``: ``HTTPError`` becomes an
    error response with its own status, anything else is logged and
    becomes a 500. With ``debug`` the 500 detail names the exception.
    """

    __slots__ = ("_debug", "_invoker", "_prefix", "_table")

    def __init__(
        self,
        table: RouteTable,
        invoker: RouteInvoker | None = None,
        *,
        prefix: str | None = DEFAULT_PREFIX,
        debug: bool = False,
    ) -> None:
        self._table = table
        self._debug = debug
        self._invoker: RouteInvoker = invoker or JsonInvoker()
        self._prefix = re.compile(prefix) if prefix else None

    @property
    def table(self) -> RouteTable:
        return self._table

    def handles(self, path: str) -> bool:
        """True if *path* carries this dispatcher's prefix (always, with no prefix)."""
        return self._prefix is None or self._prefix.search(path) is not None

    def normalize(self, path: str) -> str:
        """Strip the prefix pattern once, then surrounding slashes."""
        if self._prefix is not None:
            path = self._prefix.sub("", path, count=1)
        return path.strip("/")

    def resolve(self, method: str, path: str) -> RouteMatch | None:
        """Find the route a request for *method* *path* would run."""
        return self._table.find_match(method, self.normalize(path))

    async def run(self, request: RequestContext) -> Response:
        """Dispatch *request* and return the response."""
        match = self.resolve(request.method, request.path)
        if match is None:
            logger.debug("404 %s %s", request.method, request.path)
            return await self._invoker.not_found(request)

        try:
            return await self._invoker.invoke(match.route, request, match.params)
        except HTTPError as exc:
            logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
            return await self._invoker.error(request, exc)
        except Exception as exc:
            logger.exception("500 %s %s", request.method, request.path)
            detail = f"{type(exc).__name__}: {exc}" if self._debug else "Internal server error"
            return await self._invoker.error(request, HTTPError(status=500, detail=detail))

    def url(self, template: str, params: Mapping[str, Any] | None = None) -> str:
        """Build a URL from a route template. See ``url_for``."""
        return url_for(template, params or {})
