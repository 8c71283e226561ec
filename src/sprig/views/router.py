"""Server-rendered page routes.

``ViewRoutes`` registers paths that render a view instead of calling a
function; ``ViewInvoker`` plugs those routes into the shared
``Dispatcher``::

    pages = ViewRoutes()
    pages.get("/", "home", {"title": "Home"})
    pages.get("/users/{id}", "users/show", layout="admin")

    dispatcher = Dispatcher(pages.table, ViewInvoker(renderer), prefix=None)

Path parameters are merged over the static data, so ``users/show`` sees
``{"id": "7"}``. Plain callables may be registered too; they return a
``Response``, a ``ViewTarget`` or an HTML string.
"""

import html
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from sprig._internal.invoke import call_handler
from sprig.errors import HTTPError, InvalidHandler, ViewNotFound
from sprig.http.request import RequestContext
from sprig.http.response import Response
from sprig.routing.dispatcher import resolve_handler
from sprig.routing.route import Handler, Route
from sprig.routing.table import RouteTable
from sprig.views.renderer import ViewRenderer

logger = logging.getLogger("sprig.views")

NOT_FOUND_MESSAGE = "404 - Page not found"


@dataclass(frozen=True, slots=True)
class ViewTarget:
    """A view to render, its static data, and an optional layout override."""

    view: str
    data: Mapping[str, Any] = field(default_factory=dict)
    layout: str | None = None


class ViewRoutes:
    """Route registration for pages. Wraps a ``RouteTable``."""

    __slots__ = ("_table",)

    def __init__(self, table: RouteTable | None = None) -> None:
        self._table = table or RouteTable()

    @property
    def table(self) -> RouteTable:
        return self._table

    def page(
        self,
        method: str,
        path: str,
        view: str | Handler,
        data: Mapping[str, Any] | None = None,
        layout: str | None = None,
    ) -> Route:
        """Bind *path* to a view name (or a handler callable)."""
        handler = ViewTarget(view, dict(data or {}), layout) if isinstance(view, str) else view
        return self._table.register(method, path, handler)

    def get(
        self,
        path: str,
        view: str | Handler,
        data: Mapping[str, Any] | None = None,
        layout: str | None = None,
    ) -> Route:
        return self.page("GET", path, view, data, layout)

    def post(
        self,
        path: str,
        view: str | Handler,
        data: Mapping[str, Any] | None = None,
        layout: str | None = None,
    ) -> Route:
        return self.page("POST", path, view, data, layout)

    def __len__(self) -> int:
        return len(self._table)


class ViewInvoker:
    """Render view routes; failures become HTML pages."""

    __slots__ = ("_not_found_view", "_renderer")

    def __init__(self, renderer: ViewRenderer, not_found_view: str = "404") -> None:
        self._renderer = renderer
        self._not_found_view = not_found_view

    @property
    def renderer(self) -> ViewRenderer:
        return self._renderer

    def render_target(self, target: ViewTarget, params: Mapping[str, str]) -> Response:
        context = {**target.data, **params}
        return Response(self._renderer.render(target.view, context, target.layout))

    async def invoke(
        self, route: Route, request: RequestContext, params: dict[str, str]
    ) -> Response:
        if isinstance(route.handler, ViewTarget):
            return self.render_target(route.handler, params)

        func = resolve_handler(route.handler)
        if func is None:
            raise InvalidHandler()
        result = await call_handler(func, request, params)
        if isinstance(result, Response):
            return result
        if isinstance(result, ViewTarget):
            return self.render_target(result, params)
        if isinstance(result, str):
            return Response(result)
        raise TypeError(f"View handler returned unsupported type {type(result).__name__}")

    async def not_found(self, request: RequestContext) -> Response:
        try:
            body = self._renderer.render(self._not_found_view, {"error": NOT_FOUND_MESSAGE})
        except ViewNotFound:
            body = f"<h1>{NOT_FOUND_MESSAGE}</h1>"
        return Response(body, status=404)

    async def error(self, request: RequestContext, exc: HTTPError) -> Response:
        detail = html.escape(exc.detail or "Error")
        return Response(f"<h1>{exc.status} - {detail}</h1>", status=exc.status)
