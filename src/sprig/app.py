"""App: wires the JSON API, the page routes, and the database together.

::

    from sprig import App, AppConfig
    from sprig.data import CrudController, CrudModel

    app = App(AppConfig(database_url="sqlite:///app.db"))

    class Users(CrudModel):
        table = "users"
        fillable = frozenset({"name", "email"})
        rules = {"name": ["required", "string"], "email": ["required", "email"]}

    app.api.resource("users", CrudController(Users(app.db)))
    app.views.get("/", "home", {"title": "Home"})

Requests whose path carries the API prefix (``/api/`` by default) go to
the JSON dispatcher; everything else goes to the page routes. With no
page routes registered, every request is an API request.

The app is an ASGI callable. Lifespan startup connects the database and
shutdown disconnects it.
"""

import logging
from typing import Any

from sprig._internal.asgi import Receive, Scope, Send, read_body, request_from_scope, send_response
from sprig.config import AppConfig
from sprig.data.database import Database
from sprig.http.request import RequestContext
from sprig.http.response import Response
from sprig.routing.dispatcher import Dispatcher, JsonInvoker
from sprig.routing.table import RouteTable
from sprig.views.partial import PartialRenderer
from sprig.views.renderer import ViewRenderer
from sprig.views.router import ViewInvoker, ViewRoutes, ViewTarget

logger = logging.getLogger("sprig.server")


class App:
    """The application object.

    ``api`` is the JSON ``RouteTable``; ``views`` registers pages.
    Register everything before serving; dispatchers are built on first
    use and see later registrations too, since they share the tables.
    """

    __slots__ = (
        "_api_dispatcher",
        "_db",
        "_partials",
        "_renderer",
        "_view_dispatcher",
        "api",
        "config",
        "views",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        db: Database | None = None,
        renderer: ViewRenderer | None = None,
    ) -> None:
        self.config = config or AppConfig()
        self.api = RouteTable()
        self.views = ViewRoutes()
        if db is None and self.config.database_url:
            db = Database(self.config.database_url, echo=self.config.echo_sql)
        self._db = db
        self._renderer = renderer
        self._partials: PartialRenderer | None = None
        self._api_dispatcher: Dispatcher | None = None
        self._view_dispatcher: Dispatcher | None = None

    @property
    def db(self) -> Database:
        """The configured database. Raises ``LookupError`` if there is none."""
        if self._db is None:
            msg = "No database configured. Set AppConfig.database_url or pass db=."
            raise LookupError(msg)
        return self._db

    @property
    def renderer(self) -> ViewRenderer:
        if self._renderer is None:
            self._renderer = ViewRenderer(
                self.config.views_dir,
                self.config.layouts_dir,
                default_layout=self.config.default_layout,
                extension=self.config.view_extension,
                autoescape=self.config.autoescape,
            )
        return self._renderer

    @property
    def partials(self) -> PartialRenderer:
        """Renderer for ``config.partials_dir``. Built on first access."""
        if self._partials is None:
            self._partials = PartialRenderer(
                self.config.partials_dir,
                extension=self.config.view_extension,
                autoescape=self.config.autoescape,
            )
        return self._partials

    @property
    def api_dispatcher(self) -> Dispatcher:
        if self._api_dispatcher is None:
            self._api_dispatcher = Dispatcher(
                self.api, JsonInvoker(), prefix=self.config.api_prefix, debug=self.config.debug
            )
        return self._api_dispatcher

    @property
    def view_dispatcher(self) -> Dispatcher:
        if self._view_dispatcher is None:
            invoker = ViewInvoker(self.renderer, self.config.not_found_view)
            self._view_dispatcher = Dispatcher(
                self.views.table, invoker, prefix=None, debug=self.config.debug
            )
        return self._view_dispatcher

    def dispatcher_for(self, path: str) -> Dispatcher:
        """The dispatcher that owns *path*."""
        if not len(self.views) or self.api_dispatcher.handles(path):
            return self.api_dispatcher
        return self.view_dispatcher

    async def handle(self, request: RequestContext) -> Response:
        """Dispatch one request and return its response."""
        response = await self.dispatcher_for(request.path).run(request)
        logger.debug("%s %s -> %d", request.method, request.path, response.status)
        return response

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            msg = f"Unsupported ASGI scope type: {scope['type']!r}"
            raise RuntimeError(msg)

        body = await read_body(receive)
        response = await self.handle(request_from_scope(scope, body))
        await send_response(response, send)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    if self._db is not None:
                        await self._db.connect()
                except Exception as exc:
                    logger.exception("startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                if self._db is not None:
                    await self._db.disconnect()
                await send({"type": "lifespan.shutdown.complete"})
                return

    def __repr__(self) -> str:
        return f"App(api={len(self.api)} routes, views={len(self.views)} routes)"

    def describe(self) -> list[dict[str, Any]]:
        """One entry per route: kind, method, path, and handler name."""
        rows: list[dict[str, Any]] = []
        for kind, table in (("api", self.api), ("view", self.views.table)):
            for route in table:
                handler = route.handler
                if isinstance(handler, ViewTarget):
                    label = f"view:{handler.view}"
                elif isinstance(handler, tuple) and len(handler) == 2:
                    label = f"{type(handler[0]).__name__}.{handler[1]}"
                else:
                    label = getattr(handler, "__qualname__", repr(handler))
                rows.append(
                    {"kind": kind, "method": route.method, "path": "/" + route.template.strip("/"), "handler": label}
                )
        return rows
