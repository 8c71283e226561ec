"""Route table with first-match-wins lookup.

Routes live in per-method buckets kept in registration order. Lookup is
a linear scan of one bucket: the first route whose pattern matches the
whole path wins, so register specific routes before general ones::

    table = RouteTable()
    table.get("users/me", current_user)
    table.get("users/{id}", show_user)      # "users/me" never reaches this

Templates and candidate paths are compared without surrounding slashes,
so ``"/users"`` and ``"users"`` name the same route.
"""

import logging
from collections.abc import Callable, Iterator
from typing import Any

from sprig.errors import ConfigurationError
from sprig.routing.pattern import compile_template
from sprig.routing.route import HTTP_METHODS, Handler, Route, RouteMatch

logger = logging.getLogger("sprig.routing")

# Controller method bound to each resource route
RESOURCE_ACTIONS: tuple[tuple[str, str, str], ...] = (
    ("GET", "", "index"),
    ("GET", "/{id}", "show"),
    ("POST", "", "store"),
    ("PUT", "/{id}", "update"),
    ("DELETE", "/{id}", "destroy"),
)


def join_template(prefix: str, template: str) -> str:
    """Join a group prefix and a template with exactly one ``/``."""
    return f"{prefix.strip('/')}/{template.strip('/')}"


class RouteTable:
    """Registered routes keyed by HTTP method.

    Built once at startup and treated as read-only while serving.
    ``group()`` temporarily swaps the buckets, so registration is not
    safe to run concurrently.
    """

    __slots__ = ("_routes",)

    def __init__(self) -> None:
        self._routes: dict[str, list[Route]] = {}

    # -- Registration --

    def register(
        self,
        method: str,
        template: str,
        handler: Handler,
        *,
        name: str | None = None,
    ) -> Route:
        """Compile *template* and append a route to *method*'s bucket.

        Raises ``ConfigurationError`` for methods outside
        GET, POST, PUT, PATCH, and DELETE.
        """
        method = method.upper()
        if method not in HTTP_METHODS:
            allowed = ", ".join(sorted(HTTP_METHODS))
            msg = f"Unsupported HTTP method {method!r} for route {template!r}. Allowed: {allowed}"
            raise ConfigurationError(msg)

        route = Route(
            method=method,
            template=template,
            pattern=compile_template(template.strip("/")),
            handler=handler,
            name=name,
        )
        self._routes.setdefault(method, []).append(route)
        logger.debug("registered %s %s", method, template)
        return route

    def get(self, template: str, handler: Handler, *, name: str | None = None) -> Route:
        return self.register("GET", template, handler, name=name)

    def post(self, template: str, handler: Handler, *, name: str | None = None) -> Route:
        return self.register("POST", template, handler, name=name)

    def put(self, template: str, handler: Handler, *, name: str | None = None) -> Route:
        return self.register("PUT", template, handler, name=name)

    def patch(self, template: str, handler: Handler, *, name: str | None = None) -> Route:
        return self.register("PATCH", template, handler, name=name)

    def delete(self, template: str, handler: Handler, *, name: str | None = None) -> Route:
        return self.register("DELETE", template, handler, name=name)

    def route(
        self,
        template: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a handler via decorator. ``methods`` defaults to ``["GET"]``."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            for method in methods or ["GET"]:
                self.register(method, template, func, name=name)
            return func

        return decorator

    def group(self, prefix: str, callback: Callable[["RouteTable"], Any]) -> None:
        """Register the routes declared by *callback* under *prefix*.

        *callback* receives this table and registers routes as usual.
        Those routes are then re-registered as ``prefix/template`` after
        every route that existed before the call. Nested groups compose
        their prefixes.

        The outer routes are restored even when *callback* registers
        nothing or raises; a raising callback contributes no routes.
        """
        outer = self._routes
        self._routes = {}
        try:
            callback(self)
            grouped = self._routes
        finally:
            self._routes = outer

        for method, routes in grouped.items():
            for route in routes:
                self.register(
                    method,
                    join_template(prefix, route.template),
                    route.handler,
                    name=route.name,
                )

    def resource(self, name: str, controller: Any) -> list[Route]:
        """Register the five CRUD routes for *name* bound to *controller*.

        ::

            GET    name         -> controller.index
            GET    name/{id}    -> controller.show
            POST   name         -> controller.store
            PUT    name/{id}    -> controller.update
            DELETE name/{id}    -> controller.destroy
        """
        base = name.strip("/")
        return [
            self.register(method, base + suffix, (controller, action), name=f"{base}.{action}")
            for method, suffix, action in RESOURCE_ACTIONS
        ]

    # -- Lookup --

    def find_match(self, method: str, path: str) -> RouteMatch | None:
        """Return the first route in *method*'s bucket matching *path* in full."""
        candidate = path.strip("/")
        for route in self._routes.get(method.upper(), ()):
            params = route.pattern.extract(candidate)
            if params is not None:
                return RouteMatch(route=route, params=params)
        return None

    @property
    def routes(self) -> list[Route]:
        """Every registered route, bucket by bucket, in registration order."""
        return [route for bucket in self._routes.values() for route in bucket]

    def __iter__(self) -> Iterator[Route]:
        return iter(self.routes)

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._routes.values())
