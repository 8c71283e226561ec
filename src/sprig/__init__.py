"""Sprig: a small web framework for JSON APIs and server-rendered pages.

Path routing with ``{param}`` segments, declarative validation, CRUD
models over SQLite or PostgreSQL, a uniform JSON envelope, and kida
views with layouts.

Basic usage::

    from sprig import App

    app = App()

    @app.api.route("/hello/{name}")
    def hello(params):
        return {"greeting": f"Hello, {params['name']}!"}

Served by any ASGI server (``uvicorn myapp:app``), or exercised in tests
with ``sprig.testing.TestClient``.
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "NotFound",
    "RequestContext",
    "Response",
    "RouteTable",
    "SprigError",
    "ValidationFailed",
    "redirect",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import sprig`` fast while providing a clean top-level API.
    """
    if name == "App":
        from sprig.app import App

        return App

    if name == "AppConfig":
        from sprig.config import AppConfig

        return AppConfig

    if name == "RequestContext":
        from sprig.http.request import RequestContext

        return RequestContext

    if name in ("Response", "redirect"):
        from sprig.http import response as _resp

        return getattr(_resp, name)

    if name == "RouteTable":
        from sprig.routing.table import RouteTable

        return RouteTable

    if name in ("ConfigurationError", "HTTPError", "NotFound", "SprigError", "ValidationFailed"):
        from sprig import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
