"""Routing — template compilation, route tables, and dispatch.

Routes are registered at startup and scanned in registration order at
request time: the first matching route wins.
"""

from sprig.routing.dispatcher import Dispatcher, JsonInvoker, RouteInvoker, url_for
from sprig.routing.pattern import CompiledPattern, compile_template
from sprig.routing.route import Route, RouteMatch
from sprig.routing.table import RouteTable

__all__ = [
    "CompiledPattern",
    "Dispatcher",
    "JsonInvoker",
    "Route",
    "RouteInvoker",
    "RouteMatch",
    "RouteTable",
    "compile_template",
    "url_for",
]
