"""Route and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from sprig.routing.pattern import CompiledPattern

HTTP_METHODS: frozenset[str] = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})

# A callable, or a ``(receiver, "method_name")`` pair resolved at dispatch
# time. View routes also accept a ``ViewTarget``.
type Handler = Callable[..., Any] | tuple[Any, str] | object


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen (method, template, handler) binding.

    Created at registration time and owned by a ``RouteTable``. Grouping
    creates new routes with prefixed templates; it never mutates these.
    """

    method: str
    template: str
    pattern: CompiledPattern
    handler: Handler
    name: str | None = None

    @property
    def param_names(self) -> tuple[str, ...]:
        return self.pattern.param_names


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    params: dict[str, str]
