"""Sprig exception hierarchy.

Shared across routing, validation, data access, and views so every
module raises and catches the same types.
"""

from dataclasses import dataclass
from typing import Any


class SprigError(Exception):
    """Base for all sprig-specific errors."""


class ConfigurationError(SprigError):
    """Raised when routes, models, or helpers are set up incorrectly.

    Typically raised at registration or construction time, never while
    serving a request.
    """


class UnknownRuleError(ConfigurationError):
    """Raised by a strict validator that meets an unregistered rule name."""


class ViewNotFound(SprigError):  # noqa: N818
    """Raised when a view or partial file does not exist."""


@dataclass(frozen=True, slots=True)
class HTTPError(SprigError):
    """An error that maps directly to an HTTP status code.

    Raised by handlers, controllers, and models. The dispatcher catches
    these and turns them into a response through its invoker.

    ``details`` is surfaced to clients as-is, so it must only ever carry
    the originating message or a field error map.
    """

    status: int
    detail: str = ""
    details: Any = None

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no route matched the request path."""

    def __init__(self, detail: str = "Endpoint not found") -> None:
        super().__init__(status=404, detail=detail)


class InvalidHandler(HTTPError):  # noqa: N818
    """500: a route is bound to something that cannot be called."""

    def __init__(self, detail: str = "Invalid route handler") -> None:
        super().__init__(status=500, detail=detail)


class MalformedInput(HTTPError):  # noqa: N818
    """400: the request body is empty or not a JSON object."""

    def __init__(self, detail: str = "Invalid JSON data") -> None:
        super().__init__(status=400, detail=detail)


class RecordNotFound(HTTPError):  # noqa: N818
    """404: an id-scoped operation targeted a missing record."""

    def __init__(self, detail: str = "Record not found") -> None:
        super().__init__(status=404, detail=detail)


class ValidationFailed(HTTPError):  # noqa: N818
    """422: input failed its rule set.

    ``errors`` maps field names to the messages of every failing rule,
    in rule declaration order.
    """

    def __init__(
        self,
        errors: dict[str, list[str]],
        detail: str = "Validation errors",
    ) -> None:
        super().__init__(status=422, detail=detail, details=errors)

    @property
    def errors(self) -> dict[str, list[str]]:
        return self.details
