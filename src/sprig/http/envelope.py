"""JSON response envelope.

Every JSON response sprig produces has the same shape::

    {"success": true,  "message": "...", "data": ...,    "timestamp": "2026-01-31 12:00:00"}
    {"success": false, "message": "...", "details": ..., "timestamp": "2026-01-31 12:00:00"}

Values the encoder does not know (dates, decimals from the database)
are stringified rather than rejected.
"""

import json
from datetime import datetime
from typing import Any

from sprig.errors import HTTPError
from sprig.http.response import Response

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _timestamp() -> str:
    return datetime.now().strftime(TIMESTAMP_FORMAT)


def _render(payload: dict[str, Any], status: int) -> Response:
    body = json.dumps(payload, ensure_ascii=False, default=str)
    return Response(body=body, status=status, content_type=JSON_CONTENT_TYPE)


def success(
    data: Any = None,
    message: str = "Successful operation",
    status: int = 200,
) -> Response:
    """A ``success: true`` envelope carrying *data*."""
    return _render(
        {"success": True, "message": message, "data": data, "timestamp": _timestamp()},
        status,
    )


def created(data: Any = None, message: str = "Record created successfully") -> Response:
    """201 success envelope."""
    return success(data, message, 201)


def error(
    message: str = "Operation error",
    status: int = 400,
    details: Any = None,
) -> Response:
    """A ``success: false`` envelope carrying optional *details*."""
    return _render(
        {"success": False, "message": message, "details": details, "timestamp": _timestamp()},
        status,
    )


def not_found(message: str = "Resource not found") -> Response:
    """404 error envelope."""
    return error(message, 404)


def validation(errors: dict[str, list[str]], message: str = "Validation errors") -> Response:
    """422 error envelope with the field error map as details."""
    return error(message, 422, errors)


def from_http_error(exc: HTTPError) -> Response:
    """Render an ``HTTPError`` with its own status, message, and details."""
    return error(exc.detail or f"Error {exc.status}", exc.status, exc.details)
