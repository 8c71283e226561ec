"""RESTful controllers over a ``CrudModel``.

``RouteTable.resource("users", UsersController(Users(db)))`` binds the
five actions below to::

    GET    users        -> index
    GET    users/{id}   -> show
    POST   users        -> store
    PUT    users/{id}   -> update
    DELETE users/{id}   -> destroy

Every action returns a JSON envelope; model failures are translated to
status codes here and never reach the dispatcher.
"""

import json
import logging
from typing import Any

from sprig.data.errors import DataError
from sprig.data.model import CrudModel
from sprig.errors import MalformedInput, RecordNotFound, ValidationFailed
from sprig.http import envelope
from sprig.http.request import RequestContext
from sprig.http.response import Response

logger = logging.getLogger("sprig.data")


def read_json(request: RequestContext) -> dict[str, Any]:
    """Parse the request body as a non-empty JSON object.

    Raises ``MalformedInput`` for an empty body, invalid JSON, or a
    payload that is not an object or is an empty object.
    """
    if not request.raw_body.strip():
        raise MalformedInput
    try:
        payload = json.loads(request.raw_body)
    except ValueError:
        raise MalformedInput from None
    if not isinstance(payload, dict) or not payload:
        raise MalformedInput
    return payload


class CrudController:
    """List/show/create/update/delete actions for one model.

    Subclass to add actions or override the response messages::

        class UsersController(CrudController):
            async def active(self, request, params):
                rows = await self.model.db.fetch("SELECT * FROM users WHERE active")
                return envelope.success(rows)
    """

    def __init__(self, model: CrudModel) -> None:
        self.model = model

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.model!r})"

    async def index(self, request: RequestContext, params: dict[str, str]) -> Response:
        try:
            records = await self.model.find_all()
        except DataError as exc:
            logger.warning("index on %s failed: %s", self.model.table, exc)
            return envelope.error(str(exc), 500)
        return envelope.success(records, "Records successfully obtained")

    async def show(self, request: RequestContext, params: dict[str, str]) -> Response:
        try:
            record = await self.model.find_by_id(params["id"])
        except DataError as exc:
            logger.warning("show on %s failed: %s", self.model.table, exc)
            return envelope.error(str(exc), 500)
        if record is None:
            return envelope.not_found("Record not found")
        return envelope.success(record, "Record successfully obtained")

    async def store(self, request: RequestContext, params: dict[str, str]) -> Response:
        try:
            payload = read_json(request)
        except MalformedInput as exc:
            return envelope.error(exc.detail, 400)
        try:
            record = await self.model.create(payload)
        except ValidationFailed as exc:
            return envelope.error(exc.detail, 400, exc.errors)
        except DataError as exc:
            logger.warning("store on %s failed: %s", self.model.table, exc)
            return envelope.error(str(exc), 400)
        return envelope.created(record, "Record created successfully")

    async def update(self, request: RequestContext, params: dict[str, str]) -> Response:
        try:
            payload = read_json(request)
        except MalformedInput as exc:
            return envelope.error(exc.detail, 400)
        try:
            record = await self.model.update(params["id"], payload)
        except RecordNotFound as exc:
            return envelope.not_found(exc.detail)
        except ValidationFailed as exc:
            return envelope.error(exc.detail, 400, exc.errors)
        except DataError as exc:
            logger.warning("update on %s failed: %s", self.model.table, exc)
            return envelope.error(str(exc), 400)
        return envelope.success(record, "Record successfully updated")

    async def destroy(self, request: RequestContext, params: dict[str, str]) -> Response:
        try:
            removed = await self.model.delete(params["id"])
        except RecordNotFound as exc:
            return envelope.not_found(exc.detail)
        except DataError as exc:
            logger.warning("destroy on %s failed: %s", self.model.table, exc)
            return envelope.error(str(exc), 400)
        if not removed:
            return envelope.error("The record could not be deleted", 500)
        return envelope.success(None, "Record deleted successfully")
