"""Tests for sprig.data.controller — CRUD actions mapped to JSON envelopes."""

import pytest

from sprig.data import CrudController, CrudModel, Database, QueryError, read_json
from sprig.errors import MalformedInput
from sprig.http.request import RequestContext


class Posts(CrudModel):
    table = "posts"
    fillable = frozenset({"title", "status"})
    rules = {
        "title": ["required", "string", "min:3"],
        "status": ["in:draft:published"],
    }


@pytest.fixture
async def controller(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'posts.db'}")
    await db.execute(
        "CREATE TABLE posts (id INTEGER PRIMARY KEY AUTOINCREMENT, title TEXT, status TEXT)"
    )
    yield CrudController(Posts(db))
    await db.disconnect()


def _req(method: str, body: bytes | str = b"") -> RequestContext:
    return RequestContext.from_uri(method, "/api/posts", body)


class TestReadJson:
    def test_object(self) -> None:
        assert read_json(_req("POST", '{"a": 1}')) == {"a": 1}

    @pytest.mark.parametrize("body", ["", "   ", "{not json", "[1, 2]", "{}", '"text"', "null"])
    def test_rejects(self, body: str) -> None:
        with pytest.raises(MalformedInput):
            read_json(_req("POST", body))


class TestIndexAndShow:
    async def test_index_empty(self, controller) -> None:
        response = await controller.index(_req("GET"), {})
        assert response.status == 200
        body = response.json()
        assert body["data"] == []
        assert body["message"] == "Records successfully obtained"

    async def test_show(self, controller) -> None:
        await controller.model.create({"title": "Hello"})
        response = await controller.show(_req("GET"), {"id": "1"})
        assert response.status == 200
        assert response.json()["data"]["title"] == "Hello"
        assert response.json()["message"] == "Record successfully obtained"

    async def test_show_missing(self, controller) -> None:
        response = await controller.show(_req("GET"), {"id": "9"})
        assert response.status == 404
        assert response.json()["message"] == "Record not found"

    async def test_non_decimal_digit_id_is_404(self, controller) -> None:
        await controller.model.create({"title": "Hello"})
        params = {"id": "²"}
        show = await controller.show(_req("GET"), params)
        update = await controller.update(_req("PUT", '{"title": "Changed"}'), params)
        destroy = await controller.destroy(_req("DELETE"), params)
        for response in (show, update, destroy):
            assert response.status == 404
            assert response.json()["message"] == "Record not found"

    async def test_read_failure_is_500(self, controller, monkeypatch) -> None:
        async def broken():
            raise QueryError("Error getting records: disk on fire")

        monkeypatch.setattr(controller.model, "find_all", broken)
        response = await controller.index(_req("GET"), {})
        assert response.status == 500
        assert response.json()["message"] == "Error getting records: disk on fire"


class TestStore:
    async def test_created(self, controller) -> None:
        response = await controller.store(_req("POST", '{"title": "Hello", "status": "draft"}'), {})
        assert response.status == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Record created successfully"
        assert body["data"] == {"id": 1, "title": "Hello", "status": "draft"}

    async def test_invalid_json(self, controller) -> None:
        response = await controller.store(_req("POST", "{oops"), {})
        assert response.status == 400
        assert response.json()["message"] == "Invalid JSON data"
        assert await controller.model.count() == 0

    async def test_empty_body(self, controller) -> None:
        response = await controller.store(_req("POST"), {})
        assert response.status == 400
        assert response.json()["message"] == "Invalid JSON data"

    async def test_validation_failure_is_400_with_details(self, controller) -> None:
        response = await controller.store(_req("POST", '{"title": "Hi", "status": "gone"}'), {})
        assert response.status == 400
        body = response.json()
        assert body["success"] is False
        assert body["details"] == {
            "title": ["The title field must be at least 3 characters"],
            "status": ["The status field must be one of: draft, published"],
        }


class TestUpdate:
    async def test_updated(self, controller) -> None:
        await controller.model.create({"title": "Hello"})
        response = await controller.update(_req("PUT", '{"title": "Changed"}'), {"id": "1"})
        assert response.status == 200
        assert response.json()["data"]["title"] == "Changed"
        assert response.json()["message"] == "Record successfully updated"

    async def test_missing_record(self, controller) -> None:
        response = await controller.update(_req("PUT", '{"title": "Changed"}'), {"id": "5"})
        assert response.status == 404

    async def test_invalid_json_before_model(self, controller) -> None:
        response = await controller.update(_req("PUT", "[]"), {"id": "5"})
        assert response.status == 400


class TestDestroy:
    async def test_deleted(self, controller) -> None:
        await controller.model.create({"title": "Hello"})
        response = await controller.destroy(_req("DELETE"), {"id": "1"})
        assert response.status == 200
        body = response.json()
        assert body["message"] == "Record deleted successfully"
        assert body["data"] is None

    async def test_missing_record(self, controller) -> None:
        response = await controller.destroy(_req("DELETE"), {"id": "1"})
        assert response.status == 404
        assert response.json()["message"] == "Record not found"

    async def test_nothing_removed_is_500(self, controller, monkeypatch) -> None:
        async def no_rows(record_id):
            return False

        monkeypatch.setattr(controller.model, "delete", no_rows)
        response = await controller.destroy(_req("DELETE"), {"id": "1"})
        assert response.status == 500
        assert response.json()["message"] == "The record could not be deleted"
