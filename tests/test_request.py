"""Tests for sprig.http.request and sprig.http.query."""

import pytest

from sprig.http.query import QueryParams
from sprig.http.request import RequestContext


class TestQueryParams:
    def test_first_value_and_list(self) -> None:
        params = QueryParams(b"tag=a&tag=b&page=2")
        assert params["tag"] == "a"
        assert params.get_list("tag") == ["a", "b"]
        assert len(params) == 2

    def test_blank_values_kept(self) -> None:
        params = QueryParams("q=")
        assert "q" in params
        assert params["q"] == ""

    def test_get_int(self) -> None:
        params = QueryParams("page=3&size=big")
        assert params.get_int("page") == 3
        assert params.get_int("size", 10) == 10
        assert params.get_int("missing") is None

    def test_missing_key(self) -> None:
        with pytest.raises(KeyError):
            QueryParams("")["x"]


class TestRequestContext:
    def test_from_uri(self) -> None:
        request = RequestContext.from_uri("post", "/api/users?page=2", '{"a": 1}', {"X-Token": "t"})
        assert request.method == "POST"
        assert request.path == "/api/users"
        assert request.query.get("page") == "2"
        assert request.json() == {"a": 1}
        assert request.header("x-token") == "t"

    def test_empty_path_defaults_to_root(self) -> None:
        assert RequestContext.from_uri("GET", "?x=1").path == "/"

    def test_content_type(self) -> None:
        request = RequestContext.from_uri("GET", "/", headers={"Content-Type": "application/json"})
        assert request.content_type == "application/json"
        assert RequestContext.from_uri("GET", "/").content_type is None

    def test_invalid_json_raises_value_error(self) -> None:
        with pytest.raises(ValueError):
            RequestContext.from_uri("POST", "/", "{oops").json()
