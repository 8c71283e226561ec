"""Tests for sprig.storage.JsonFile — dot-notation JSON documents."""

import json

import pytest

from sprig.storage import JsonFile, StorageError


@pytest.fixture
def settings_path(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"mail": {"host": "smtp.test", "port": 25}, "debug": False}))
    return path


class TestLoadSave:
    def test_load(self, settings_path) -> None:
        store = JsonFile(settings_path)
        assert not store.loaded
        data = store.load()
        assert store.loaded
        assert data["mail"]["host"] == "smtp.test"

    def test_load_missing_file(self, tmp_path) -> None:
        with pytest.raises(StorageError, match="not found"):
            JsonFile(tmp_path / "nope.json").load()

    def test_load_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{broken")
        store = JsonFile(path)
        with pytest.raises(StorageError, match="JSON decode error"):
            store.load()
        assert not store.loaded

    def test_save_round_trip(self, settings_path) -> None:
        store = JsonFile(settings_path)
        store.load()
        store.set("mail.port", 587)
        store.save()
        assert json.loads(settings_path.read_text())["mail"]["port"] == 587

    def test_save_pretty_and_unicode(self, tmp_path) -> None:
        store = JsonFile(tmp_path / "out.json")
        store.set("city", "Zürich")
        store.save()
        text = (tmp_path / "out.json").read_text(encoding="utf-8")
        assert "Zürich" in text
        assert "\n    " in text

    def test_save_compact(self, tmp_path) -> None:
        store = JsonFile(tmp_path / "out.json")
        store.data = {"a": 1}
        store.save(pretty=False)
        assert (tmp_path / "out.json").read_text() == '{"a": 1}'

    def test_save_without_data(self, tmp_path) -> None:
        with pytest.raises(StorageError, match="No data to save"):
            JsonFile(tmp_path / "x.json").save()

    def test_changing_path_forgets_data(self, settings_path, tmp_path) -> None:
        store = JsonFile(settings_path)
        store.load()
        store.path = tmp_path / "other.json"
        assert store.data is None
        assert not store.loaded


class TestDotNotation:
    def test_get(self, settings_path) -> None:
        store = JsonFile(settings_path)
        store.load()
        assert store.get("mail.host") == "smtp.test"
        assert store.get("debug") is False
        assert store.get("mail.user", "anon") == "anon"
        assert store.get("mail.host.deeper") is None

    def test_get_before_load(self, settings_path) -> None:
        assert JsonFile(settings_path).get("mail.host", "x") == "x"

    def test_has(self, settings_path) -> None:
        store = JsonFile(settings_path)
        store.load()
        assert store.has("mail.port")
        assert not store.has("mail.user")

    def test_set_creates_intermediates(self, tmp_path) -> None:
        store = JsonFile(tmp_path / "new.json")
        store.set("a.b.c", 1)
        assert store.data == {"a": {"b": {"c": 1}}}
        store.set("a.b", "flat")
        store.set("a.b.d", 2)
        assert store.data == {"a": {"b": {"d": 2}}}

    def test_set_on_array_document_raises(self, tmp_path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        store = JsonFile(path)
        store.load()
        with pytest.raises(StorageError, match="JSON object"):
            store.set("a", 1)
        with pytest.raises(StorageError):
            store.set("a.b", 1)
        assert store.data == [1, 2]

    def test_remove(self, settings_path) -> None:
        store = JsonFile(settings_path)
        store.load()
        assert store.remove("mail.port") is True
        assert not store.has("mail.port")
        assert store.remove("mail.port") is False
        assert store.remove("nothing.here") is False
        assert store.remove("debug") is True


class TestFileInfo:
    def test_existing(self, settings_path) -> None:
        store = JsonFile(settings_path)
        assert store.exists()
        info = store.file_info()
        assert info["size"] == settings_path.stat().st_size
        assert info["readable"] is True
        assert set(info) == {"size", "modified", "created", "readable", "writable"}

    def test_missing(self, tmp_path) -> None:
        store = JsonFile(tmp_path / "none.json")
        assert not store.exists()
        assert store.file_info() is None
