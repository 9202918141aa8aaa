"""Tests for the key-value stores."""
import json

from richview.config import get_settings
from richview.storage import MemoryStore, FileStore, create_store


class TestMemoryStore:

    def test_get_set_delete(self):
        store = MemoryStore()
        assert store.get("k") is None
        store.set("k", "v")
        assert store.get("k") == "v"
        store.delete("k")
        store.delete("k")
        assert store.get("k") is None


class TestFileStore:

    def test_persists_between_instances(self, tmp_path):
        path = tmp_path / "editor" / "store.json"
        FileStore(path).set("content", "{}")
        assert FileStore(path).get("content") == "{}"
        assert json.loads(path.read_text()) == {"content": "{}"}

    def test_missing_file(self, tmp_path):
        assert FileStore(tmp_path / "none.json").get("content") is None

    def test_corrupt_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json")
        store = FileStore(path)
        assert store.get("content") is None
        store.set("content", "x")
        assert store.get("content") == "x"

    def test_non_object_file(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("[1, 2]")
        assert FileStore(path).get("content") is None

    def test_delete(self, tmp_path):
        store = FileStore(tmp_path / "store.json")
        store.set("a", "1")
        store.set("b", "2")
        store.delete("a")
        assert store.get("a") is None
        assert store.get("b") == "2"


class TestCreateStore:

    def test_memory_by_default(self, monkeypatch):
        monkeypatch.delenv("RICHVIEW_STORAGE_PATH", raising=False)
        assert isinstance(create_store(), MemoryStore)

    def test_file_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("RICHVIEW_STORAGE_PATH", str(tmp_path / "store.json"))
        store = create_store()
        assert isinstance(store, FileStore)
        assert store.path == tmp_path / "store.json"
        assert get_settings().storage_path == str(tmp_path / "store.json")
