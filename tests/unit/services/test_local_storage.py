"""本地存储单元测试."""

import pytest

from src.services.local_storage import LocalStorage
from src.utils.exceptions import StorageError


class TestLocalStorage:
    """键值读写测试."""

    def test_missing_key(self, storage):
        assert storage.get_item("userToken") is None

    def test_set_and_get(self, storage):
        storage.set_item("userToken", "abc")
        assert storage.get_item("userToken") == "abc"
        assert storage.path.exists()

    def test_values_are_strings(self, storage):
        storage.set_item("count", 5)
        assert storage.get_item("count") == "5"

    def test_remove_multiple(self, storage):
        storage.set_item("a", "1")
        storage.set_item("b", "2")
        storage.set_item("c", "3")
        storage.remove_item("a", "b", "missing")
        assert storage.keys() == ["c"]

    def test_clear(self, storage):
        storage.set_item("a", "1")
        storage.clear()
        assert storage.keys() == []

    def test_shared_between_instances(self, storage):
        """同一路径的两个实例看到相同数据."""
        storage.set_item("rememberedEmail", "a@b.co")
        other = LocalStorage(storage.path)
        assert other.get_item("rememberedEmail") == "a@b.co"

    def test_json_roundtrip(self, storage):
        storage.set_json("userInfo", {"name": "Ada", "status": "approved"})
        assert storage.get_json("userInfo") == {"name": "Ada", "status": "approved"}

    def test_invalid_json_value(self, storage):
        storage.set_item("userInfo", "{not json")
        assert storage.get_json("userInfo") is None

    def test_corrupted_file(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text("[1, 2", encoding="utf-8")
        assert LocalStorage(path).get_item("userToken") is None

    def test_non_object_file(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert LocalStorage(path).keys() == []

    def test_write_failure(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        storage = LocalStorage(blocker / "storage.json")
        with pytest.raises(StorageError):
            storage.set_item("a", "1")
