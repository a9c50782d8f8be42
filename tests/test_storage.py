"""Tests for the key-value storage backends."""

import json

import pytest

from reimbursements.services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    QuotaExceededError,
    StorageError,
    StorageUnavailableError,
)


class TestInMemoryStorage:
    """Tests for the dict-backed store."""

    def test_read_missing_key(self):
        assert InMemoryStorage().read("nada") is None

    def test_write_then_read(self):
        storage = InMemoryStorage()
        storage.write("k", "v")

        assert storage.read("k") == "v"
        assert storage.snapshot() == {"k": "v"}

    def test_quota_counts_keys_and_values(self):
        storage = InMemoryStorage(quota_chars=10)
        storage.write("k", "123456789")

        with pytest.raises(QuotaExceededError) as exc_info:
            storage.write("j", "1")
        assert exc_info.value.required == 12
        assert exc_info.value.quota == 10

    def test_replacing_a_value_does_not_count_it_twice(self):
        storage = InMemoryStorage(quota_chars=10)
        storage.write("k", "123456789")
        storage.write("k", "987654321")

        assert storage.read("k") == "987654321"

    def test_failed_write_keeps_previous_value(self):
        storage = InMemoryStorage({"k": "old"}, quota_chars=5)

        with pytest.raises(StorageError):
            storage.write("k", "much too long")
        assert storage.read("k") == "old"


class TestJsonFileStorage:
    """Tests for the file-backed store."""

    def test_missing_file_is_empty(self, tmp_path):
        assert JsonFileStorage(tmp_path / "store.json").read("k") is None

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        JsonFileStorage(path).write("k", "olá")

        assert JsonFileStorage(path).read("k") == "olá"
        assert json.loads(path.read_text(encoding="utf-8")) == {"k": "olá"}

    def test_write_keeps_other_keys(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "store.json")
        storage.write("a", "1")
        storage.write("b", "2")

        assert storage.read("a") == "1"
        assert storage.read("b") == "2"

    def test_leaves_no_temporary_files(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "store.json")
        storage.write("a", "1")

        assert [p.name for p in tmp_path.iterdir()] == ["store.json"]

    def test_quota_exceeded_leaves_file_untouched(self, tmp_path):
        path = tmp_path / "store.json"
        storage = JsonFileStorage(path, quota_chars=8)
        storage.write("a", "1234")

        with pytest.raises(QuotaExceededError):
            storage.write("b", "1234")
        assert storage.read("b") is None

    def test_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(StorageUnavailableError):
            JsonFileStorage(path).read("k")

    def test_non_object_file_raises(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(StorageUnavailableError):
            JsonFileStorage(path).read("k")

    def test_unwritable_location_raises(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not a directory", encoding="utf-8")

        with pytest.raises(StorageUnavailableError):
            JsonFileStorage(blocker / "store.json").write("k", "v")
