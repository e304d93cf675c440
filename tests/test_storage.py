"""Tests for the key-value storage backends."""

from uuid import uuid4

import pytest

from moneyday.models.audit import AuditEvent, AuditEventType
from moneyday.services.storage import (
    InMemoryAuditStorage,
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    StorageReadError,
    StorageWriteError,
)


class TestInMemoryKeyValueStorage:

    def test_missing_key_is_none(self):
        assert InMemoryKeyValueStorage().load("expenses") is None

    def test_save_load_delete(self):
        storage = InMemoryKeyValueStorage()
        assert storage.save("expenses", b"[]") is True
        assert storage.load("expenses") == b"[]"
        assert "expenses" in storage
        assert storage.delete("expenses") is True
        assert storage.delete("expenses") is False
        assert storage.load("expenses") is None


class TestJsonFileKeyValueStorage:

    def test_missing_file_is_none(self, tmp_path):
        assert JsonFileKeyValueStorage(tmp_path).load("expenses") is None

    def test_creates_directory_on_first_write(self, tmp_path):
        directory = tmp_path / "nested" / "data"
        storage = JsonFileKeyValueStorage(directory)

        storage.save("expenses", b'[{"a": 1}]')

        assert (directory / "expenses.json").read_bytes() == b'[{"a": 1}]'
        assert storage.load("expenses") == b'[{"a": 1}]'

    def test_overwrite_leaves_no_temp_files(self, tmp_path):
        storage = JsonFileKeyValueStorage(tmp_path)
        storage.save("expenses", b"first")
        storage.save("expenses", b"second")

        assert storage.load("expenses") == b"second"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["expenses.json"]

    def test_delete(self, tmp_path):
        storage = JsonFileKeyValueStorage(tmp_path)
        storage.save("expenses", b"[]")
        assert storage.delete("expenses") is True
        assert storage.delete("expenses") is False

    @pytest.mark.parametrize("key", ["../escape", "a/b", "", "..", "with space"])
    def test_rejects_unsafe_keys(self, tmp_path, key):
        with pytest.raises(ValueError):
            JsonFileKeyValueStorage(tmp_path).path_for(key)

    def test_unwritable_location_raises_write_error(self, tmp_path):
        blocker = tmp_path / "not-a-directory"
        blocker.write_text("file in the way")
        storage = JsonFileKeyValueStorage(blocker)

        with pytest.raises(StorageWriteError):
            storage.save("expenses", b"[]")

    def test_unreadable_payload_raises_read_error(self, tmp_path):
        (tmp_path / "expenses.json").mkdir()
        with pytest.raises(StorageReadError):
            JsonFileKeyValueStorage(tmp_path).load("expenses")

    @pytest.mark.parametrize("key", [".", ".."])
    def test_invalid_key_raises_storage_errors(self, tmp_path, key):
        storage = JsonFileKeyValueStorage(tmp_path)

        with pytest.raises(StorageReadError):
            storage.load(key)
        with pytest.raises(StorageWriteError):
            storage.save(key, b"[]")
        with pytest.raises(StorageWriteError):
            storage.delete(key)


class TestInMemoryAuditStorage:

    def test_recent_events_newest_first_and_bounded(self):
        storage = InMemoryAuditStorage(max_events=3)
        events = [
            AuditEvent(
                event_type=AuditEventType.EXPENSE_ADDED,
                entity_id=uuid4(),
                description=f"event {n}",
            )
            for n in range(5)
        ]
        for event in events:
            storage.append_event(event)

        recent = storage.get_recent_events()
        assert [event.description for event in recent] == ["event 4", "event 3", "event 2"]
        assert storage.get_recent_events(limit=1) == [events[4]]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
