"""Tests for the storage backends and the transaction storage adapter."""

import json
import math

import pytest

from finance_tracker.models.audit import AuditEventType
from finance_tracker.services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorageInterface,
    StorageError,
    TransactionStorage,
)


class FailingStorage(KeyValueStorageInterface):
    """Backend whose reads and writes always fail."""

    def get_item(self, key):
        raise StorageError("disk on fire")

    def set_item(self, key, value):
        raise StorageError("quota exceeded")


class TestJsonFileStorage:
    """Tests for JsonFileStorage."""

    def test_missing_key_is_none(self, tmp_path):
        """Test that an absent file reads as None."""
        assert JsonFileStorage(tmp_path).get_item("transactions") is None

    def test_set_then_get(self, tmp_path):
        """Test that a written value is read back from <key>.json."""
        backend = JsonFileStorage(tmp_path)
        backend.set_item("transactions", "[]")
        assert backend.get_item("transactions") == "[]"
        assert (tmp_path / "transactions.json").read_text(encoding="utf-8") == "[]"

    def test_set_overwrites(self, tmp_path):
        """Test that a second write replaces the first."""
        backend = JsonFileStorage(tmp_path)
        backend.set_item("k", "one")
        backend.set_item("k", "two")
        assert backend.get_item("k") == "two"

    def test_creates_data_dir(self, tmp_path):
        """Test that the directory is created on first write."""
        backend = JsonFileStorage(tmp_path / "nested" / "data")
        backend.set_item("k", "v")
        assert (tmp_path / "nested" / "data" / "k.json").exists()

    def test_no_temp_files_left_behind(self, tmp_path):
        """Test that the atomic write cleans up after itself."""
        backend = JsonFileStorage(tmp_path)
        backend.set_item("k", "v")
        assert [p.name for p in tmp_path.iterdir()] == ["k.json"]

    def test_unwritable_dir_raises_storage_error(self, tmp_path):
        """Test that a data dir that is really a file fails with StorageError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(StorageError):
            JsonFileStorage(blocker).set_item("k", "v")

    def test_undecodable_file_raises_storage_error(self, tmp_path):
        """Test that non-UTF-8 content fails with StorageError."""
        (tmp_path / "k.json").write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(StorageError):
            JsonFileStorage(tmp_path).get_item("k")


class TestInMemoryStorage:
    """Tests for InMemoryStorage."""

    def test_counts_writes(self):
        """Test that write_count tracks set_item calls."""
        backend = InMemoryStorage({"k": "v"})
        assert backend.get_item("k") == "v"
        backend.set_item("k", "w")
        assert backend.get_item("k") == "w"
        assert backend.get_item("missing") is None
        assert backend.write_count == 1


class TestTransactionStorageLoad:
    """Tests for TransactionStorage.load."""

    def test_absent_key_loads_empty(self, storage, audit_logger):
        """Test that a fresh backend loads as an empty list."""
        assert storage.load() == []
        assert audit_logger.history[-1].event_type == AuditEventType.STORAGE_LOADED

    @pytest.mark.parametrize("raw", [
        "{not json",
        '{"id": 1}',
        '"transactions"',
        '[{"id": 1}]',
        '[{"id": "x", "description": "", "amount": 1, "category": "food", "date": ""}]',
    ])
    def test_corrupt_value_loads_empty(self, audit_logger, raw):
        """Test that unparseable or wrong-shape data loads as an empty list."""
        storage = TransactionStorage(InMemoryStorage({"transactions": raw}), audit_logger=audit_logger)
        assert storage.load() == []
        assert audit_logger.history[-1].event_type == AuditEventType.STORAGE_CORRUPT

    def test_read_failure_loads_empty(self, audit_logger):
        """Test that a failing backend read loads as an empty list."""
        storage = TransactionStorage(FailingStorage(), audit_logger=audit_logger)
        assert storage.load() == []
        assert audit_logger.history[-1].event_type == AuditEventType.STORAGE_CORRUPT

    def test_loads_stored_records(self):
        """Test that well-formed records are loaded in stored order."""
        raw = json.dumps([
            {"id": 2, "description": "Rent", "amount": -900, "category": "housing", "date": "2024-01-05"},
            {"id": 1, "description": "Pay", "amount": 3000, "category": "salary", "date": "2024-01-01"},
        ])
        transactions = TransactionStorage(InMemoryStorage({"transactions": raw})).load()
        assert [t.id for t in transactions] == [2, 1]
        assert transactions[0].amount == -900.0

    def test_duplicate_ids_first_wins(self, audit_logger):
        """Test that only the first record with a given id is kept."""
        raw = json.dumps([
            {"id": 1, "description": "First", "amount": 1, "category": "food", "date": ""},
            {"id": 1, "description": "Second", "amount": 2, "category": "food", "date": ""},
        ])
        storage = TransactionStorage(InMemoryStorage({"transactions": raw}), audit_logger=audit_logger)
        transactions = storage.load()
        assert [t.description for t in transactions] == ["First"]
        assert any(e.event_type == AuditEventType.STORAGE_CORRUPT for e in audit_logger.history)

    def test_custom_key(self):
        """Test that the adapter reads only its own key."""
        backend = InMemoryStorage({"other": "[]", "mine": "[]"})
        storage = TransactionStorage(backend, key="mine")
        assert storage.key == "mine"
        assert storage.load() == []


class TestTransactionStorageSave:
    """Tests for TransactionStorage.save."""

    def test_save_writes_json_array(self, storage, backend, make_transaction):
        """Test the stored format: a JSON array of plain records."""
        storage.save([make_transaction(id=7)])
        assert json.loads(backend.get_item("transactions")) == [{
            "id": 7,
            "description": "Groceries",
            "amount": -20.0,
            "category": "food",
            "date": "2024-01-05",
        }]

    def test_nan_amount_written_as_null(self, storage, backend, make_transaction):
        """Test that NaN is written as null and read back as NaN."""
        storage.save([make_transaction(amount=math.nan)])
        assert json.loads(backend.get_item("transactions"))[0]["amount"] is None
        assert math.isnan(storage.load()[0].amount)

    def test_infinite_amount_reloads_as_nan(self, storage, backend, make_transaction):
        """Test that infinity is written as null, so it comes back as NaN."""
        storage.save([make_transaction(amount=math.inf)])
        assert json.loads(backend.get_item("transactions"))[0]["amount"] is None
        assert math.isnan(storage.load()[0].amount)

    def test_save_then_load_with_files(self, tmp_path, make_transaction):
        """Test a save/load cycle through the file backend."""
        storage = TransactionStorage(JsonFileStorage(tmp_path))
        records = [make_transaction(id=1), make_transaction(id=2, amount=45.0, category="salary")]
        storage.save(records)
        assert TransactionStorage(JsonFileStorage(tmp_path)).load() == records

    def test_save_failure_raises(self, audit_logger, make_transaction):
        """Test that a failed write raises StorageError and is logged."""
        storage = TransactionStorage(FailingStorage(), audit_logger=audit_logger)
        with pytest.raises(StorageError):
            storage.save([make_transaction()])
        assert audit_logger.history[-1].event_type == AuditEventType.SAVE_FAILED

    def test_save_empty_list(self, storage, backend):
        """Test that an empty collection is stored as an empty array."""
        storage.save([])
        assert backend.get_item("transactions") == "[]"
