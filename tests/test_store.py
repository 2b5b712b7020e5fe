"""Tests for the transaction store and the draft validator."""

import json
import math
from concurrent.futures import ThreadPoolExecutor

import pytest

from finance_tracker.models.audit import AuditEventType
from finance_tracker.models.transaction import (
    TransactionDraft,
    ValidationIssue,
    ValidationResult,
)
from finance_tracker.services.storage import (
    InMemoryStorage,
    NotFoundError,
    TransactionStorage,
)
from finance_tracker.store import TransactionStore
from finance_tracker.validation import TransactionValidator, ValidationError


class TestTransactionValidator:
    """Tests for TransactionValidator."""

    def test_missing_category_is_error(self, make_draft):
        """Test that a blank category blocks the draft."""
        result = TransactionValidator().validate(make_draft(category=None))
        assert result.is_valid is False
        assert result.errors[0].field == "category"
        assert result.errors[0].message == "Please select a category"

    def test_empty_string_category_is_error(self, make_draft):
        """Test that an empty-string category blocks the draft."""
        assert TransactionValidator().validate(make_draft(category="")).is_valid is False

    def test_unknown_category_is_warning(self, make_draft):
        """Test that an unlisted category only warns."""
        result = TransactionValidator().validate(make_draft(category="pets"))
        assert result.is_valid is True
        assert [w.issue_type for w in result.warnings] == ["unknown_value"]

    def test_nan_amount_is_warning(self, make_draft):
        """Test that a NaN amount only warns."""
        result = TransactionValidator().validate(make_draft(amount=math.nan))
        assert result.is_valid is True
        assert [w.field for w in result.warnings] == ["amount"]

    def test_check_raises_with_result(self, make_draft):
        """Test that check() raises ValidationError carrying the result."""
        with pytest.raises(ValidationError) as exc_info:
            TransactionValidator().check(make_draft(category=""))
        assert exc_info.value.result.error_count == 1
        assert "Please select a category" in str(exc_info.value)

    def test_user_friendly_summary(self, make_draft):
        """Test the summary lists errors before warnings."""
        result = TransactionValidator().validate(make_draft(category="", amount=math.nan))
        summary = TransactionValidator.get_user_friendly_summary(result)
        lines = summary.splitlines()
        assert lines[0].startswith("❌")
        assert lines[1].startswith("⚠️")


class TestTransactionStoreAdd:
    """Tests for TransactionStore.add."""

    def test_add_increases_size_by_one(self, store, make_draft):
        """Test that a valid add appends exactly one retrievable record."""
        transaction = store.add(make_draft())
        assert len(store) == 1
        assert store.find_by_id(transaction.id) == transaction

    def test_add_mints_id_from_clock(self, store, make_draft):
        """Test that the id is the clock in epoch milliseconds."""
        transaction = store.add(make_draft())
        assert transaction.id == 1_700_000_000_000

    def test_ids_unique_within_same_millisecond(self, store, make_draft):
        """Test that ids stay unique and increasing with a frozen clock."""
        first = store.add(make_draft())
        second = store.add(make_draft())
        third = store.add(make_draft())
        assert [first.id, second.id, third.id] == [first.id, first.id + 1, first.id + 2]

    def test_ids_follow_clock_when_it_advances(self, store, make_draft, clock):
        """Test that a later add uses the later time."""
        first = store.add(make_draft())
        clock.advance(5)
        second = store.add(make_draft())
        assert second.id == first.id + 5000

    def test_add_empty_category_changes_nothing(self, store, backend, make_draft):
        """Test that a rejected add leaves the collection and storage untouched."""
        with pytest.raises(ValidationError):
            store.add(make_draft(category=""))
        assert len(store) == 0
        assert backend.write_count == 0

    def test_add_persists_full_collection(self, store, backend, make_draft):
        """Test that each add writes the whole list."""
        store.add(make_draft(description="One"))
        store.add(make_draft(description="Two"))
        assert backend.write_count == 2
        stored = json.loads(backend.get_item("transactions"))
        assert [t["description"] for t in stored] == ["One", "Two"]

    def test_add_keeps_unparseable_amount_as_nan(self, store, make_draft):
        """Test that a NaN amount is stored as-is."""
        transaction = store.add(make_draft(amount=math.nan))
        assert math.isnan(store.find_by_id(transaction.id).amount)

    def test_add_is_audited(self, store, audit_logger, make_draft):
        """Test that an add emits a transaction_added event."""
        transaction = store.add(make_draft())
        added = [e for e in audit_logger.history if e.event_type == AuditEventType.TRANSACTION_ADDED]
        assert len(added) == 1
        assert added[0].transaction_id == transaction.id

    def test_rejected_add_is_audited(self, store, audit_logger, make_draft):
        """Test that a rejected add emits a validation_failed event."""
        with pytest.raises(ValidationError):
            store.add(make_draft(category=None))
        assert any(e.event_type == AuditEventType.VALIDATION_FAILED for e in audit_logger.history)

    def test_add_goes_through_validator_check(self, storage, make_draft):
        """Test that a stricter validator's check() decides what the store accepts."""

        class DescriptionRequired(TransactionValidator):
            def check(self, draft):
                if not draft.description:
                    raise ValidationError(ValidationResult(
                        is_valid=False,
                        issues=[ValidationIssue(
                            field="description",
                            issue_type="missing",
                            message="Please add a description",
                            severity="error",
                        )],
                    ))
                return super().check(draft)

        store = TransactionStore(storage, validator=DescriptionRequired())
        with pytest.raises(ValidationError) as exc_info:
            store.add(make_draft(description=""))
        assert exc_info.value.result.errors[0].field == "description"
        assert len(store) == 0
        assert store.add(make_draft(description="Lunch")).description == "Lunch"


class TestTransactionStoreUpdate:
    """Tests for TransactionStore.update."""

    def test_update_preserves_id_and_replaces_fields(self, store, make_draft):
        """Test that update keeps the id and replaces everything else."""
        original = store.add(make_draft())
        updated = store.update(
            original.id,
            TransactionDraft(description="Paycheck", amount=2500, category="salary", date="2024-02-01"),
        )
        assert updated.id == original.id
        assert updated.description == "Paycheck"
        assert updated.amount == 2500
        assert updated.category == "salary"
        assert updated.date == "2024-02-01"
        assert store.find_by_id(original.id) == updated

    def test_update_keeps_position(self, store, make_draft):
        """Test that an updated record stays where it was."""
        first = store.add(make_draft(description="First"))
        second = store.add(make_draft(description="Second"))
        store.update(first.id, make_draft(description="First, edited"))
        assert [t.id for t in store.all()] == [first.id, second.id]

    def test_update_nonexistent_changes_nothing(self, store, backend, make_draft):
        """Test that updating an unknown id raises and leaves the collection as it was."""
        store.add(make_draft())
        before = store.all()
        writes = backend.write_count
        with pytest.raises(NotFoundError):
            store.update(999, make_draft(description="Ghost"))
        assert store.all() == before
        assert backend.write_count == writes

    def test_update_empty_category_changes_nothing(self, store, backend, make_draft):
        """Test that a rejected update leaves the record untouched."""
        original = store.add(make_draft())
        writes = backend.write_count
        with pytest.raises(ValidationError):
            store.update(original.id, make_draft(category=""))
        assert store.find_by_id(original.id) == original
        assert backend.write_count == writes

    def test_update_validates_before_lookup(self, store, make_draft):
        """Test that a blank category is reported even for an unknown id."""
        with pytest.raises(ValidationError):
            store.update(999, make_draft(category=""))


class TestTransactionStoreRemove:
    """Tests for TransactionStore.remove and lookups."""

    def test_remove_existing(self, store, make_draft):
        """Test that remove deletes the record."""
        transaction = store.add(make_draft())
        store.remove(transaction.id)
        assert len(store) == 0
        assert store.find_by_id(transaction.id) is None

    def test_remove_nonexistent_is_noop(self, store, make_draft):
        """Test that removing an unknown id does nothing and does not raise."""
        store.add(make_draft())
        before = store.all()
        store.remove(12345)
        assert store.all() == before

    def test_remove_persists(self, store, backend, make_draft):
        """Test that the stored list reflects the removal."""
        keep = store.add(make_draft(description="Keep"))
        drop = store.add(make_draft(description="Drop"))
        store.remove(drop.id)
        stored = json.loads(backend.get_item("transactions"))
        assert [t["id"] for t in stored] == [keep.id]

    def test_all_returns_snapshot(self, store, make_draft):
        """Test that mutating the returned list does not touch the store."""
        store.add(make_draft())
        snapshot = store.all()
        snapshot.clear()
        assert len(store) == 1

    def test_find_by_id_missing(self, store):
        """Test lookup of an unknown id."""
        assert store.find_by_id(1) is None


class TestTransactionStoreLoading:
    """Tests for building a store over existing data."""

    def test_loads_existing_collection(self, storage, audit_logger, clock, make_transaction):
        """Test that the store starts with what storage holds."""
        storage.save([make_transaction(id=1), make_transaction(id=2)])
        store = TransactionStore(storage, audit_logger=audit_logger, clock=clock)
        assert [t.id for t in store.all()] == [1, 2]

    def test_new_ids_exceed_loaded_ids(self, storage, make_draft, make_transaction):
        """Test that minting never reuses a loaded id, even with a clock behind it."""
        storage.save([make_transaction(id=5_000_000_000_000)])
        store = TransactionStore(storage, clock=lambda: 1.0)
        assert store.add(make_draft()).id == 5_000_000_000_001

    def test_corrupt_storage_starts_empty(self, make_draft):
        """Test that unreadable stored data yields an empty store that can be written."""
        backend = InMemoryStorage({"transactions": "{not json"})
        store = TransactionStore(TransactionStorage(backend))
        assert len(store) == 0
        store.add(make_draft())
        assert len(json.loads(backend.get_item("transactions"))) == 1


class TestTransactionStoreSharedAcrossSessions:
    """Tests for one store used from several threads at once."""

    def test_concurrent_adds_and_removes(self, store, backend, make_draft):
        """Test that parallel mutations lose nothing and never reuse an id."""
        doomed = [store.add(make_draft(description="Doomed")).id for _ in range(50)]

        def add(i):
            return store.add(make_draft(description=f"Entry {i}")).id

        with ThreadPoolExecutor(max_workers=8) as pool:
            removals = [pool.submit(store.remove, transaction_id) for transaction_id in doomed]
            ids = list(pool.map(add, range(200)))
            for future in removals:
                future.result()

        assert len(set(ids)) == 200
        assert sorted(t.id for t in store.all()) == sorted(ids)
        stored = json.loads(backend.get_item("transactions"))
        assert sorted(t["id"] for t in stored) == sorted(ids)
