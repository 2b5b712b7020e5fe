"""
Transaction Store

Holds the in-memory, insertion-ordered list of transactions and is the
only thing allowed to mutate it.

GUARANTEES:
- Every successful add/update/remove is followed by exactly one full save
- A rejected add/update changes nothing and saves nothing
- Ids are unique and strictly increasing, even within one millisecond
"""

import threading
import time
from typing import Callable, Optional

from finance_tracker.audit import AuditLogger
from finance_tracker.models.audit import AuditEventBuilder
from finance_tracker.models.transaction import Transaction, TransactionDraft
from finance_tracker.services.storage import NotFoundError, TransactionStorage
from finance_tracker.validation import TransactionValidator, ValidationError


class TransactionStore:
    """
    Ordered collection of transactions mirrored to storage.

    The collection is read from storage once, at construction. One
    instance is shared by every browser session, so mutations hold a lock.
    """

    def __init__(
        self,
        storage: TransactionStorage,
        validator: Optional[TransactionValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the store.

        Args:
            storage: Adapter that loads and saves the full list
            validator: Draft validator (default: TransactionValidator())
            audit_logger: Where mutations are logged
            clock: Returns seconds since the epoch; ids are minted from it
        """
        self._storage = storage
        self._validator = validator or TransactionValidator()
        self._audit_logger = audit_logger or AuditLogger()
        self._clock = clock

        self._transactions: list[Transaction] = storage.load()
        self._last_id = max((t.id for t in self._transactions), default=0)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._transactions)

    @property
    def storage(self) -> TransactionStorage:
        return self._storage

    def _mint_id(self) -> int:
        """Current time in epoch milliseconds, bumped past the last id if needed."""
        candidate = int(self._clock() * 1000)
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate

    def _persist(self) -> None:
        self._storage.save(self._transactions)

    def _validate(self, draft: TransactionDraft, operation: str, transaction_id: Optional[int] = None) -> None:
        try:
            self._validator.check(draft)
        except ValidationError as e:
            self._audit_logger.log(
                AuditEventBuilder.validation_failed(
                    operation=operation,
                    issues=[
                        {"field": i.field, "type": i.issue_type, "message": i.message}
                        for i in e.result.errors
                    ],
                    transaction_id=transaction_id,
                )
            )
            raise

    def add(self, draft: TransactionDraft) -> Transaction:
        """
        Append a new transaction and persist.

        Raises:
            ValidationError: If the draft has no category
            StorageError: If the save fails
        """
        self._validate(draft, "add")

        with self._lock:
            transaction = Transaction(
                id=self._mint_id(),
                description=draft.description,
                amount=draft.amount,
                category=draft.category,
                date=draft.date,
            )
            self._transactions.append(transaction)
            self._persist()

        self._audit_logger.log(
            AuditEventBuilder.transaction_added(
                transaction_id=transaction.id,
                category=transaction.category,
                amount=transaction.amount,
            )
        )
        return transaction

    def update(self, transaction_id: int, draft: TransactionDraft) -> Transaction:
        """
        Replace every field but `id` of an existing transaction and persist.

        The record keeps its position in the collection.

        Raises:
            ValidationError: If the draft has no category
            NotFoundError: If no transaction has `transaction_id`
            StorageError: If the save fails
        """
        self._validate(draft, "update", transaction_id)

        with self._lock:
            for index, existing in enumerate(self._transactions):
                if existing.id == transaction_id:
                    break
            else:
                raise NotFoundError(f"Transaction not found: {transaction_id}")

            updated = existing.with_draft(draft)
            self._transactions[index] = updated
            self._persist()

        self._audit_logger.log(
            AuditEventBuilder.transaction_updated(
                transaction_id=updated.id,
                category=updated.category,
                amount=updated.amount,
            )
        )
        return updated

    def remove(self, transaction_id: int) -> None:
        """
        Remove a transaction if present and persist.

        Removing an unknown id is a no-op apart from the (unchanged) save.
        """
        with self._lock:
            remaining = [t for t in self._transactions if t.id != transaction_id]
            found = len(remaining) != len(self._transactions)
            self._transactions = remaining
            self._persist()

        self._audit_logger.log(
            AuditEventBuilder.transaction_removed(transaction_id, found=found)
        )

    def find_by_id(self, transaction_id: int) -> Optional[Transaction]:
        """Look up a transaction by id (linear scan)."""
        for transaction in self._transactions:
            if transaction.id == transaction_id:
                return transaction
        return None

    def all(self) -> list[Transaction]:
        """Snapshot of the collection in storage (insertion) order."""
        return list(self._transactions)
