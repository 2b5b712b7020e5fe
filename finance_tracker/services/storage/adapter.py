"""
Transaction Storage Adapter

Reads and writes the full transaction list as one JSON array under one
storage key. There is no schema version and no migration path:

- An absent or unreadable value loads as an empty list (fail-open).
- The next successful save overwrites whatever was there.

NaN amounts are written as JSON null and read back as NaN.
"""

from typing import Optional

import pydantic

from finance_tracker.audit import AuditLogger
from finance_tracker.models.audit import AuditEventBuilder
from finance_tracker.models.transaction import Transaction
from finance_tracker.services.storage.interface import (
    KeyValueStorageInterface,
    StorageError,
)


_TRANSACTION_LIST = pydantic.TypeAdapter(list[Transaction])

DEFAULT_STORAGE_KEY = "transactions"


class TransactionStorage:
    """
    Serializes the transaction list to a key-value backend.

    Every save writes the whole collection; there are no partial writes.
    """

    def __init__(
        self,
        backend: KeyValueStorageInterface,
        key: str = DEFAULT_STORAGE_KEY,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._backend = backend
        self._key = key
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def key(self) -> str:
        return self._key

    @property
    def backend(self) -> KeyValueStorageInterface:
        return self._backend

    def load(self) -> list[Transaction]:
        """
        Load the stored collection.

        Never raises: no distinction is made between "never had data"
        and "had corrupt data".
        """
        try:
            raw = self._backend.get_item(self._key)
        except StorageError as e:
            self._audit_logger.log(AuditEventBuilder.storage_corrupt(self._key, str(e)))
            return []

        if raw is None:
            self._audit_logger.log(AuditEventBuilder.storage_loaded(self._key, 0))
            return []

        try:
            transactions = _TRANSACTION_LIST.validate_json(raw)
        except pydantic.ValidationError as e:
            self._audit_logger.log(
                AuditEventBuilder.storage_corrupt(
                    self._key, f"{e.error_count()} validation errors"
                )
            )
            return []

        # Ids must stay unique; the first record with a given id wins
        seen: set[int] = set()
        unique = []
        for transaction in transactions:
            if transaction.id in seen:
                continue
            seen.add(transaction.id)
            unique.append(transaction)

        if len(unique) != len(transactions):
            self._audit_logger.log(
                AuditEventBuilder.storage_corrupt(
                    self._key,
                    f"dropped {len(transactions) - len(unique)} records with duplicate ids",
                )
            )

        self._audit_logger.log(AuditEventBuilder.storage_loaded(self._key, len(unique)))
        return unique

    def save(self, transactions: list[Transaction]) -> None:
        """
        Overwrite the stored collection.

        Raises:
            StorageError: If the backend write fails
        """
        payload = _TRANSACTION_LIST.dump_json(transactions).decode("utf-8")
        try:
            self._backend.set_item(self._key, payload)
        except StorageError as e:
            self._audit_logger.log(AuditEventBuilder.save_failed(self._key, str(e)))
            raise

        self._audit_logger.log(
            AuditEventBuilder.storage_saved(self._key, len(transactions))
        )
