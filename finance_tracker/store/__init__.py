"""Transaction store package."""

from finance_tracker.store.transaction_store import TransactionStore

__all__ = ["TransactionStore"]
