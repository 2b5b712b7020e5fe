"""Shared fixtures: in-memory storage, a controllable clock, and a store built on both."""

import pytest

from finance_tracker.audit import AuditLogger
from finance_tracker.models.transaction import Transaction, TransactionDraft
from finance_tracker.services.storage import InMemoryStorage, TransactionStorage
from finance_tracker.store import TransactionStore


class FakeClock:
    """Stands in for time.time; only moves when told to."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def audit_logger():
    return AuditLogger(keep_history=True)


@pytest.fixture
def backend():
    return InMemoryStorage()


@pytest.fixture
def storage(backend, audit_logger):
    return TransactionStorage(backend, audit_logger=audit_logger)


@pytest.fixture
def store(storage, audit_logger, clock):
    return TransactionStore(storage, audit_logger=audit_logger, clock=clock)


@pytest.fixture
def make_draft():
    def _make(
        description="Groceries",
        amount=-20.0,
        category="food",
        date="2024-01-05",
    ) -> TransactionDraft:
        return TransactionDraft(
            description=description,
            amount=amount,
            category=category,
            date=date,
        )
    return _make


@pytest.fixture
def make_transaction():
    def _make(
        id=1,
        description="Groceries",
        amount=-20.0,
        category="food",
        date="2024-01-05",
    ) -> Transaction:
        return Transaction(
            id=id,
            description=description,
            amount=amount,
            category=category,
            date=date,
        )
    return _make
