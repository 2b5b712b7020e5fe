"""
Main Orchestrator for Finance Tracker

This module ties the components together:
1. create_app_components() is the composition root: settings -> storage
   -> audit logger -> store
2. TransactionFlow is the per-session handle the UI talks to; it owns the
   add/edit form and computes everything the page renders

DESIGN DECISION: There is no ambient global state. The store and the
editing target are objects owned here and passed to the UI explicitly.
"""

from typing import Optional

from pydantic import BaseModel

from finance_tracker.audit import AuditLogger
from finance_tracker.config import get_settings
from finance_tracker.models.audit import AuditEventBuilder
from finance_tracker.presentation import (
    ChartData,
    FormModel,
    SubmitResult,
    SummaryView,
    TransactionForm,
    TransactionRow,
    build_chart_data,
    build_summary_view,
    build_transaction_rows,
)
from finance_tracker.services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorageInterface,
    TransactionStorage,
)
from finance_tracker.store import TransactionStore
from finance_tracker.views import (
    Summary,
    category_breakdown,
    display_transactions,
    is_filter_active,
    summarize,
)


class DashboardView(BaseModel):
    """Everything the page renders for one run."""

    rows: list[TransactionRow]
    summary: Summary
    summary_view: SummaryView
    chart: ChartData
    filter_active: bool
    total_count: int


class TransactionFlow:
    """
    Orchestrates one user's session.

    Flow:
    1. Page renders dashboard(search, category)
    2. User submits the form -> submit()
    3. User clicks edit/delete on a row -> begin_edit()/delete()

    Totals and the chart always cover the full collection; only the
    list follows the search/category filter.
    """

    def __init__(
        self,
        store: TransactionStore,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._audit_logger = audit_logger or AuditLogger()
        self._form = TransactionForm(store, audit_logger=self._audit_logger)

    @property
    def store(self) -> TransactionStore:
        return self._store

    @property
    def form(self) -> TransactionForm:
        return self._form

    def submit(self, model: FormModel) -> SubmitResult:
        """Submit the form in its current mode (add or update)."""
        return self._form.submit(model)

    def begin_edit(self, transaction_id: int) -> bool:
        return self._form.start_edit(transaction_id)

    def cancel_edit(self) -> None:
        self._form.cancel_edit()

    def delete(self, transaction_id: int) -> None:
        """
        Remove a transaction.

        If it is the one being edited, the form goes back to ADD mode.
        """
        self._store.remove(transaction_id)
        if self._form.editing_id == transaction_id:
            self._form.cancel_edit()

    def dashboard(
        self,
        search_text: Optional[str] = "",
        category: Optional[str] = "",
    ) -> DashboardView:
        """Compute the list, summary and chart for the current filters."""
        transactions = self._store.all()
        summary = summarize(transactions)

        return DashboardView(
            rows=build_transaction_rows(
                display_transactions(transactions, search_text, category)
            ),
            summary=summary,
            summary_view=build_summary_view(summary),
            chart=build_chart_data(category_breakdown(transactions)),
            filter_active=is_filter_active(search_text, category),
            total_count=len(transactions),
        )


def create_backend(use_file_storage: bool = True) -> KeyValueStorageInterface:
    """
    Build the key-value backend from settings.

    Falls back to in-memory storage if the data directory is unusable.
    """
    if not use_file_storage:
        return InMemoryStorage()

    storage_settings = get_settings().storage
    try:
        storage_settings.data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        AuditLogger().log(
            AuditEventBuilder.system_error(
                error_type="storage_unavailable",
                error_message=str(e),
                details={"data_dir": str(storage_settings.data_dir)},
            )
        )
        return InMemoryStorage()

    return JsonFileStorage(storage_settings.data_dir)


def create_app_components(
    use_file_storage: bool = True,
    backend: Optional[KeyValueStorageInterface] = None,
) -> tuple[TransactionStore, AuditLogger]:
    """
    Factory function to create the shared application components.

    Args:
        use_file_storage: Persist to the configured data directory.
                    Set to False to keep everything in memory.
        backend: Explicit key-value backend (overrides use_file_storage)

    Returns:
        (store, audit_logger)
    """
    audit_logger = AuditLogger()
    if backend is None:
        backend = create_backend(use_file_storage)

    storage = TransactionStorage(
        backend,
        key=get_settings().storage.storage_key,
        audit_logger=audit_logger,
    )
    store = TransactionStore(storage, audit_logger=audit_logger)

    return store, audit_logger
