"""Derived view engine package."""

from finance_tracker.views.engine import (
    Summary,
    category_breakdown,
    display_transactions,
    filter_transactions,
    is_filter_active,
    summarize,
)

__all__ = [
    "Summary",
    "category_breakdown",
    "display_transactions",
    "filter_transactions",
    "is_filter_active",
    "summarize",
]
