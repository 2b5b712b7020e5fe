"""
Derived View Engine

DESIGN DECISION: Every view is recomputed on demand from the store's
current contents. Nothing here mutates its input or keeps state, so
the results can never drift out of sync with the stored list.

Views:
1. Filtered list (search text + category, both optional, AND-ed)
2. Totals (income, expense, balance)
3. Expense per category, for the chart
4. Display order of the list
"""

from typing import Iterable, Optional, Sequence

from pydantic import BaseModel, Field, computed_field

from finance_tracker.models.transaction import Transaction


class Summary(BaseModel):
    """Income/expense totals over a set of transactions."""

    income: float = Field(
        default=0.0,
        description="Sum of positive amounts"
    )
    expense: float = Field(
        default=0.0,
        description="Sum of absolute values of all other amounts"
    )

    @computed_field
    @property
    def balance(self) -> float:
        return self.income - self.expense


def filter_transactions(
    transactions: Iterable[Transaction],
    search_text: Optional[str] = "",
    category: Optional[str] = "",
) -> list[Transaction]:
    """
    Keep transactions matching both the search text and the category.

    The search is a case-insensitive substring match on description or
    category. Empty filters let everything through. Order is preserved.
    """
    needle = (search_text or "").lower()
    category = category or ""

    return [
        t for t in transactions
        if (
            not needle
            or needle in t.description.lower()
            or needle in t.category.lower()
        )
        and (not category or t.category == category)
    ]


def summarize(transactions: Iterable[Transaction]) -> Summary:
    """
    Total income and expense.

    Positive amounts count as income; every other amount adds its
    absolute value to expense (zero adds nothing, NaN makes expense NaN).
    """
    income = 0.0
    expense = 0.0
    for t in transactions:
        if t.amount > 0:
            income += t.amount
        else:
            expense += abs(t.amount)
    return Summary(income=income, expense=expense)


def category_breakdown(transactions: Iterable[Transaction]) -> dict[str, float]:
    """
    Expense total per category.

    Only negative amounts are counted. Categories appear in the order
    they are first seen, so chart colors stay stable.
    """
    totals: dict[str, float] = {}
    for t in transactions:
        if t.amount < 0:
            totals[t.category] = totals.get(t.category, 0.0) + abs(t.amount)
    return totals


def is_filter_active(search_text: Optional[str] = "", category: Optional[str] = "") -> bool:
    return bool(search_text) or bool(category)


def display_transactions(
    transactions: Sequence[Transaction],
    search_text: Optional[str] = "",
    category: Optional[str] = "",
) -> list[Transaction]:
    """
    Transactions in the order the list shows them.

    Unfiltered: most recently added first.
    Filtered: the matches in storage (oldest-first) order.
    """
    if not is_filter_active(search_text, category):
        return list(reversed(transactions))
    return filter_transactions(transactions, search_text, category)
