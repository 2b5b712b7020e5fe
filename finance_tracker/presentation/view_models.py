"""
View models handed to the UI.

These are plain, pre-formatted records: the page only lays them out.
"""

from typing import Iterable, Literal

from pydantic import BaseModel, Field

from finance_tracker.models.transaction import Transaction
from finance_tracker.presentation.formatting import (
    capitalize_label,
    format_currency,
    format_date,
)
from finance_tracker.views import Summary


# Chart palette, indexed by category position in the breakdown
CHART_COLORS = [
    "#059669", "#047857", "#065f46", "#064e3b", "#022c22",
    "#16a34a", "#15803d", "#166534", "#14532d", "#052e16",
]

# Segment borders use the same color at half opacity
BORDER_ALPHA = 0.5


class TransactionRow(BaseModel):
    """One line of the transaction list."""

    id: int
    description: str
    category_label: str
    date_label: str
    amount_label: str = Field(
        ...,
        description="Signed amount, currency formatted"
    )
    kind: Literal["income", "expense"]


class SummaryView(BaseModel):
    """The three headline figures."""

    balance: str
    income: str
    expense: str


class ChartData(BaseModel):
    """Input for the category expense chart."""

    categories: list[str] = Field(default_factory=list)
    labels: list[str] = Field(default_factory=list)
    values: list[float] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    border_colors: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.values


def build_transaction_row(transaction: Transaction) -> TransactionRow:
    return TransactionRow(
        id=transaction.id,
        description=transaction.description,
        category_label=capitalize_label(transaction.category),
        date_label=format_date(transaction.date),
        amount_label=format_currency(transaction.amount),
        kind="income" if transaction.amount > 0 else "expense",
    )


def build_transaction_rows(transactions: Iterable[Transaction]) -> list[TransactionRow]:
    return [build_transaction_row(t) for t in transactions]


def build_summary_view(summary: Summary) -> SummaryView:
    return SummaryView(
        balance=format_currency(summary.balance),
        income=format_currency(summary.income),
        expense=format_currency(summary.expense),
    )


def palette_color(index: int) -> str:
    """Palette color for the category at `index`; wraps past the end."""
    return CHART_COLORS[index % len(CHART_COLORS)]


def _with_alpha(hex_color: str, alpha: float) -> str:
    r, g, b = (int(hex_color[i:i + 2], 16) for i in (1, 3, 5))
    return f"rgba({r}, {g}, {b}, {alpha})"


def build_chart_data(breakdown: dict[str, float]) -> ChartData:
    """
    Chart input from a category breakdown.

    Categories whose expense total is zero are left out; colors are
    assigned by position among the categories that remain.
    """
    data = ChartData()
    for category, total in breakdown.items():
        if not total:
            continue
        color = palette_color(len(data.values))
        data.categories.append(category)
        data.labels.append(capitalize_label(category))
        data.values.append(total)
        data.colors.append(color)
        data.border_colors.append(_with_alpha(color, BORDER_ALPHA))
    return data
