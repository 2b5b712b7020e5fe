"""Presentation package: formatting, view models, chart and form state."""

from finance_tracker.presentation.chart import build_expense_chart
from finance_tracker.presentation.form import (
    ADD_LABEL,
    UPDATE_LABEL,
    FormMode,
    FormModel,
    SubmitOutcome,
    SubmitResult,
    TransactionForm,
    format_amount_input,
    populate_form,
)
from finance_tracker.presentation.formatting import (
    INVALID_DATE,
    capitalize_label,
    format_currency,
    format_date,
)
from finance_tracker.presentation.view_models import (
    CHART_COLORS,
    ChartData,
    SummaryView,
    TransactionRow,
    build_chart_data,
    build_summary_view,
    build_transaction_row,
    build_transaction_rows,
    palette_color,
)

__all__ = [
    "ADD_LABEL",
    "CHART_COLORS",
    "INVALID_DATE",
    "UPDATE_LABEL",
    "ChartData",
    "FormMode",
    "FormModel",
    "SubmitOutcome",
    "SubmitResult",
    "SummaryView",
    "TransactionForm",
    "TransactionRow",
    "build_chart_data",
    "build_expense_chart",
    "build_summary_view",
    "build_transaction_row",
    "build_transaction_rows",
    "capitalize_label",
    "format_amount_input",
    "format_currency",
    "format_date",
    "palette_color",
    "populate_form",
]
