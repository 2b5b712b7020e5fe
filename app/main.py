"""
Streamlit Frontend for Finance Tracker

This is the page users interact with: record income and expenses,
see the running balance, search/filter the list, and view where the
money went.

DESIGN PRINCIPLES:
1. The page is thin glue: every decision lives in TransactionFlow
2. One form, two modes (add / edit), clearly labelled
3. Problems are shown inline, never as blocking dialogs
4. Every change is saved immediately

Widget callbacks (on_click) do the work so that form widgets can be
reset or pre-filled before the next run renders them.
"""

import datetime as dt
import html

import streamlit as st

from finance_tracker.audit import configure_logging
from finance_tracker.config import get_settings, validate_all_settings
from finance_tracker.models.transaction import TransactionCategory
from finance_tracker.orchestrator import TransactionFlow, create_app_components
from finance_tracker.presentation import (
    FormModel,
    FormMode,
    SubmitOutcome,
    build_expense_chart,
    capitalize_label,
)
from finance_tracker.validation import TransactionValidator


settings = get_settings()
configure_logging(settings.app.log_level)

# Page configuration
st.set_page_config(
    page_title=settings.app.page_title,
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS: income/expense coloring of the list
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .transaction {
        padding: 10px 14px;
        border-radius: 10px;
        margin: 4px 0;
        background-color: #f8fafc;
    }
    .transaction.income {
        border-left: 5px solid #059669;
    }
    .transaction.expense {
        border-left: 5px solid #dc2626;
    }
    .transaction-description {
        font-weight: 600;
        color: #1A1F24;
    }
    .transaction-meta {
        font-size: 0.8rem;
        color: #666;
    }
    .transaction-amount.income {
        color: #059669;
        font-weight: 600;
    }
    .transaction-amount.expense {
        color: #dc2626;
        font-weight: 600;
    }
</style>
""", unsafe_allow_html=True)


# Widget keys
FORM_DESCRIPTION = "form_description"
FORM_AMOUNT = "form_amount"
FORM_CATEGORY = "form_category"
FORM_DATE = "form_date"
SEARCH_TEXT = "search_text"
CATEGORY_FILTER = "category_filter"

CATEGORY_OPTIONS = [""] + TransactionCategory.values()


@st.cache_resource
def get_components():
    """Get or create the shared store (cached across reruns)."""
    try:
        return create_app_components(use_file_storage=True)
    except Exception as e:
        st.error(f"Failed to initialize storage: {e}")
        return create_app_components(use_file_storage=False)


def get_flow() -> TransactionFlow:
    """This session's flow (form state lives here, not in globals)."""
    if "flow" not in st.session_state:
        store, audit_logger = get_components()
        st.session_state.flow = TransactionFlow(store, audit_logger)
        _sync_form_widgets(st.session_state.flow)
    return st.session_state.flow


def _form_date(value: str) -> dt.date:
    try:
        return dt.date.fromisoformat(value)
    except ValueError:
        return dt.date.today()


def _sync_form_widgets(flow: TransactionFlow) -> None:
    """Push the form model into the widgets."""
    model = flow.form.model
    st.session_state[FORM_DESCRIPTION] = model.description
    st.session_state[FORM_AMOUNT] = model.amount
    st.session_state[FORM_CATEGORY] = model.category if model.category in CATEGORY_OPTIONS else ""
    st.session_state[FORM_DATE] = _form_date(model.date)


def _on_submit(flow: TransactionFlow) -> None:
    model = FormModel(
        description=st.session_state[FORM_DESCRIPTION],
        amount=st.session_state[FORM_AMOUNT],
        category=st.session_state[FORM_CATEGORY] or "",
        date=st.session_state[FORM_DATE].isoformat() if st.session_state[FORM_DATE] else "",
    )
    result = flow.submit(model)
    st.session_state.last_result = result
    if result.ok:
        _sync_form_widgets(flow)


def _on_edit(flow: TransactionFlow, transaction_id: int) -> None:
    st.session_state.last_result = None
    if flow.begin_edit(transaction_id):
        _sync_form_widgets(flow)


def _on_cancel_edit(flow: TransactionFlow) -> None:
    st.session_state.last_result = None
    flow.cancel_edit()
    _sync_form_widgets(flow)


def _on_delete(flow: TransactionFlow, transaction_id: int) -> None:
    was_editing = flow.form.editing_id == transaction_id
    st.session_state.last_result = None
    flow.delete(transaction_id)
    if was_editing:
        _sync_form_widgets(flow)


def main():
    """Main application entry point."""
    flow = get_flow()

    st.sidebar.title("💰 Finance Tracker")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["📒 Transactions", "⚙️ Settings"],
        index=0,
    )

    st.sidebar.markdown("---")
    st.sidebar.markdown(
        """
        **How to use:**
        1. Enter a positive amount for income
        2. Enter a negative amount for an expense
        3. Pick a category and save
        """
    )

    if page == "📒 Transactions":
        render_transactions_page(flow)
    elif page == "⚙️ Settings":
        render_settings_page()


def render_summary(dashboard) -> None:
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Balance", dashboard.summary_view.balance)
    with col2:
        st.metric("Income", dashboard.summary_view.income)
    with col3:
        st.metric("Expense", dashboard.summary_view.expense)


def render_form(flow: TransactionFlow) -> None:
    form = flow.form
    if form.mode == FormMode.EDIT:
        st.subheader("✏️ Edit Transaction")
    else:
        st.subheader("➕ Add Transaction")

    with st.form("transaction_form", clear_on_submit=False):
        st.text_input("Description", key=FORM_DESCRIPTION)
        st.text_input(
            "Amount",
            key=FORM_AMOUNT,
            help="Positive for income, negative for expenses",
        )
        st.selectbox(
            "Category *",
            options=CATEGORY_OPTIONS,
            key=FORM_CATEGORY,
            format_func=lambda x: "Select category" if not x else capitalize_label(x),
        )
        st.date_input("Date", key=FORM_DATE)
        st.form_submit_button(
            f"💾 {form.submit_label}",
            type="primary",
            on_click=_on_submit,
            args=(flow,),
        )

    if form.mode == FormMode.EDIT:
        st.button("Cancel edit", on_click=_on_cancel_edit, args=(flow,))

    result = st.session_state.pop("last_result", None)
    if result is None:
        return
    if result.outcome == SubmitOutcome.ADDED:
        st.success("Transaction added")
    elif result.outcome == SubmitOutcome.UPDATED:
        st.success("Transaction updated")
    if result.validation is not None and result.validation.issues:
        summary = TransactionValidator.get_user_friendly_summary(result.validation)
        show = st.error if result.errors else st.warning
        # Two trailing spaces keep one issue per line in markdown
        show(summary.replace("\n", "  \n"))


def render_transaction_list(flow: TransactionFlow, dashboard) -> None:
    st.subheader("📋 History")

    if not dashboard.rows:
        if dashboard.total_count:
            st.info("No transactions match your search.")
        else:
            st.info("No transactions yet. Use the form to add your first one.")
        return

    for row in dashboard.rows:
        col_info, col_amount, col_edit, col_delete = st.columns([6, 2, 1, 1])
        with col_info:
            st.markdown(f"""
            <div class="transaction {row.kind}">
                <div class="transaction-description">{html.escape(row.description)}</div>
                <div class="transaction-meta">{row.category_label} · {row.date_label}</div>
            </div>
            """, unsafe_allow_html=True)
        with col_amount:
            st.markdown(
                f'<div class="transaction-amount {row.kind}">{row.amount_label}</div>',
                unsafe_allow_html=True,
            )
        with col_edit:
            st.button(
                "✏️",
                key=f"edit_{row.id}",
                help="Edit",
                on_click=_on_edit,
                args=(flow, row.id),
            )
        with col_delete:
            st.button(
                "🗑️",
                key=f"delete_{row.id}",
                help="Delete",
                on_click=_on_delete,
                args=(flow, row.id),
            )


def render_transactions_page(flow: TransactionFlow) -> None:
    """Render the main tracker page."""
    st.title("📒 Transactions")

    col_search, col_filter = st.columns([3, 1])
    with col_search:
        search_text = st.text_input(
            "Search",
            key=SEARCH_TEXT,
            placeholder="Search description or category...",
        )
    with col_filter:
        category = st.selectbox(
            "Category",
            options=CATEGORY_OPTIONS,
            key=CATEGORY_FILTER,
            format_func=lambda x: "All Categories" if not x else capitalize_label(x),
        )

    dashboard = flow.dashboard(search_text, category)

    render_summary(dashboard)
    st.divider()

    col_left, col_right = st.columns([1, 1])
    with col_left:
        render_form(flow)
    with col_right:
        st.subheader("🍩 Expenses by Category")
        if dashboard.chart.is_empty:
            st.info("Expenses will be charted here.")
        else:
            st.plotly_chart(
                build_expense_chart(dashboard.chart),
                width="stretch",
            )

    st.divider()
    render_transaction_list(flow, dashboard)


def render_settings_page():
    """Render the settings page."""
    st.title("⚙️ Settings")

    st.markdown("### Configuration Status")

    status = validate_all_settings()

    sections = [
        ("Storage", "storage"),
        ("Application", "app"),
    ]

    for name, key in sections:
        if status.get(key, False):
            st.success(f"✅ {name} - OK")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")

    if status.get("storage"):
        storage_settings = get_settings().storage
        st.markdown(
            f"Transactions are stored in "
            f"`{storage_settings.data_dir / (storage_settings.storage_key + '.json')}`."
        )

    st.markdown("---")
    st.markdown("### Configuration")
    st.markdown(
        "To configure the application, create a `.env` file. "
        "See `.env.example` for the available variables."
    )


if __name__ == "__main__":
    main()
