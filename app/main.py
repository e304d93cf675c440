"""
Streamlit Frontend for MoneyDay

Three pages:
1. Expenses - the full list, newest last, with delete and add
2. Calendar - pick a day, see its expenses and the day/month totals
3. Settings - configuration status and recent activity

The UI never touches storage. It calls the ledger (through ExpenseFlow)
and re-renders from the ledger's current snapshot.
"""

from datetime import date

import streamlit as st

from moneyday.config import get_settings, validate_all_settings
from moneyday.formatting import ExpenseFormatter
from moneyday.orchestrator import ExpenseFlow, create_app_components


# Page configuration
st.set_page_config(
    page_title="MoneyDay",
    page_icon="💶",
    layout="centered",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .stButton>button {
        width: 100%;
        margin-top: 10px;
    }
    .big-number {
        font-size: 2.2em;
        font-weight: bold;
        color: #2c3e50;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_components():
    """Get or create application components (cached for the process)."""
    try:
        return create_app_components(use_storage=True)
    except (OSError, ValueError) as e:
        st.error(f"Failed to initialize storage: {e}")
        return create_app_components(use_storage=False)


def get_formatter() -> ExpenseFormatter:
    return ExpenseFormatter(get_settings().app)


def main():
    """Main application entry point."""
    flow, audit_logger = get_components()

    st.sidebar.title("💶 MoneyDay")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["📋 Expenses", "📅 Calendar", "⚙️ Settings"],
        index=0,
    )

    if page == "📋 Expenses":
        render_expenses_page(flow)
    elif page == "📅 Calendar":
        render_calendar_page(flow)
    elif page == "⚙️ Settings":
        render_settings_page(audit_logger)


def render_expenses_page(flow: ExpenseFlow):
    """Render the expense list with delete and add."""
    st.title("📋 Expenses")
    fmt = get_formatter()
    items = flow.ledger.items

    if not items:
        st.info("No expenses yet. Add your first one below.")
    else:
        for record in items:
            col1, col2 = st.columns([3, 2])
            with col1:
                st.markdown(f"**{fmt.amount(record.amount)}**  \n{record.category}")
            with col2:
                st.caption(fmt.timestamp(record.date))

        st.markdown("---")
        to_delete = st.multiselect(
            "Select expenses to delete",
            options=list(range(len(items))),
            format_func=lambda position: (
                f"{fmt.amount(items[position].amount)} · "
                f"{items[position].category or '(none)'} · "
                f"{fmt.timestamp(items[position].date)}"
            ),
        )
        if st.button("🗑️ Delete selected", disabled=not to_delete):
            flow.remove_expenses(to_delete)
            st.rerun()

    st.markdown("---")
    render_add_form(flow)


def render_add_form(flow: ExpenseFlow):
    """Render the add-expense form."""
    st.subheader("➕ Add Expense")

    with st.form("add_expense", clear_on_submit=True):
        amount_text = st.text_input("Amount *", placeholder="12.50")
        category = st.text_input("Category", placeholder="food")
        day = st.date_input("Date", value=date.today())
        submitted = st.form_submit_button("💾 Save", type="primary")

    if submitted:
        result = flow.add_expense(amount_text, category, day)
        if result.is_valid:
            st.success("Expense saved")
            st.rerun()
        for message in result.error_messages:
            st.error(message)


def render_calendar_page(flow: ExpenseFlow):
    """Render the calendar view for one day."""
    st.title("📅 Calendar")
    fmt = get_formatter()

    day = st.date_input("Day", value=date.today())
    summary = flow.day_summary(day)
    month = flow.month_summary(day)

    col1, col2 = st.columns(2)
    with col1:
        st.markdown("Daily total")
        st.markdown(f'<div class="big-number">{fmt.amount(summary.total)}</div>', unsafe_allow_html=True)
    with col2:
        st.markdown("Monthly total")
        st.markdown(f'<div class="big-number">{fmt.amount(month.total)}</div>', unsafe_allow_html=True)

    st.markdown("---")

    if not summary.records:
        st.info(f"No expenses on {fmt.day(summary.day)}.")
    for record in summary.records:
        col1, col2 = st.columns([3, 2])
        with col1:
            st.markdown(f"**{fmt.amount(record.amount)}**  \n{record.category}")
        with col2:
            st.caption(fmt.timestamp(record.date))

    if month.category_totals:
        with st.expander("📊 This month by category"):
            for label, total in month.category_totals.items():
                st.markdown(f"- {label}: {fmt.amount(total)}")


def render_settings_page(audit_logger):
    """Render the settings page."""
    st.title("⚙️ Settings")

    st.markdown("### Configuration Status")
    status = validate_all_settings()
    for name in ("storage", "calendar", "app"):
        if status.get(name, False):
            st.success(f"✅ {name.title()}")
        else:
            st.error(f"❌ {name.title()} - {status.get(f'{name}_error', 'Not configured')}")

    st.markdown("### Recent Activity")
    if audit_logger.storage is None:
        st.info("Activity is only written to the local log.")
        return
    events = audit_logger.storage.get_recent_events(limit=20)
    if not events:
        st.info("Nothing yet.")
    for event in events:
        st.markdown(f"- `{event.timestamp:%Y-%m-%d %H:%M:%S}` {event.description}")

    st.markdown("---")
    st.markdown(
        "Configure the app with `MONEYDAY_*` environment variables or a `.env` file "
        "(e.g. `MONEYDAY_STORAGE_DIRECTORY`, `MONEYDAY_CALENDAR_TIMEZONE`)."
    )


if __name__ == "__main__":
    main()
