"""
Streamlit Frontend for the Budget Allocator

Plan how much of a monthly income goes to each category.

DESIGN PRINCIPLES:
1. Every field edit goes through the engine (no math in the UI)
2. Percentages are shown, amounts are stored
3. Saving and resetting are explicit, confirmed actions

Run with:

    streamlit run app/main.py
"""

import streamlit as st

from budget_allocator.config import get_settings
from budget_allocator.engine import parse_non_negative_number_or_zero
from budget_allocator.models.budget import BudgetCategory, InputMode
from budget_allocator.orchestrator import BudgetSession, create_app_components
from budget_allocator.services.storage import StorageError
from budget_allocator.views import AllocationSummary, format_currency


# Page configuration
st.set_page_config(
    page_title="Budget Allocator",
    page_icon="💰",
    layout="centered",
)

# Palette tags are Tailwind class names; map them to colours for inline styles
TAG_COLORS = {
    "bg-red-500": "#ef4444",
    "bg-orange-500": "#f97316",
    "bg-green-500": "#22c55e",
    "bg-blue-500": "#3b82f6",
    "bg-purple-500": "#a855f7",
    "bg-yellow-500": "#eab308",
    "bg-pink-500": "#ec4899",
    "bg-teal-500": "#14b8a6",
    "bg-indigo-500": "#6366f1",
    "bg-cyan-500": "#06b6d4",
    "bg-lime-500": "#84cc16",
    "bg-rose-500": "#f43f5e",
    "bg-gray-300": "#d1d5db",
}


def get_session() -> BudgetSession:
    """The budget session for this browser tab."""
    if "budget_session" not in st.session_state:
        st.session_state.budget_session = create_app_components()
    return st.session_state.budget_session


def _format_number(value: float) -> str:
    return f"{value:g}" if value else ""


def _field_key(category: BudgetCategory) -> str:
    return f"field_{category.id}_{category.input_mode.value}"


def render_overview(summary: AllocationSummary, symbol: str) -> None:
    """Headline figures, progress, stacked bar and legend."""
    col1, col2, col3 = st.columns(3)
    col1.metric("Monthly Income", format_currency(summary.monthly_income, symbol))
    col2.metric("Allocated", format_currency(summary.total_allocated, symbol))
    col3.metric("Remaining", format_currency(summary.remaining, symbol))

    st.progress(summary.progress_value / 100)
    if summary.is_over_budget:
        st.error(f"Over budget by {summary.over_budget_by}%")

    if summary.monthly_income > 0 and summary.segments:
        bar = "".join(
            f'<div title="{seg.label}: {format_currency(seg.amount, symbol)} ({seg.percentage}%)" '
            f'style="width:{min(seg.width_percentage, 100):.4f}%;'
            f'background:{TAG_COLORS.get(seg.color, "#999")};height:100%"></div>'
            for seg in summary.segments
        )
        st.markdown(
            f'<div style="display:flex;height:24px;border-radius:6px;overflow:hidden">{bar}</div>',
            unsafe_allow_html=True,
        )

    for entry in summary.legend:
        swatch = TAG_COLORS.get(entry.color, "#999")
        st.markdown(
            f'<span style="color:{swatch}">■</span> **{entry.label}** '
            f'{format_currency(entry.amount, symbol)} ({entry.percentage}%)',
            unsafe_allow_html=True,
        )


def render_category(session: BudgetSession, category: BudgetCategory, symbol: str) -> None:
    """One category row: mode toggle, input field and derived value."""
    key = _field_key(category)
    display = session.display_value(category)
    st.session_state[key] = _format_number(display) if display is not None else ""

    def on_edit() -> None:
        session.apply_category_input(category.id, st.session_state[key])

    col_name, col_mode, col_delete = st.columns([4, 3, 1])
    col_name.markdown(f"**{category.name}**")
    mode = col_mode.radio(
        "Input mode",
        options=list(InputMode),
        index=list(InputMode).index(category.input_mode),
        format_func=lambda m: "Percentage" if m is InputMode.PERCENTAGE else "Fixed Amount",
        key=f"mode_{category.id}",
        horizontal=True,
        label_visibility="collapsed",
    )
    if mode is not category.input_mode:
        session.set_input_mode(category.id, mode)
        st.rerun()
    if col_delete.button("×", key=f"delete_{category.id}"):
        session.remove_category(category.id)
        st.rerun()

    if category.input_mode is InputMode.PERCENTAGE:
        st.text_input("%", key=key, on_change=on_edit, placeholder="0")
        st.caption(f"= {format_currency(category.amount, symbol)}")
    else:
        st.text_input(symbol, key=key, on_change=on_edit, placeholder="0")
        st.caption(f"= {session.percentage_of(category.amount)}%")


def render_actions(session: BudgetSession) -> None:
    """Save and reset, each behind a confirmation checkbox."""
    col_save, col_reset = st.columns(2)

    with col_save:
        confirm_save = st.checkbox("Overwrite any previously saved budget")
        if st.button("💾 Save Budget", disabled=not confirm_save, type="primary"):
            try:
                session.save()
                st.success("Budget saved successfully")
            except StorageError as e:
                st.error(f"Could not save budget: {e}")

    with col_reset:
        confirm_reset = st.checkbox("I understand this cannot be undone")
        if st.button("↺ Reset All", disabled=not confirm_reset):
            try:
                session.reset()
                st.success("Budget reset to default")
            except StorageError as e:
                st.error(f"Budget reset, but the saved copy could not be removed: {e}")
            st.rerun()


def main():
    """Main application entry point."""
    settings = get_settings()
    symbol = settings.display.currency_symbol
    session = get_session()

    st.title("💰 Budget Allocator")
    st.markdown("Plan how much you want to spend in each category.")

    income_text = st.text_input(
        "Monthly Income",
        value=_format_number(session.model.monthly_income),
        placeholder="50000",
    )
    if parse_non_negative_number_or_zero(income_text) != session.model.monthly_income:
        session.set_income(income_text)
        st.rerun()

    st.markdown("---")
    st.subheader("Budget Overview")
    render_overview(session.summary(), symbol)

    st.markdown("---")
    st.subheader("Budget Categories")
    st.caption("Allocate your income across different spending categories")

    with st.form("add_category", clear_on_submit=True):
        new_name = st.text_input("Category name")
        if st.form_submit_button("Add Category"):
            before = len(session.categories)
            if len(session.add_category(new_name)) > before:
                st.success("Category added successfully")
                st.rerun()
            else:
                st.warning("Please enter a category name")

    for category in session.categories:
        render_category(session, category, symbol)

    st.markdown("---")
    render_actions(session)


if __name__ == "__main__":
    main()
