"""Main entry point for the Streamlit multi-page app.

Pages in the pages/ directory appear automatically in the sidebar.
"""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import pandas as pd
import streamlit as st

# Add project root to path for imports
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from budget_tracker import analytics
from budget_tracker import ui
from budget_tracker import visualization as viz
from budget_tracker.analytics.timeseries import CHART_PERIODS
from budget_tracker.models import EXPENSE, INCOME
from budget_tracker.state import AppState


def render_dashboard(state: AppState) -> None:
    today = date.today()
    st.title("💰 Budget Tracker")

    period = st.radio("Chart period", CHART_PERIODS, index=1, horizontal=True)
    series = analytics.aggregate_transactions_by_period(state.incomes, state.expenses, period, today)
    st.plotly_chart(viz.create_income_expense_chart(series), use_container_width=True)

    income_tab, expense_tab = st.tabs(["Income", "Expense"])
    for tab, kind in ((income_tab, INCOME), (expense_tab, EXPENSE)):
        with tab:
            ui.render_transaction_form(state, kind)
            ui.render_transaction_manager(state, kind)
            ui.render_month_cards(state, kind, today)
            transactions = state.transactions(kind)
            col1, col2 = st.columns(2)
            with col1:
                slices = analytics.category_distribution(transactions, kind, today)
                label = "Income" if kind == INCOME else "Expense"
                st.plotly_chart(
                    viz.create_category_pie_chart(slices, f"{label} by categories"),
                    use_container_width=True,
                )
            with col2:
                monthly = analytics.aggregate_transactions_by_month(transactions, today.year)
                st.plotly_chart(viz.create_monthly_total_chart(monthly, kind), use_container_width=True)

    st.subheader("Recent Transactions")
    rows = analytics.recent_transactions(state.incomes, state.expenses, limit=20)
    if rows:
        st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)
    else:
        st.info("No transactions yet. Add an income or expense to get started.")

    active = analytics.get_active_budget(state.budgets, today)
    if active is not None:
        st.subheader("Active Budget")
        ui.render_budget_progress(state, analytics.budget_progress(active, state.expenses, today), show_chart=False)


def main() -> None:
    ui.setup_page_config("Budget Tracker", "💰")
    state = ui.render_user_sidebar()
    if state is None:
        st.title("💰 Budget Tracker")
        return
    render_dashboard(state)


if __name__ == "__main__":
    main()
