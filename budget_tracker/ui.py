"""Streamlit components shared by the dashboard pages.

Every render function takes the :class:`~budget_tracker.state.AppState`
it works on as an argument.  Forms that write to the database refresh the
affected collection on that state before returning.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional

import streamlit as st
from streamlit.errors import StreamlitAPIException

from . import analytics
from . import db
from . import visualization as viz
from .config import MAX_PERIOD_COUNT, configure_logging
from .models import BUDGET_PERIODS, INCOME, SavingGoal, Transaction, categories_for
from .state import AppState


def setup_page_config(title: str, icon: str) -> None:
    try:
        st.set_page_config(page_title=title, page_icon=icon, layout="wide")
    except StreamlitAPIException:
        # Already configured for this run
        pass


def render_user_sidebar() -> Optional[AppState]:
    """Select or register a user and load their state.

    Returns:
        The loaded state, or None when no user is selected yet.
    """
    configure_logging()
    db.init_db()
    st.sidebar.header("👤 Account")

    with st.sidebar.expander("Register", expanded=False):
        with st.form("register_form"):
            username = st.text_input("Username")
            email = st.text_input("Email")
            first_name = st.text_input("First name")
            last_name = st.text_input("Last name")
            if st.form_submit_button("Create account"):
                try:
                    user = db.create_user(username, email, first_name, last_name)
                except ValueError as exc:
                    st.error(str(exc))
                else:
                    st.session_state.user_id = user.id
                    st.success(f"Welcome, {user.username}!")

    user_id = st.sidebar.number_input(
        "User ID",
        min_value=1,
        step=1,
        value=int(st.session_state.get('user_id', 1)),
    )
    try:
        state = AppState.load(int(user_id))
    except LookupError:
        st.sidebar.info("Register an account or enter an existing user ID.")
        return None
    st.session_state.user_id = state.user_id
    return state


def render_transaction_form(state: AppState, kind: str) -> None:
    label = "Income" if kind == INCOME else "Expense"
    with st.expander(f"➕ Add {label}"):
        with st.form(f"add_{kind}_form", clear_on_submit=True):
            description = st.text_input("Description")
            amount = st.number_input("Amount", min_value=0.0, step=1.0)
            when = st.date_input("Date", value=date.today())
            category = st.selectbox("Category", categories_for(kind))
            if st.form_submit_button(f"Add {label}"):
                try:
                    updated = db.add_transaction(kind, state.user_id, description, amount, when, category)
                except (ValueError, LookupError) as exc:
                    st.error(str(exc))
                else:
                    if kind == INCOME:
                        state.set_incomes(updated)
                    else:
                        state.set_expenses(updated)
                    st.success(f"{label} added successfully.")


def render_month_cards(state: AppState, kind: str, today: Optional[date] = None) -> None:
    """Total, largest transaction and change versus last month."""
    transactions = state.transactions(kind)
    label = "Income" if kind == INCOME else "Expense"
    total = analytics.total_for_month(transactions, today)
    highest = analytics.highest_transaction_this_month(transactions, today)
    change = analytics.transaction_change(transactions, today)
    top_category = analytics.highest_category_this_month(transactions, kind, today)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric(f"Total {label} this month", f"${total:,.2f}")
    col2.metric(f"Highest {label} this month", f"${highest.amount:,.2f}", highest.description, delta_color="off")
    if change.is_equal:
        col3.metric(f"No Change in {label} this month", "$0.00")
    else:
        direction = "Increase" if change.is_increase else "Decrease"
        col3.metric(
            f"{direction} in {label} this month",
            f"${abs(change.amount_change):,.2f}",
            f"{change.amount_change:,.2f}",
            delta_color="normal" if kind == INCOME else "inverse",
        )
    if top_category is None:
        col4.metric("Top category this month", "No Data This Month")
    else:
        col4.metric("Top category this month", top_category.category, f"${top_category.amount:,.2f}", delta_color="off")


def render_budget_progress(state: AppState, budget_progress: analytics.BudgetProgress, show_chart: bool = True) -> None:
    budget = budget_progress.budget
    projection = budget_progress.projection
    st.subheader(
        f"Budget Period: {budget.start_date:%B %d, %Y} - {budget.end_date:%B %d, %Y}"
    )
    st.caption(f"{budget.period} Budget: ${budget.amount:,.2f}")

    cols = st.columns(4)
    cols[0].metric(
        "Total Spend",
        f"${budget_progress.total_expenses:,.2f} / ${budget_progress.total_budget:,.2f}",
        f"{projection.expenditure_percentage:.2f}% of the total allocated budget",
        delta_color="off",
    )
    if budget_progress.classification == analytics.budgets.ACTIVE:
        cols[1].metric(
            "Projected Spend",
            f"${projection.projected_expense:,.2f}",
            f"{projection.projected_expense_percent:.2f}% of the total allocated budget",
            delta_color="off",
        )
    cols[2].metric(
        "Average Daily Spend",
        f"${projection.average_daily_expense:,.2f}/day",
        f"{projection.average_daily_percent:.2f}% of the expected average daily budget",
        delta_color="off",
    )
    if budget_progress.is_over:
        cols[3].error(budget_progress.remark)
    else:
        cols[3].success(budget_progress.remark)

    if show_chart:
        buckets = analytics.budget_breakdown(budget, state.expenses)
        st.plotly_chart(viz.create_budget_breakdown_chart(buckets, budget), use_container_width=True)

    if st.button("🗑️ Delete Budget", key=f"delete_budget_{budget.id}"):
        try:
            state.set_budgets(db.delete_budget(state.user_id, budget.id))
        except LookupError as exc:
            st.error(str(exc))
        else:
            st.success("Budget Plan deleted successfully.")


def render_budget_form(state: AppState) -> None:
    with st.expander("➕ Create Budget"):
        with st.form("add_budget_form"):
            period = st.selectbox("Period", BUDGET_PERIODS)
            amount = st.number_input("Amount per period", min_value=0.0, step=10.0)
            count = st.selectbox("Number of periods", list(range(1, MAX_PERIOD_COUNT + 1)))
            start = st.date_input("Start date", value=date.today())
            if st.form_submit_button("Create Budget"):
                try:
                    state.set_budgets(db.add_budget(state.user_id, period, amount, start, count))
                except (ValueError, LookupError) as exc:
                    st.error(str(exc))
                else:
                    st.success("Budget created successfully.")


def render_goal_form(state: AppState) -> None:
    with st.expander("➕ Create Saving Goal"):
        with st.form("add_goal_form"):
            name = st.text_input("Goal name")
            target = st.number_input("Target amount", min_value=0.0, step=50.0)
            start = st.date_input("Start date", value=date.today())
            end = st.date_input("End date", value=date.today())
            if st.form_submit_button("Create Goal"):
                try:
                    state.set_saving_goals(db.add_saving_goal(state.user_id, name, target, start, end))
                except (ValueError, LookupError) as exc:
                    st.error(str(exc))
                else:
                    st.success("Saving goal created successfully.")


def render_saving_goal(state: AppState, goal: SavingGoal, today: Optional[date] = None) -> None:
    progress = analytics.goal_progress(goal, today)
    col1, col2 = st.columns([2, 1])
    with col1:
        st.plotly_chart(viz.create_goal_gauge(progress), use_container_width=True)
    with col2:
        st.metric("Remaining", f"${progress.remaining:,.2f}")
        st.metric("Days left", progress.days_left)
        if progress.status != analytics.goals.GOAL_COMPLETED:
            deposit = st.number_input("Add money", min_value=0.0, step=10.0, key=f"deposit_{goal.id}")
            if st.button("💵 Deposit", key=f"deposit_btn_{goal.id}"):
                try:
                    db.deposit_to_saving_goal(state.user_id, goal.id, deposit)
                except (ValueError, LookupError) as exc:
                    st.error(str(exc))
                else:
                    state.refresh_saving_goals()
                    st.success("Deposit recorded.")
        if st.button("🗑️ Delete Goal", key=f"delete_goal_{goal.id}"):
            try:
                state.set_saving_goals(db.delete_saving_goal(state.user_id, goal.id))
            except LookupError as exc:
                st.error(str(exc))
            else:
                st.success("Saving goal deleted.")


def transaction_options(transactions: List[Transaction]) -> Dict[str, Transaction]:
    """Selectbox labels mapped to transactions, newest first."""
    return {
        f"#{t.id} | {t.date:%d %b %Y} | {t.description} | ${t.amount:,.2f}": t
        for t in sorted(transactions, key=lambda t: t.date, reverse=True)
    }


def render_transaction_manager(state: AppState, kind: str) -> None:
    """Edit or delete one of the user's transactions of ``kind``."""
    transactions = state.transactions(kind)
    label = "Income" if kind == INCOME else "Expense"
    if not transactions:
        return
    with st.expander(f"✏️ Edit {label}"):
        options = transaction_options(transactions)
        choice = st.selectbox(f"Select {label.lower()}", list(options), key=f"edit_{kind}_select")
        selected = options[choice]
        categories = categories_for(kind)
        with st.form(f"edit_{kind}_form"):
            description = st.text_input("Description", value=selected.description)
            amount = st.number_input("Amount", min_value=0.0, step=1.0, value=float(selected.amount))
            when = st.date_input("Date", value=selected.date)
            category = st.selectbox(
                "Category",
                categories,
                index=categories.index(selected.category) if selected.category in categories else 0,
            )
            save = st.form_submit_button("💾 Save")
            delete = st.form_submit_button("🗑️ Delete")
        try:
            if save:
                db.update_transaction(kind, selected.id, description, amount, when, category)
                state.refresh_transactions()
                st.success(f"{label} updated successfully.")
            elif delete:
                updated = db.delete_transaction(kind, state.user_id, selected.id)
                if kind == INCOME:
                    state.set_incomes(updated)
                else:
                    state.set_expenses(updated)
                st.success(f"{label} deleted successfully.")
        except (ValueError, LookupError) as exc:
            st.error(str(exc))
