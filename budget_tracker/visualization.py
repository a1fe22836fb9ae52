"""Plotly visualisation helpers for the budget tracker.

Each function accepts the output of one function in
:mod:`budget_tracker.analytics` and produces an interactive Plotly
figure.  All functions return a ``plotly.graph_objects.Figure`` that
Streamlit can render via ``st.plotly_chart``.  An empty input yields a
blank figure titled "No data to display" rather than an error.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .analytics.budgets import BudgetBucket
from .analytics.goals import GoalProgress
from .models import Budget

INCOME_COLOR = '#4CAF50'
EXPENSE_COLOR = '#FF474C'


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def create_budget_breakdown_chart(buckets: Sequence[BudgetBucket], budget: Budget) -> go.Figure:
    """Bar chart of spend per budget period with the per-period limit.

    Parameters
    ----------
    buckets : sequence of BudgetBucket
        Output of :func:`budget_tracker.analytics.budget_breakdown`.
    budget : Budget
        The budget the buckets were built from; its amount is drawn as a
        dashed reference line.

    Returns
    -------
    plotly.graph_objects.Figure
        Bar chart with over-budget periods coloured red.
    """
    if not buckets:
        return _empty_figure()
    fig = go.Figure(go.Bar(
        x=[b.label for b in buckets],
        y=[b.expense for b in buckets],
        marker_color=[b.color for b in buckets],
        name="Expense",
    ))
    fig.add_hline(
        y=budget.amount,
        line_dash="dash",
        line_color="red",
        annotation_text=f"{budget.period} Budget ${budget.amount:,.2f}",
    )
    fig.update_layout(
        title=f"{budget.period} Budget Breakdown",
        xaxis_title="Period",
        yaxis_title="Amount",
    )
    return fig


def create_category_pie_chart(slices: List[Dict[str, Any]], title: str | None = None) -> go.Figure:
    """Pie chart from :func:`budget_tracker.analytics.category_distribution`.

    Categories with a zero total are dropped so the pie only shows
    categories that actually carry money.
    """
    visible = [s for s in slices if s['value'] > 0]
    if not visible:
        return _empty_figure()
    df = pd.DataFrame(visible)
    fig = px.pie(
        df,
        names='label',
        values='value',
        color='label',
        color_discrete_map={s['label']: s['color'] for s in visible},
    )
    fig.update_layout(title=title or "Distribution by categories")
    return fig


def create_income_expense_chart(series: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Grouped bars of income and expense per period slot.

    Parameters
    ----------
    series : pandas.DataFrame
        Output of :func:`budget_tracker.analytics.aggregate_transactions_by_period`
        with columns ``period``, ``income`` and ``expense``.
    title : str, optional
        Chart title.
    """
    if series.empty:
        return _empty_figure()
    fig = go.Figure()
    fig.add_trace(go.Bar(x=series['period'], y=series['income'], name="Income", marker_color=INCOME_COLOR))
    fig.add_trace(go.Bar(x=series['period'], y=series['expense'], name="Expense", marker_color=EXPENSE_COLOR))
    fig.update_layout(
        title=title or "Income vs Expense",
        barmode='group',
        xaxis_title="Period",
        yaxis_title="Amount($)",
    )
    return fig


def create_monthly_total_chart(monthly: pd.DataFrame, kind: str) -> go.Figure:
    """Line chart of monthly totals for one year of incomes or expenses."""
    if monthly.empty:
        return _empty_figure()
    fig = px.line(monthly, x='month', y='total_amount', markers=True)
    fig.update_traces(line_color=INCOME_COLOR if kind == 'income' else EXPENSE_COLOR)
    fig.update_layout(
        title=f"Monthly {kind.capitalize()}",
        xaxis_title="Month",
        yaxis_title="Amount($)",
    )
    return fig


def create_goal_gauge(progress: GoalProgress) -> go.Figure:
    """Gauge showing how much of a saving goal has been funded."""
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=progress.gauge_value,
        number={'prefix': "$"},
        gauge={
            'axis': {'range': [0, progress.target_amount]},
            'bar': {'color': INCOME_COLOR},
        },
        title={'text': f"{progress.goal_name}: ${progress.gauge_value:,.2f} / ${progress.target_amount:,.2f}"},
    ))
    fig.update_layout(height=250)
    return fig
