"""Income/expense time series for the dashboard charts."""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Iterable, Optional

import pandas as pd

from ..models import Transaction

CHART_PERIODS = ('Weekly', 'Monthly', 'Yearly')
DAY_LABEL = '%d %b'
MONTH_LABEL = '%b %Y'


def _amounts_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    rows = [{'date': t.date, 'amount': t.amount} for t in transactions]
    df = pd.DataFrame(rows, columns=['date', 'amount'])
    df['date'] = pd.to_datetime(df['date'])
    df['amount'] = pd.to_numeric(df['amount'], errors='coerce').fillna(0.0)
    return df


def _daily_totals(transactions: Iterable[Transaction], days: pd.DatetimeIndex) -> pd.Series:
    df = _amounts_frame(transactions)
    totals = df.groupby(df['date'].dt.normalize())['amount'].sum()
    return totals.reindex(days, fill_value=0.0)


def _monthly_totals(transactions: Iterable[Transaction], months: pd.PeriodIndex) -> pd.Series:
    df = _amounts_frame(transactions)
    totals = df.groupby(df['date'].dt.to_period('M'))['amount'].sum()
    return totals.reindex(months, fill_value=0.0)


def current_week_bounds(today: Optional[date] = None) -> tuple:
    """Sunday-to-Saturday week containing ``today``."""
    current = today or date.today()
    start = current - timedelta(days=(current.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def aggregate_transactions_by_period(
    incomes: Iterable[Transaction],
    expenses: Iterable[Transaction],
    period: str,
    today: Optional[date] = None,
) -> pd.DataFrame:
    """Income and expense totals for each slot of the current period.

    Weekly and Monthly charts have one row per day of the current week or
    month; Yearly charts have one row per month of the current year.

    Returns:
        DataFrame with columns: period, income, expense

    Raises:
        ValueError: If ``period`` is not Weekly, Monthly or Yearly
    """
    current = today or date.today()
    if period == 'Yearly':
        slots = pd.period_range(f"{current.year}-01", f"{current.year}-12", freq='M')
        income = _monthly_totals(incomes, slots)
        expense = _monthly_totals(expenses, slots)
        labels = [p.to_timestamp().strftime(MONTH_LABEL) for p in slots]
    elif period in ('Weekly', 'Monthly'):
        if period == 'Weekly':
            start, end = current_week_bounds(current)
        else:
            last_day = calendar.monthrange(current.year, current.month)[1]
            start, end = current.replace(day=1), current.replace(day=last_day)
        slots = pd.date_range(start, end, freq='D')
        income = _daily_totals(incomes, slots)
        expense = _daily_totals(expenses, slots)
        labels = [ts.strftime(DAY_LABEL) for ts in slots]
    else:
        raise ValueError(f"Invalid period '{period}'. Choose one of {', '.join(CHART_PERIODS)}.")

    return pd.DataFrame({
        'period': labels,
        'income': income.to_numpy(dtype=float),
        'expense': expense.to_numpy(dtype=float),
    })


def aggregate_transactions_by_month(transactions: Iterable[Transaction], year: int) -> pd.DataFrame:
    """Monthly totals for all twelve months of ``year``.

    Returns:
        DataFrame with columns: month, total_amount
    """
    months = pd.period_range(f"{year}-01", f"{year}-12", freq='M')
    totals = _monthly_totals(transactions, months)
    return pd.DataFrame({
        'month': [p.to_timestamp().strftime(MONTH_LABEL) for p in months],
        'total_amount': totals.to_numpy(dtype=float),
    })
