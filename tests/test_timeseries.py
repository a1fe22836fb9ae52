from datetime import date

import pytest

from budget_tracker.analytics import timeseries as ts
from budget_tracker.models import EXPENSE, INCOME, Transaction


def txn(day, amount, kind=EXPENSE):
    category = 'Salary' if kind == INCOME else 'Food'
    return Transaction(user_id=1, description='x', amount=amount, date=day, category=category, kind=kind)


def test_week_starts_on_sunday():
    assert ts.current_week_bounds(date(2024, 1, 10)) == (date(2024, 1, 7), date(2024, 1, 13))
    assert ts.current_week_bounds(date(2024, 1, 7)) == (date(2024, 1, 7), date(2024, 1, 13))


def test_weekly_series_matches_by_date_not_label():
    incomes = [txn(date(2024, 1, 8), 100.0, INCOME)]
    expenses = [txn(date(2024, 1, 8), 25.0), txn(date(2023, 1, 8), 999.0)]
    series = ts.aggregate_transactions_by_period(incomes, expenses, 'Weekly', date(2024, 1, 10))

    assert list(series.columns) == ['period', 'income', 'expense']
    assert len(series) == 7
    assert series['period'].iloc[0] == '07 Jan'
    assert series['period'].iloc[-1] == '13 Jan'
    assert series['income'].iloc[1] == 100.0
    assert series['expense'].sum() == 25.0


def test_monthly_series_has_one_row_per_day():
    series = ts.aggregate_transactions_by_period([], [txn(date(2024, 2, 29), 10.0)], 'Monthly', date(2024, 2, 10))
    assert len(series) == 29
    assert series['expense'].iloc[-1] == 10.0
    assert series['income'].sum() == 0.0


def test_yearly_series_has_twelve_months():
    expenses = [txn(date(2024, 3, 1), 20.0), txn(date(2024, 3, 30), 30.0), txn(date(2023, 3, 1), 500.0)]
    series = ts.aggregate_transactions_by_period([], expenses, 'Yearly', date(2024, 6, 1))
    assert len(series) == 12
    assert series['period'].iloc[0] == 'Jan 2024'
    assert series.loc[series['period'] == 'Mar 2024', 'expense'].iloc[0] == 50.0


def test_unknown_chart_period_raises():
    with pytest.raises(ValueError):
        ts.aggregate_transactions_by_period([], [], 'Daily', date(2024, 1, 1))


def test_monthly_totals_for_year():
    transactions = [txn(date(2024, 1, 3), 10.0), txn(date(2024, 12, 31), 5.0), txn(date(2025, 1, 1), 7.0)]
    monthly = ts.aggregate_transactions_by_month(transactions, 2024)
    assert list(monthly.columns) == ['month', 'total_amount']
    assert len(monthly) == 12
    assert monthly['total_amount'].tolist()[0] == 10.0
    assert monthly['total_amount'].tolist()[-1] == 5.0
    assert monthly['total_amount'].sum() == 15.0
