from datetime import date, datetime

import pandas as pd
import pytest

from budget_tracker.models import (
    EXPENSE,
    INCOME,
    Budget,
    SavingGoal,
    Transaction,
    categories_for,
    coerce_date,
)


def test_budget_end_date_covers_period_count():
    weekly = Budget.create(1, 'Weekly', 100, '2024-01-01', 2)
    assert weekly.start_date == date(2024, 1, 1)
    assert weekly.end_date == date(2024, 1, 14)
    assert weekly.amount == 100.0
    assert weekly.period_days == 7

    monthly = Budget.create(1, 'Monthly', '250.50', date(2024, 1, 1), 1)
    assert monthly.end_date == date(2024, 1, 30)


@pytest.mark.parametrize("count", [0, 7, "x"])
def test_budget_rejects_bad_period_count(count):
    with pytest.raises(ValueError):
        Budget.create(1, 'Weekly', 100, '2024-01-01', count)


def test_budget_rejects_bad_amount_and_period():
    with pytest.raises(ValueError, match="cannot be negative or zero"):
        Budget.create(1, 'Weekly', 0, '2024-01-01', 1)
    with pytest.raises(ValueError, match="must be a number"):
        Budget.create(1, 'Weekly', 'lots', '2024-01-01', 1)
    with pytest.raises(ValueError, match="Invalid period"):
        Budget.create(1, 'Yearly', 100, '2024-01-01', 1)


def test_transaction_create_validates_category_for_kind():
    income = Transaction.create(1, ' Paycheck ', 2500, '2024-03-01', 'Salary', kind=INCOME)
    assert income.description == 'Paycheck'
    assert income.date == date(2024, 3, 1)
    assert income.kind == INCOME

    with pytest.raises(ValueError, match="Invalid expense category"):
        Transaction.create(1, 'Paycheck', 2500, '2024-03-01', 'Salary', kind=EXPENSE)
    with pytest.raises(ValueError, match="Description is required"):
        Transaction.create(1, '   ', 10, '2024-03-01', 'Food')
    with pytest.raises(ValueError):
        Transaction.create(1, 'Lunch', -5, '2024-03-01', 'Food')


def test_saving_goal_dates_and_deposit():
    goal = SavingGoal.create(1, 'Car', 5000, '2024-01-01', '2024-12-31')
    assert goal.current_amount == 0.0
    assert not goal.is_completed

    funded = goal.deposit(5000)
    assert funded.current_amount == 5000.0
    assert funded.is_completed
    assert goal.current_amount == 0.0

    with pytest.raises(ValueError):
        goal.deposit(0)
    with pytest.raises(ValueError, match="End date must not be prior to start date"):
        SavingGoal.create(1, 'Car', 5000, '2024-12-31', '2024-01-01')


def test_categories_for_unknown_kind():
    assert 'Salary' in categories_for(INCOME)
    assert 'Rent' in categories_for(EXPENSE)
    with pytest.raises(ValueError):
        categories_for('transfer')


def test_coerce_date_accepts_common_inputs():
    assert coerce_date(date(2024, 5, 1)) == date(2024, 5, 1)
    assert coerce_date(datetime(2024, 5, 1, 13, 30)) == date(2024, 5, 1)
    assert coerce_date(pd.Timestamp('2024-05-01')) == date(2024, 5, 1)
    assert coerce_date('2024-05-01') == date(2024, 5, 1)
    with pytest.raises(ValueError):
        coerce_date('')
    with pytest.raises(ValueError):
        coerce_date('not a date')
