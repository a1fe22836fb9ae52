"""Store round trips against a temporary SQLite database."""

from __future__ import annotations

from datetime import date

import pytest

from budget_tracker.models import EXPENSE, INCOME


def test_create_and_fetch_user(temp_db, user):
    fetched = temp_db.fetch_user(user.id)
    assert fetched.username == "alice"
    assert fetched.first_name == "Alice"

    with pytest.raises(ValueError):
        temp_db.create_user("alice", "other@example.com")
    with pytest.raises(LookupError, match="User not found"):
        temp_db.fetch_user(999)


def test_add_and_fetch_transactions(temp_db, user):
    temp_db.add_transaction(INCOME, user.id, "Paycheck", 2500, "2024-03-01", "Salary")
    expenses = temp_db.add_transaction(EXPENSE, user.id, "Groceries", 82.5, date(2024, 3, 2), "Groceries")
    expenses = temp_db.add_transaction(EXPENSE, user.id, "Cinema", 20, date(2024, 4, 2), "Entertainment")

    assert [t.description for t in expenses] == ["Groceries", "Cinema"]
    assert expenses[0].amount == 82.5
    assert expenses[0].date == date(2024, 3, 2)
    assert expenses[0].kind == EXPENSE

    march = temp_db.fetch_transactions(EXPENSE, user.id, start_date="2024-03-01", end_date="2024-03-31")
    assert [t.description for t in march] == ["Groceries"]

    df = temp_db.fetch_transactions_df(INCOME, user.id)
    assert list(df.columns) == ['id', 'user_id', 'description', 'amount', 'transaction_date', 'category']
    assert len(df) == 1


def test_add_transaction_validation(temp_db, user):
    with pytest.raises(ValueError):
        temp_db.add_transaction(EXPENSE, user.id, "Lunch", 0, "2024-03-01", "Food")
    with pytest.raises(ValueError):
        temp_db.add_transaction("transfer", user.id, "Lunch", 10, "2024-03-01", "Food")
    with pytest.raises(LookupError):
        temp_db.add_transaction(EXPENSE, 999, "Lunch", 10, "2024-03-01", "Food")


def test_update_and_delete_transaction(temp_db, user):
    expense = temp_db.add_transaction(EXPENSE, user.id, "Lunch", 12, "2024-03-01", "Food")[0]

    updated = temp_db.update_transaction(EXPENSE, expense.id, amount=15, category="Entertainment")
    assert updated.amount == 15.0
    assert updated.category == "Entertainment"
    assert updated.description == "Lunch"

    with pytest.raises(ValueError, match="Nothing to update"):
        temp_db.update_transaction(EXPENSE, expense.id)
    with pytest.raises(ValueError):
        temp_db.update_transaction(EXPENSE, expense.id, category="Salary")
    with pytest.raises(LookupError, match="Expense not found"):
        temp_db.update_transaction(EXPENSE, 999, amount=5)

    assert temp_db.delete_transaction(EXPENSE, user.id, expense.id) == []
    with pytest.raises(LookupError):
        temp_db.delete_transaction(EXPENSE, user.id, expense.id)


def test_budget_overlap_rejected_per_period(temp_db, user):
    budgets = temp_db.add_budget(user.id, "Weekly", 100, "2024-01-01", 2)
    assert len(budgets) == 1
    assert budgets[0].end_date == date(2024, 1, 14)

    with pytest.raises(ValueError, match="You already have a weekly budget overlapping"):
        temp_db.add_budget(user.id, "Weekly", 50, "2024-01-14", 1)

    budgets = temp_db.add_budget(user.id, "Weekly", 50, "2024-01-15", 1)
    budgets = temp_db.add_budget(user.id, "Monthly", 400, "2024-01-01", 1)
    assert [b.period for b in budgets] == ["Weekly", "Monthly", "Weekly"]


def test_delete_budget(temp_db, user):
    budget = temp_db.add_budget(user.id, "Monthly", 400, "2024-01-01", 1)[0]
    assert temp_db.delete_budget(user.id, budget.id) == []
    with pytest.raises(LookupError, match="Budget not found"):
        temp_db.delete_budget(user.id, budget.id)


def test_saving_goal_deposits(temp_db, user):
    goal = temp_db.add_saving_goal(user.id, "Laptop", 1500, "2024-01-01", "2024-06-30")[0]
    assert goal.current_amount == 0.0

    temp_db.deposit_to_saving_goal(user.id, goal.id, 500)
    updated = temp_db.deposit_to_saving_goal(user.id, goal.id, 250.5)
    assert updated.current_amount == 750.5
    assert temp_db.fetch_saving_goals(user.id)[0].current_amount == 750.5

    with pytest.raises(ValueError):
        temp_db.deposit_to_saving_goal(user.id, goal.id, -10)
    with pytest.raises(LookupError, match="Saving Goal not found"):
        temp_db.deposit_to_saving_goal(user.id, 999, 10)

    assert temp_db.delete_saving_goal(user.id, goal.id) == []


def test_clear_database(temp_db, user):
    temp_db.add_transaction(EXPENSE, user.id, "Lunch", 12, "2024-03-01", "Food")
    assert temp_db.clear_database() is True
    with pytest.raises(LookupError):
        temp_db.fetch_user(user.id)


@pytest.mark.parametrize("amount", ["nan", "abc", 0, -3])
def test_update_transaction_rejects_bad_amount(temp_db, user, amount):
    expense = temp_db.add_transaction(EXPENSE, user.id, "Lunch", 12, "2024-03-01", "Food")[0]
    with pytest.raises(ValueError):
        temp_db.update_transaction(EXPENSE, expense.id, amount=amount)
    assert temp_db.fetch_transactions(EXPENSE, user.id)[0].amount == 12.0
