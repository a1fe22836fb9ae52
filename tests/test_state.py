from __future__ import annotations

import pytest

from budget_tracker.models import EXPENSE, INCOME
from budget_tracker.state import AppState


def test_load_fetches_every_collection(temp_db, user):
    temp_db.add_transaction(INCOME, user.id, "Paycheck", 2500, "2024-03-01", "Salary")
    temp_db.add_budget(user.id, "Weekly", 100, "2024-03-03", 1)
    temp_db.add_saving_goal(user.id, "Bike", 800, "2024-03-01", "2024-09-01")

    state = AppState.load(user.id)
    assert len(state.incomes) == 1
    assert state.expenses == []
    assert len(state.budgets) == 1
    assert len(state.saving_goals) == 1
    assert state.transactions(INCOME) is state.incomes


def test_load_unknown_user(temp_db):
    with pytest.raises(LookupError):
        AppState.load(42)


def test_refresh_replaces_collections(temp_db, user):
    state = AppState.load(user.id)
    temp_db.add_transaction(EXPENSE, user.id, "Coffee", 4, "2024-03-01", "Food")
    assert state.expenses == []

    state.refresh_transactions()
    assert [t.description for t in state.transactions(EXPENSE)] == ["Coffee"]

    state.set_expenses([])
    assert state.expenses == []
    with pytest.raises(ValueError):
        state.transactions("transfer")
