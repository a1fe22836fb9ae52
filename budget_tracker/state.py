"""Application state passed explicitly to every view.

The dashboard builds one :class:`AppState` per rerun and hands it to the
render functions, instead of reading collections from a global store.  Each
``refresh_*`` method replaces a whole collection with a fresh read from the
database.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from . import db
from .models import EXPENSE, INCOME, Budget, SavingGoal, Transaction


@dataclass
class AppState:
    user_id: int
    incomes: List[Transaction] = field(default_factory=list)
    expenses: List[Transaction] = field(default_factory=list)
    budgets: List[Budget] = field(default_factory=list)
    saving_goals: List[SavingGoal] = field(default_factory=list)

    @classmethod
    def load(cls, user_id: int) -> 'AppState':
        """Fetch every collection for ``user_id``."""
        db.fetch_user(user_id)
        state = cls(user_id=user_id)
        state.refresh_all()
        return state

    def refresh_all(self) -> None:
        self.refresh_transactions()
        self.refresh_budgets()
        self.refresh_saving_goals()

    def refresh_transactions(self) -> None:
        self.incomes = db.fetch_transactions(INCOME, self.user_id)
        self.expenses = db.fetch_transactions(EXPENSE, self.user_id)

    def refresh_budgets(self) -> None:
        self.budgets = db.fetch_budgets(self.user_id)

    def refresh_saving_goals(self) -> None:
        self.saving_goals = db.fetch_saving_goals(self.user_id)

    def set_incomes(self, incomes: List[Transaction]) -> None:
        self.incomes = list(incomes)

    def set_expenses(self, expenses: List[Transaction]) -> None:
        self.expenses = list(expenses)

    def set_budgets(self, budgets: List[Budget]) -> None:
        self.budgets = list(budgets)

    def set_saving_goals(self, goals: List[SavingGoal]) -> None:
        self.saving_goals = list(goals)

    def transactions(self, kind: str) -> List[Transaction]:
        if kind == INCOME:
            return self.incomes
        if kind == EXPENSE:
            return self.expenses
        raise ValueError(f"Unknown transaction kind '{kind}'")
