"""Domain records for incomes, expenses, budgets and saving goals.

Records are plain dataclasses.  Validation happens in the ``create``
constructors, which are the only place new budgets and goals should be
built from user input; records loaded back from the store are trusted.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from typing import Any, List, Optional

import pandas as pd

try:
    from .config import MAX_PERIOD_COUNT, PERIOD_DAYS
except ImportError:
    from config import MAX_PERIOD_COUNT, PERIOD_DAYS

INCOME = 'income'
EXPENSE = 'expense'
TRANSACTION_KINDS = (INCOME, EXPENSE)

INCOME_CATEGORIES: List[str] = [
    'Salary',
    'Freelance',
    'Investments',
    'Gifts',
    'Business',
    'Other',
]
EXPENSE_CATEGORIES: List[str] = [
    'Rent',
    'Utilities',
    'Groceries',
    'Food',
    'Entertainment',
    'Travel',
    'Healthcare',
    'Education',
    'Other',
]
OTHER_CATEGORY = 'Other'

BUDGET_PERIODS = tuple(PERIOD_DAYS)


def categories_for(kind: str) -> List[str]:
    """Return the category enum for ``kind`` ('income' or 'expense')."""
    if kind == INCOME:
        return list(INCOME_CATEGORIES)
    if kind == EXPENSE:
        return list(EXPENSE_CATEGORIES)
    raise ValueError(f"Unknown transaction kind '{kind}'")


def coerce_date(value: Any) -> date:
    """Convert dates, datetimes, timestamps and date strings to ``date``."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError("Date is required")
    if hasattr(value, 'to_pydatetime'):
        value = value.to_pydatetime()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    ts = pd.to_datetime(value, errors='coerce')
    if pd.isna(ts):
        raise ValueError(f"Date must be a valid date: {value!r}")
    return ts.date()


@dataclass
class User:
    username: str
    email: str
    first_name: str = ''
    last_name: str = ''
    id: Optional[int] = None
    created_at: Optional[str] = None


@dataclass
class Transaction:
    """A single income or expense entry."""

    user_id: int
    description: str
    amount: float
    date: date
    category: str
    kind: str = EXPENSE
    id: Optional[int] = None

    @classmethod
    def create(
        cls,
        user_id: int,
        description: str,
        amount: Any,
        when: Any,
        category: str,
        kind: str = EXPENSE,
    ) -> 'Transaction':
        """Validate user input and build a transaction.

        Raises:
            ValueError: If the description is empty, the amount is not a
                positive number, the date is invalid or the category is not
                part of the enum for ``kind``.
        """
        if not description or not str(description).strip():
            raise ValueError("Description is required")
        parsed_amount = positive_amount(amount, 'Amount')
        if category not in categories_for(kind):
            raise ValueError(f"Invalid {kind} category '{category}'")
        return cls(
            user_id=user_id,
            description=str(description).strip(),
            amount=parsed_amount,
            date=coerce_date(when),
            category=category,
            kind=kind,
        )


@dataclass
class Budget:
    """A recurring allocation of ``amount`` per period between two dates."""

    user_id: int
    period: str
    amount: float
    start_date: date
    end_date: date
    id: Optional[int] = None

    @classmethod
    def create(
        cls,
        user_id: int,
        period: str,
        amount: Any,
        start_date: Any,
        period_count: int,
    ) -> 'Budget':
        """Build a budget whose end date covers ``period_count`` periods.

        The end date is inclusive, so a two-week budget starting on
        2024-01-01 ends on 2024-01-14.

        Raises:
            ValueError: On an unknown period, a non-positive amount or a
                period count outside ``1..MAX_PERIOD_COUNT``.
        """
        if period not in PERIOD_DAYS:
            raise ValueError(f"Invalid period '{period}'")
        parsed_amount = positive_amount(amount, 'Amount')
        try:
            count = int(period_count)
        except (TypeError, ValueError):
            raise ValueError("Invalid length of period") from None
        if not 1 <= count <= MAX_PERIOD_COUNT:
            raise ValueError(
                f"Length of period must be between 1 and {MAX_PERIOD_COUNT}"
            )
        start = coerce_date(start_date)
        end = start + timedelta(days=count * PERIOD_DAYS[period] - 1)
        return cls(
            user_id=user_id,
            period=period,
            amount=parsed_amount,
            start_date=start,
            end_date=end,
        )

    @property
    def period_days(self) -> int:
        return PERIOD_DAYS.get(self.period, 0)


@dataclass
class SavingGoal:
    """A savings target funded by additive deposits."""

    user_id: int
    goal_name: str
    target_amount: float
    current_amount: float
    start_date: date
    end_date: date
    id: Optional[int] = None

    @classmethod
    def create(
        cls,
        user_id: int,
        goal_name: str,
        target_amount: Any,
        start_date: Any,
        end_date: Any,
    ) -> 'SavingGoal':
        if not goal_name or not str(goal_name).strip():
            raise ValueError("Goal name is required")
        target = positive_amount(target_amount, 'Target amount')
        start = coerce_date(start_date)
        end = coerce_date(end_date)
        if end < start:
            raise ValueError("End date must not be prior to start date.")
        return cls(
            user_id=user_id,
            goal_name=str(goal_name).strip(),
            target_amount=target,
            current_amount=0.0,
            start_date=start,
            end_date=end,
        )

    @property
    def is_completed(self) -> bool:
        return self.current_amount >= self.target_amount

    def deposit(self, amount: Any) -> 'SavingGoal':
        """Return a copy of the goal with ``amount`` added to it."""
        added = positive_amount(amount, 'Deposit')
        return replace(self, current_amount=self.current_amount + added)


def positive_amount(value: Any, label: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{label} must be a number") from None
    if pd.isna(number) or number <= 0:
        raise ValueError(f"{label} cannot be negative or zero")
    return number
