"""Budget progress calculations.

This module provides functions for calculating the total allocation of a
budget plan, the expenses that fall inside its window, a per-period
breakdown for charting, and straight-line spend projections.  Budgets are
also classified as active, expired or upcoming relative to a given day.

All functions are pure: they read a :class:`~budget_tracker.models.Budget`
and a list of expense transactions and return new values.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from ..config import PERIOD_DAYS
from ..models import Budget, Transaction

ACTIVE = 'active'
EXPIRED = 'expired'
UPCOMING = 'upcoming'

UNDER = 'under'
OVER = 'over'

OVER_BUDGET_COLOR = 'red'
UNDER_BUDGET_COLOR = '#4CAF50'


@dataclass
class BudgetBucket:
    label: str
    start: date
    end: date
    expense: float
    over_budget: bool
    color: str


@dataclass
class BudgetProjection:
    average_daily_expense: float
    expected_daily_average: float
    projected_expense: float
    expenditure_percentage: float
    average_daily_percent: float
    projected_expense_percent: float
    status: str


@dataclass
class BudgetProgress:
    budget: Budget
    classification: str
    total_budget: float
    total_expenses: float
    elapsed_days: int
    full_span_days: int
    projection: BudgetProjection
    remark: str

    @property
    def is_over(self) -> bool:
        return self.projection.status == OVER


def _today(today: Optional[date]) -> date:
    return today or date.today()


def days_in_budget_plan(start_date: date, end_date: date) -> int:
    """Number of days in ``[start_date, end_date]``, both ends included.

    An inverted range has no days.
    """
    days = (end_date - start_date).days + 1
    return max(days, 0)


def days_since_start(start_date: date, today: Optional[date] = None) -> int:
    """Days elapsed since ``start_date``, counting the start day itself."""
    return (_today(today) - start_date).days + 1


def days_until(target_date: date, today: Optional[date] = None) -> int:
    return (target_date - _today(today)).days


def calculate_total_budget(budget: Budget) -> float:
    """Return the money allocated across the budget's whole date span.

    The per-period amount is prorated over the inclusive day count, using
    7 days for a week and 30 days for a month.

    Example:
        >>> b = Budget(1, 'Weekly', 100.0, date(2024, 1, 1), date(2024, 1, 14))
        >>> calculate_total_budget(b)
        200.0
    """
    period_days = PERIOD_DAYS.get(budget.period)
    if not period_days:
        return 0.0
    total_days = days_in_budget_plan(budget.start_date, budget.end_date)
    return budget.amount * (total_days / period_days)


def _sum_between(expenses: Iterable[Transaction], start: date, end: date) -> float:
    return sum(e.amount for e in expenses if start <= e.date <= end)


def calculate_total_expenses(
    budget: Budget,
    expenses: Sequence[Transaction],
    active: bool,
    expired: bool,
    today: Optional[date] = None,
) -> float:
    """Sum the expenses that fall inside the budget window.

    The window runs from the budget start to today for an active budget
    and to the budget end otherwise.  ``expired`` is accepted so callers can
    pass both classification flags through unchanged; it does not move the
    window.
    """
    end = _today(today) if active else budget.end_date
    return _sum_between(expenses, budget.start_date, end)


def budget_breakdown(budget: Budget, expenses: Sequence[Transaction]) -> List[BudgetBucket]:
    """Split a budget into consecutive week or month buckets for charting.

    Buckets are 7 or 30 days long and never extend past the budget end.
    Each day of the budget belongs to exactly one bucket.  A bucket is
    flagged over budget when its spend exceeds the flat per-period amount.
    """
    size = PERIOD_DAYS.get(budget.period)
    if not size:
        return []
    label = 'Week' if budget.period == 'Weekly' else 'Month'
    total_days = days_in_budget_plan(budget.start_date, budget.end_date)
    count = math.ceil(total_days / size)

    buckets: List[BudgetBucket] = []
    for i in range(count):
        bucket_start = budget.start_date + timedelta(days=i * size)
        bucket_end = min(bucket_start + timedelta(days=size - 1), budget.end_date)
        spent = _sum_between(expenses, bucket_start, bucket_end)
        over = spent > budget.amount
        buckets.append(BudgetBucket(
            label=f"{label} {i + 1}",
            start=bucket_start,
            end=bucket_end,
            expense=spent,
            over_budget=over,
            color=OVER_BUDGET_COLOR if over else UNDER_BUDGET_COLOR,
        ))
    return buckets


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else 0.0


def calculate_projection(
    total_expenses: float,
    total_budget: float,
    elapsed_days: int,
    full_span_days: int,
) -> BudgetProjection:
    """Extrapolate the average spend so far over the full budget span."""
    average_daily = _ratio(total_expenses, elapsed_days)
    expected_daily = _ratio(total_budget, full_span_days)
    projected = average_daily * full_span_days
    projected_percent = _ratio(projected, total_budget) * 100
    return BudgetProjection(
        average_daily_expense=average_daily,
        expected_daily_average=expected_daily,
        projected_expense=projected,
        expenditure_percentage=_ratio(total_expenses, total_budget) * 100,
        average_daily_percent=_ratio(average_daily, expected_daily) * 100,
        projected_expense_percent=projected_percent,
        status=UNDER if projected_percent < 100 else OVER,
    )


def classify_budget(budget: Budget, today: Optional[date] = None) -> str:
    current = _today(today)
    if budget.end_date < current:
        return EXPIRED
    if budget.start_date > current:
        return UPCOMING
    return ACTIVE


def _remark(classification: str, status: str, budget: Budget, today: date) -> str:
    if classification == ACTIVE:
        return 'Keep it Up!' if status == UNDER else 'Lower your Expenses!'
    if classification == EXPIRED:
        return 'You were under budget!' if status == UNDER else 'You went over budget!'
    return f"Starts in {days_until(budget.start_date, today)} days"


def budget_progress(
    budget: Budget,
    expenses: Sequence[Transaction],
    today: Optional[date] = None,
) -> BudgetProgress:
    """Compute every figure the budget progress card displays."""
    current = _today(today)
    classification = classify_budget(budget, current)
    active = classification == ACTIVE
    expired = classification == EXPIRED

    total_budget = calculate_total_budget(budget)
    total_expenses = calculate_total_expenses(budget, expenses, active, expired, current)
    full_span = days_in_budget_plan(budget.start_date, budget.end_date)
    elapsed = days_since_start(budget.start_date, current) if active else full_span
    projection = calculate_projection(total_expenses, total_budget, elapsed, full_span)

    return BudgetProgress(
        budget=budget,
        classification=classification,
        total_budget=total_budget,
        total_expenses=total_expenses,
        elapsed_days=elapsed,
        full_span_days=full_span,
        projection=projection,
        remark=_remark(classification, projection.status, budget, current),
    )


def get_active_budget(budgets: Iterable[Budget], today: Optional[date] = None) -> Optional[Budget]:
    current = _today(today)
    return next((b for b in budgets if classify_budget(b, current) == ACTIVE), None)


def get_expired_budgets(budgets: Iterable[Budget], today: Optional[date] = None) -> List[Budget]:
    current = _today(today)
    return [b for b in budgets if classify_budget(b, current) == EXPIRED]


def get_upcoming_budgets(budgets: Iterable[Budget], today: Optional[date] = None) -> List[Budget]:
    current = _today(today)
    return [b for b in budgets if classify_budget(b, current) == UPCOMING]


def budgets_by_period(budgets: Iterable[Budget]) -> Dict[str, List[Budget]]:
    grouped: Dict[str, List[Budget]] = {period: [] for period in PERIOD_DAYS}
    for budget in budgets:
        grouped.setdefault(budget.period, []).append(budget)
    return grouped
