"""Calendar-month summaries for the dashboard cards."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..models import EXPENSE, INCOME, Transaction

NO_DATA_DESCRIPTION = 'No Data This Month'


@dataclass
class HighestTransaction:
    amount: float
    description: str
    category: Optional[str] = None


@dataclass
class TransactionChange:
    amount_change: float
    is_increase: bool
    is_equal: bool


def previous_month(year: int, month: int) -> Tuple[int, int]:
    """Return (year, month) of the month before; January wraps to December."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def filter_month(transactions: Iterable[Transaction], year: int, month: int) -> List[Transaction]:
    return [t for t in transactions if t.date.year == year and t.date.month == month]


def filter_current_month(
    transactions: Iterable[Transaction],
    today: Optional[date] = None,
) -> List[Transaction]:
    current = today or date.today()
    return filter_month(transactions, current.year, current.month)


def total_for_month(transactions: Iterable[Transaction], today: Optional[date] = None) -> float:
    """Total amount of the current month's transactions, rounded to cents."""
    monthly = filter_current_month(transactions, today)
    return round(sum(t.amount for t in monthly), 2)


def highest_transaction_this_month(
    transactions: Iterable[Transaction],
    today: Optional[date] = None,
) -> HighestTransaction:
    """Find the single largest transaction of the current month.

    The scan keeps the first transaction seen when amounts tie.  When the
    month has no transactions a ``No Data This Month`` placeholder with a
    zero amount is returned.
    """
    highest: Optional[Transaction] = None
    for transaction in filter_current_month(transactions, today):
        if highest is None or transaction.amount > highest.amount:
            highest = transaction
    if highest is None:
        return HighestTransaction(amount=0.0, description=NO_DATA_DESCRIPTION)
    return HighestTransaction(
        amount=highest.amount,
        description=highest.description,
        category=highest.category,
    )


def transaction_change(
    transactions: Sequence[Transaction],
    today: Optional[date] = None,
) -> TransactionChange:
    """Compare this month's total against last month's."""
    current = today or date.today()
    prev_year, prev_month = previous_month(current.year, current.month)
    current_total = sum(t.amount for t in filter_month(transactions, current.year, current.month))
    previous_total = sum(t.amount for t in filter_month(transactions, prev_year, prev_month))
    change = current_total - previous_total
    return TransactionChange(
        amount_change=change,
        is_increase=change > 0,
        is_equal=change == 0,
    )


def recent_transactions(
    incomes: Iterable[Transaction],
    expenses: Iterable[Transaction],
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Merge incomes and expenses into table rows, most recent first."""
    rows = [
        {
            'id': t.id,
            'date': t.date,
            'description': t.description,
            'category': t.category,
            'amount': t.amount,
            'type': kind,
        }
        for kind, source in ((INCOME, incomes), (EXPENSE, expenses))
        for t in source
    ]
    rows.sort(key=lambda row: row['date'], reverse=True)
    return rows[:limit] if limit is not None else rows
