"""Category aggregation for distribution charts and "top category" cards."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..models import INCOME, OTHER_CATEGORY, Transaction, categories_for
from .monthly import filter_current_month

INCOME_SHADES = [
    '#006400', '#228B22', '#2E8B57', '#3CB371', '#66CDAA', '#8FBC8F',
    '#90EE90', '#98FB98', '#ADFF2F',
]
EXPENSE_SHADES = [
    '#8B0000', '#B22222', '#DC143C', '#FF0000', '#FF4500', '#FF6347',
    '#FF7F50', '#F08080', '#FA8072',
]


@dataclass
class CategoryTotal:
    category: str
    amount: float


def aggregate_by_category(
    transactions: Iterable[Transaction],
    categories: Sequence[str],
) -> Dict[str, float]:
    """Sum transaction amounts for every category in ``categories``.

    Every category is present in the result, in enum order, even with no
    transactions.  Amounts with an unrecognised category are added to
    ``Other``.

    Example:
        >>> aggregate_by_category([], ['Salary', 'Other'])
        {'Salary': 0.0, 'Other': 0.0}
    """
    totals: Dict[str, float] = {category: 0.0 for category in categories}
    totals.setdefault(OTHER_CATEGORY, 0.0)
    for transaction in transactions:
        key = transaction.category if transaction.category in totals else OTHER_CATEGORY
        totals[key] += transaction.amount
    return totals


def category_totals(transactions: Iterable[Transaction], kind: str) -> Dict[str, float]:
    return aggregate_by_category(transactions, categories_for(kind))


def highest_category_this_month(
    transactions: Iterable[Transaction],
    kind: str,
    today: Optional[date] = None,
) -> Optional[CategoryTotal]:
    """Return the category with the largest total in the current month.

    Categories are compared in the order they first appear among the
    month's transactions and only a strictly larger total replaces the
    current leader, so the category seen first wins a tie.  Unknown
    categories count as ``Other``.  Returns ``None`` when nothing was
    recorded this month.
    """
    known = set(categories_for(kind))
    totals: Dict[str, float] = {}
    for transaction in filter_current_month(transactions, today):
        key = transaction.category if transaction.category in known else OTHER_CATEGORY
        totals[key] = totals.get(key, 0.0) + transaction.amount

    best: Optional[CategoryTotal] = None
    for category, amount in totals.items():
        if best is None or amount > best.amount:
            best = CategoryTotal(category=category, amount=amount)
    if best is None or best.amount <= 0:
        return None
    return best


def category_distribution(
    transactions: Iterable[Transaction],
    kind: str,
    today: Optional[date] = None,
) -> List[Dict[str, Any]]:
    """Pie chart slices for the current month, one per category."""
    totals = category_totals(filter_current_month(transactions, today), kind)
    shades = INCOME_SHADES if kind == INCOME else EXPENSE_SHADES
    return [
        {
            'id': index,
            'label': category,
            'value': amount,
            'color': shades[index % len(shades)],
        }
        for index, (category, amount) in enumerate(totals.items())
    ]
