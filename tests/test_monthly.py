from datetime import date

from budget_tracker.analytics import monthly as m
from budget_tracker.models import EXPENSE, INCOME, Transaction


def txn(day, amount, description='item', category='Food', kind=EXPENSE, id=None):
    return Transaction(
        user_id=1, description=description, amount=amount, date=day, category=category, kind=kind, id=id,
    )


def test_highest_transaction_sentinel_when_month_empty():
    today = date(2024, 3, 15)
    empty = m.highest_transaction_this_month([], today)
    assert empty.amount == 0
    assert empty.description == 'No Data This Month'

    other_month = m.highest_transaction_this_month([txn(date(2024, 2, 28), 99.0)], today)
    assert other_month.description == m.NO_DATA_DESCRIPTION


def test_highest_transaction_first_seen_wins_tie():
    today = date(2024, 3, 15)
    transactions = [
        txn(date(2024, 3, 1), 50.0, 'coffee'),
        txn(date(2024, 3, 2), 100.0, 'groceries'),
        txn(date(2024, 3, 3), 100.0, 'dinner'),
        txn(date(2023, 3, 3), 500.0, 'last year'),
    ]
    highest = m.highest_transaction_this_month(transactions, today)
    assert highest.amount == 100.0
    assert highest.description == 'groceries'
    assert highest.category == 'Food'


def test_previous_month_wraps_january():
    assert m.previous_month(2024, 1) == (2023, 12)
    assert m.previous_month(2024, 7) == (2024, 6)


def test_change_compares_against_december_in_january():
    transactions = [
        txn(date(2023, 12, 20), 100.0),
        txn(date(2024, 1, 5), 300.0),
        txn(date(2023, 1, 5), 1000.0),
    ]
    change = m.transaction_change(transactions, date(2024, 1, 15))
    assert change.amount_change == 200.0
    assert change.is_increase
    assert not change.is_equal


def test_change_flags_are_exclusive():
    same = m.transaction_change([txn(date(2024, 2, 1), 50.0), txn(date(2024, 3, 1), 50.0)], date(2024, 3, 10))
    assert same.is_equal and not same.is_increase

    lower = m.transaction_change([txn(date(2024, 2, 1), 80.0), txn(date(2024, 3, 1), 50.0)], date(2024, 3, 10))
    assert lower.amount_change == -30.0
    assert not lower.is_increase and not lower.is_equal

    nothing = m.transaction_change([], date(2024, 3, 10))
    assert nothing.is_equal


def test_total_for_month_rounds_to_cents():
    transactions = [txn(date(2024, 3, 1), 0.1), txn(date(2024, 3, 2), 0.2), txn(date(2024, 2, 2), 7.0)]
    assert m.total_for_month(transactions, date(2024, 3, 31)) == 0.3
    assert m.total_for_month([], date(2024, 3, 31)) == 0.0


def test_recent_transactions_merges_newest_first():
    incomes = [txn(date(2024, 3, 1), 2000.0, 'pay', 'Salary', INCOME, id=1)]
    expenses = [
        txn(date(2024, 3, 5), 40.0, 'lunch', id=7),
        txn(date(2024, 2, 20), 900.0, 'rent', 'Rent', id=8),
    ]
    rows = m.recent_transactions(incomes, expenses)
    assert [row['description'] for row in rows] == ['lunch', 'pay', 'rent']
    assert [row['type'] for row in rows] == [EXPENSE, INCOME, EXPENSE]
    assert rows[0]['id'] == 7

    assert len(m.recent_transactions(incomes, expenses, limit=2)) == 2
