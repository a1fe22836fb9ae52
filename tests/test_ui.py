from datetime import date

from budget_tracker.models import Transaction
from budget_tracker.ui import transaction_options


def test_identical_transactions_keep_separate_options():
    lunch = dict(user_id=1, description='Lunch', amount=12.0, date=date(2024, 3, 1), category='Food')
    first = Transaction(id=1, **lunch)
    second = Transaction(id=2, **lunch)
    options = transaction_options([first, second, Transaction(id=3, **{**lunch, 'date': date(2024, 3, 5)})])

    assert len(options) == 3
    assert list(options.values())[0].id == 3
    assert {t.id for t in options.values()} == {1, 2, 3}
