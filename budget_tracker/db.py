from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterator, List, Optional

import pandas as pd

# Import configuration
try:
    from .config import DB_PATH
    from .models import (
        Budget,
        SavingGoal,
        Transaction,
        User,
        positive_amount,
        coerce_date,
        categories_for,
    )
except ImportError:
    from config import DB_PATH
    from models import (
        Budget,
        SavingGoal,
        Transaction,
        User,
        positive_amount,
        coerce_date,
        categories_for,
    )

logger = logging.getLogger(__name__)

DB_PATH_STR = str(DB_PATH)

# One table per transaction kind, as incomes and expenses carry different category enums
TRANSACTION_TABLES = {
    'income': 'incomes',
    'expense': 'expenses',
}

SCHEMA_SQL = """
PRAGMA journal_mode=WAL;
PRAGMA synchronous=NORMAL;
PRAGMA foreign_keys=ON;

CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT NOT NULL UNIQUE,
    email TEXT NOT NULL UNIQUE,
    first_name TEXT,
    last_name TEXT,
    created_at TEXT
);

CREATE TABLE IF NOT EXISTS incomes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    description TEXT NOT NULL,
    amount REAL NOT NULL,
    transaction_date TEXT NOT NULL,
    category TEXT NOT NULL,
    created_at TEXT
);

CREATE TABLE IF NOT EXISTS expenses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    description TEXT NOT NULL,
    amount REAL NOT NULL,
    transaction_date TEXT NOT NULL,
    category TEXT NOT NULL,
    created_at TEXT
);

CREATE TABLE IF NOT EXISTS budgets (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    period TEXT NOT NULL,
    amount REAL NOT NULL,
    start_date TEXT NOT NULL,
    end_date TEXT NOT NULL,
    created_at TEXT
);

CREATE TABLE IF NOT EXISTS saving_goals (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    goal_name TEXT NOT NULL,
    target_amount REAL NOT NULL,
    current_amount REAL NOT NULL DEFAULT 0,
    start_date TEXT NOT NULL,
    end_date TEXT NOT NULL,
    created_at TEXT
);

CREATE INDEX IF NOT EXISTS ix_income_user_date ON incomes (user_id, transaction_date);
CREATE INDEX IF NOT EXISTS ix_expense_user_date ON expenses (user_id, transaction_date);
CREATE INDEX IF NOT EXISTS ix_budget_user ON budgets (user_id, period);
CREATE INDEX IF NOT EXISTS ix_goal_user ON saving_goals (user_id);
"""


def _ensure_dirs() -> None:
    Path(DB_PATH_STR).parent.mkdir(parents=True, exist_ok=True)


def _now() -> str:
    return datetime.now().isoformat(timespec="seconds")


@contextmanager
def connect() -> Iterator[sqlite3.Connection]:
    _ensure_dirs()
    conn = sqlite3.connect(DB_PATH_STR)
    conn.execute("PRAGMA foreign_keys=ON")
    try:
        yield conn
    finally:
        conn.close()


def init_db() -> None:
    with connect() as conn:
        conn.executescript(SCHEMA_SQL)
        conn.commit()


def _table_for(kind: str) -> str:
    try:
        return TRANSACTION_TABLES[kind]
    except KeyError:
        raise ValueError(f"Unknown transaction kind '{kind}'") from None


def _require_user(conn: sqlite3.Connection, user_id: int) -> None:
    row = conn.execute("SELECT id FROM users WHERE id = ?", (user_id,)).fetchone()
    if row is None:
        raise LookupError("User not found")


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


def create_user(username: str, email: str, first_name: str = '', last_name: str = '') -> User:
    if not username or not username.strip():
        raise ValueError("Username is required")
    if not email or '@' not in email:
        raise ValueError("A valid email is required")
    created_at = _now()
    with connect() as conn:
        try:
            cursor = conn.execute(
                "INSERT INTO users (username, email, first_name, last_name, created_at) VALUES (?, ?, ?, ?, ?)",
                (username.strip(), email.strip(), first_name, last_name, created_at),
            )
        except sqlite3.IntegrityError:
            raise ValueError("Username or email is already registered") from None
        conn.commit()
        user_id = cursor.lastrowid
    logger.info("Created user %s", user_id)
    return User(
        username=username.strip(),
        email=email.strip(),
        first_name=first_name,
        last_name=last_name,
        id=user_id,
        created_at=created_at,
    )


def fetch_user(user_id: int) -> User:
    with connect() as conn:
        row = conn.execute(
            "SELECT id, username, email, first_name, last_name, created_at FROM users WHERE id = ?",
            (user_id,),
        ).fetchone()
    if row is None:
        raise LookupError("User not found")
    return User(
        id=row[0],
        username=row[1],
        email=row[2],
        first_name=row[3] or '',
        last_name=row[4] or '',
        created_at=row[5],
    )


# ---------------------------------------------------------------------------
# Incomes and expenses
# ---------------------------------------------------------------------------


def fetch_transactions_df(
    kind: str,
    user_id: int,
    start_date: Optional[Any] = None,
    end_date: Optional[Any] = None,
) -> pd.DataFrame:
    table = _table_for(kind)
    where: List[str] = ["user_id = ?"]
    params: List[Any] = [user_id]

    if start_date:
        where.append("transaction_date >= ?")
        params.append(coerce_date(start_date).isoformat())
    if end_date:
        where.append("transaction_date <= ?")
        params.append(coerce_date(end_date).isoformat())

    sql = (
        f"SELECT id, user_id, description, amount, transaction_date, category FROM {table}"
        f" WHERE {' AND '.join(where)} ORDER BY transaction_date ASC, id ASC"
    )
    with connect() as conn:
        df = pd.read_sql_query(sql, conn, params=params)
    if not df.empty:
        df['transaction_date'] = pd.to_datetime(df['transaction_date'])
    return df


def fetch_transactions(
    kind: str,
    user_id: int,
    start_date: Optional[Any] = None,
    end_date: Optional[Any] = None,
) -> List[Transaction]:
    df = fetch_transactions_df(kind, user_id, start_date, end_date)
    return [
        Transaction(
            id=int(row['id']),
            user_id=int(row['user_id']),
            description=row['description'],
            amount=float(row['amount']),
            date=coerce_date(row['transaction_date']),
            category=row['category'],
            kind=kind,
        )
        for _, row in df.iterrows()
    ]


def add_transaction(
    kind: str,
    user_id: int,
    description: str,
    amount: Any,
    when: Any,
    category: str,
) -> List[Transaction]:
    """Validate and store a transaction.

    Returns the user's refreshed list of transactions of that kind.
    """
    table = _table_for(kind)
    txn = Transaction.create(user_id, description, amount, when, category, kind=kind)
    with connect() as conn:
        _require_user(conn, user_id)
        cursor = conn.execute(
            f"INSERT INTO {table} (user_id, description, amount, transaction_date, category, created_at)"
            " VALUES (?, ?, ?, ?, ?, ?)",
            (user_id, txn.description, txn.amount, txn.date.isoformat(), txn.category, _now()),
        )
        conn.commit()
    logger.info("Added %s %s for user %s", kind, cursor.lastrowid, user_id)
    return fetch_transactions(kind, user_id)


def update_transaction(
    kind: str,
    transaction_id: int,
    description: Optional[str] = None,
    amount: Optional[Any] = None,
    when: Optional[Any] = None,
    category: Optional[str] = None,
) -> Transaction:
    """Update the editable fields of a transaction and return it."""
    table = _table_for(kind)
    updates: List[str] = []
    params: List[Any] = []

    if description is not None:
        if not description.strip():
            raise ValueError("Description is required")
        updates.append("description = ?")
        params.append(description.strip())

    if amount is not None:
        updates.append("amount = ?")
        params.append(positive_amount(amount, "Amount"))

    if when is not None:
        updates.append("transaction_date = ?")
        params.append(coerce_date(when).isoformat())

    if category is not None:
        if category not in categories_for(kind):
            raise ValueError(f"Invalid {kind} category '{category}'")
        updates.append("category = ?")
        params.append(category)

    if not updates:
        raise ValueError("Nothing to update")

    params.append(transaction_id)
    with connect() as conn:
        cursor = conn.execute(f"UPDATE {table} SET {', '.join(updates)} WHERE id = ?", params)
        conn.commit()
        if cursor.rowcount == 0:
            raise LookupError(f"{kind.capitalize()} not found")
        row = conn.execute(
            f"SELECT id, user_id, description, amount, transaction_date, category FROM {table} WHERE id = ?",
            (transaction_id,),
        ).fetchone()
    logger.info("Updated %s %s", kind, transaction_id)
    return Transaction(
        id=row[0],
        user_id=row[1],
        description=row[2],
        amount=float(row[3]),
        date=coerce_date(row[4]),
        category=row[5],
        kind=kind,
    )


def delete_transaction(kind: str, user_id: int, transaction_id: int) -> List[Transaction]:
    table = _table_for(kind)
    with connect() as conn:
        cursor = conn.execute(
            f"DELETE FROM {table} WHERE id = ? AND user_id = ?",
            (transaction_id, user_id),
        )
        conn.commit()
        if cursor.rowcount == 0:
            raise LookupError(f"{kind.capitalize()} not found")
    logger.info("Deleted %s %s for user %s", kind, transaction_id, user_id)
    return fetch_transactions(kind, user_id)


# ---------------------------------------------------------------------------
# Budgets
# ---------------------------------------------------------------------------


def _budget_from_row(row: tuple) -> Budget:
    return Budget(
        id=row[0],
        user_id=row[1],
        period=row[2],
        amount=float(row[3]),
        start_date=date.fromisoformat(row[4]),
        end_date=date.fromisoformat(row[5]),
    )


def fetch_budgets(user_id: int) -> List[Budget]:
    with connect() as conn:
        rows = conn.execute(
            "SELECT id, user_id, period, amount, start_date, end_date FROM budgets"
            " WHERE user_id = ? ORDER BY start_date ASC, id ASC",
            (user_id,),
        ).fetchall()
    return [_budget_from_row(row) for row in rows]


def add_budget(
    user_id: int,
    period: str,
    amount: Any,
    start_date: Any,
    period_count: int,
) -> List[Budget]:
    """Create a budget plan and return the user's budgets.

    Raises:
        LookupError: If the user does not exist
        ValueError: If the input is invalid or the plan overlaps an existing
            budget with the same period
    """
    budget = Budget.create(user_id, period, amount, start_date, period_count)
    with connect() as conn:
        _require_user(conn, user_id)
        overlapping = conn.execute(
            "SELECT COUNT(*) FROM budgets WHERE user_id = ? AND period = ?"
            " AND start_date <= ? AND end_date >= ?",
            (user_id, period, budget.end_date.isoformat(), budget.start_date.isoformat()),
        ).fetchone()[0]
        if overlapping:
            raise ValueError(
                f"You already have a {period.lower()} budget overlapping within the selected period."
            )
        cursor = conn.execute(
            "INSERT INTO budgets (user_id, period, amount, start_date, end_date, created_at)"
            " VALUES (?, ?, ?, ?, ?, ?)",
            (
                user_id,
                budget.period,
                budget.amount,
                budget.start_date.isoformat(),
                budget.end_date.isoformat(),
                _now(),
            ),
        )
        conn.commit()
    logger.info("Added %s budget %s for user %s", period, cursor.lastrowid, user_id)
    return fetch_budgets(user_id)


def delete_budget(user_id: int, budget_id: int) -> List[Budget]:
    with connect() as conn:
        cursor = conn.execute(
            "DELETE FROM budgets WHERE id = ? AND user_id = ?",
            (budget_id, user_id),
        )
        conn.commit()
        if cursor.rowcount == 0:
            raise LookupError("Budget not found")
    logger.info("Deleted budget %s for user %s", budget_id, user_id)
    return fetch_budgets(user_id)


# ---------------------------------------------------------------------------
# Saving goals
# ---------------------------------------------------------------------------


def _goal_from_row(row: tuple) -> SavingGoal:
    return SavingGoal(
        id=row[0],
        user_id=row[1],
        goal_name=row[2],
        target_amount=float(row[3]),
        current_amount=float(row[4]),
        start_date=date.fromisoformat(row[5]),
        end_date=date.fromisoformat(row[6]),
    )


_GOAL_COLUMNS = "id, user_id, goal_name, target_amount, current_amount, start_date, end_date"


def fetch_saving_goals(user_id: int) -> List[SavingGoal]:
    with connect() as conn:
        rows = conn.execute(
            f"SELECT {_GOAL_COLUMNS} FROM saving_goals WHERE user_id = ? ORDER BY start_date ASC, id ASC",
            (user_id,),
        ).fetchall()
    return [_goal_from_row(row) for row in rows]


def add_saving_goal(
    user_id: int,
    goal_name: str,
    target_amount: Any,
    start_date: Any,
    end_date: Any,
) -> List[SavingGoal]:
    goal = SavingGoal.create(user_id, goal_name, target_amount, start_date, end_date)
    with connect() as conn:
        _require_user(conn, user_id)
        cursor = conn.execute(
            "INSERT INTO saving_goals (user_id, goal_name, target_amount, current_amount, start_date, end_date, created_at)"
            " VALUES (?, ?, ?, ?, ?, ?, ?)",
            (
                goal.user_id,
                goal.goal_name,
                goal.target_amount,
                goal.current_amount,
                goal.start_date.isoformat(),
                goal.end_date.isoformat(),
                _now(),
            ),
        )
        conn.commit()
    logger.info("Added saving goal %s for user %s", cursor.lastrowid, user_id)
    return fetch_saving_goals(user_id)


def deposit_to_saving_goal(user_id: int, goal_id: int, amount: Any) -> SavingGoal:
    """Add money to a goal and return the updated goal."""
    with connect() as conn:
        row = conn.execute(
            f"SELECT {_GOAL_COLUMNS} FROM saving_goals WHERE id = ? AND user_id = ?",
            (goal_id, user_id),
        ).fetchone()
        if row is None:
            raise LookupError("Saving Goal not found")
        updated = _goal_from_row(row).deposit(amount)
        conn.execute(
            "UPDATE saving_goals SET current_amount = ? WHERE id = ?",
            (updated.current_amount, goal_id),
        )
        conn.commit()
    logger.info("Deposited %.2f to saving goal %s", updated.current_amount - float(row[4]), goal_id)
    return updated


def delete_saving_goal(user_id: int, goal_id: int) -> List[SavingGoal]:
    with connect() as conn:
        cursor = conn.execute(
            "DELETE FROM saving_goals WHERE id = ? AND user_id = ?",
            (goal_id, user_id),
        )
        conn.commit()
        if cursor.rowcount == 0:
            raise LookupError("Saving Goal not found")
    logger.info("Deleted saving goal %s for user %s", goal_id, user_id)
    return fetch_saving_goals(user_id)


def clear_database() -> bool:
    """Remove every row from every table. Returns True if successful."""
    with connect() as conn:
        for table in ('saving_goals', 'budgets', 'expenses', 'incomes', 'users'):
            conn.execute(f"DELETE FROM {table}")
        conn.commit()
    return True
