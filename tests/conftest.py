from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from budget_tracker import db as db_mod


@pytest.fixture
def temp_db(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Point the store at a fresh SQLite file for the duration of a test."""
    monkeypatch.setattr(db_mod, "DB_PATH_STR", str(tmp_path / "budget_tracker.db"))
    db_mod.init_db()
    return db_mod


@pytest.fixture
def user(temp_db):
    return temp_db.create_user("alice", "alice@example.com", "Alice", "Smith")
