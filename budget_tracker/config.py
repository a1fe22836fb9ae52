"""Configuration management for the budget tracker.

This module centralizes all configuration values including paths,
period constants, logging setup and environment variable overrides.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

# Base project root - assumes this file is in budget_tracker/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("BUDGET_TRACKER_DATA_DIR", _PROJECT_ROOT / "data"))
REPORTS_DIR = DATA_DIR / "reports"

# Database
DB_PATH = Path(
    os.getenv("BUDGET_TRACKER_DB_PATH", DATA_DIR / "budget_tracker.db")
).resolve()

LOG_LEVEL = os.getenv("BUDGET_TRACKER_LOG_LEVEL", "INFO")
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Budget periods. A month is a fixed 30 days, not a calendar month.
DAYS_IN_WEEK = 7
DAYS_IN_MONTH = 30
PERIOD_DAYS = {
    'Weekly': DAYS_IN_WEEK,
    'Monthly': DAYS_IN_MONTH,
}
MAX_PERIOD_COUNT = 6


def ensure_data_directories() -> None:
    """Create all required data directories if they don't exist."""
    for directory in [DATA_DIR, REPORTS_DIR]:
        directory.mkdir(parents=True, exist_ok=True)


def get_db_path() -> str:
    """Get the database path as a string."""
    return str(DB_PATH)


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for scripts and the dashboard."""
    logging.basicConfig(
        format=LOG_FORMAT,
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
    )
