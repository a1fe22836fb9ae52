#!/usr/bin/env python3
"""Print budget progress and saving goal status for a user."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

import pandas as pd

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from budget_tracker import analytics, config
from budget_tracker.state import AppState

logger = logging.getLogger(__name__)


def budget_rows(state: AppState, today: date) -> List[dict]:
    rows = []
    for budget in state.budgets:
        progress = analytics.budget_progress(budget, state.expenses, today)
        rows.append({
            'Period': budget.period,
            'Start': budget.start_date.isoformat(),
            'End': budget.end_date.isoformat(),
            'Status': progress.classification,
            'Budget': round(progress.total_budget, 2),
            'Spent': round(progress.total_expenses, 2),
            'Projected': round(progress.projection.projected_expense, 2),
            'Remark': progress.remark,
        })
    return rows


def goal_rows(state: AppState, today: date) -> List[dict]:
    rows = []
    for goal in state.saving_goals:
        progress = analytics.goal_progress(goal, today)
        rows.append({
            'Goal': goal.goal_name,
            'Saved': round(progress.current_amount, 2),
            'Target': round(progress.target_amount, 2),
            'Percent': round(progress.percent, 1),
            'Days Left': progress.days_left,
            'Status': progress.status,
        })
    return rows


def main(user_id: int, csv: bool = False, today: Optional[date] = None) -> None:
    today = today or date.today()
    state = AppState.load(user_id)

    budgets = pd.DataFrame(budget_rows(state, today))
    goals = pd.DataFrame(goal_rows(state, today))

    print(f"Budget report for user {user_id} on {today.isoformat()}")
    print(f"\nIncome this month:  ${analytics.total_for_month(state.incomes, today):,.2f}")
    print(f"Expense this month: ${analytics.total_for_month(state.expenses, today):,.2f}")

    print("\nBudgets:")
    print(budgets.to_string(index=False) if not budgets.empty else "No budgets.")
    print("\nSaving goals:")
    print(goals.to_string(index=False) if not goals.empty else "No saving goals.")

    if csv:
        config.ensure_data_directories()
        stamp = today.strftime('%Y%m%d')
        budgets_path = config.REPORTS_DIR / f"budgets_user{user_id}_{stamp}.csv"
        goals_path = config.REPORTS_DIR / f"goals_user{user_id}_{stamp}.csv"
        budgets.to_csv(budgets_path, index=False)
        goals.to_csv(goals_path, index=False)
        logger.info("Wrote %s and %s", budgets_path, goals_path)


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Show budget progress and saving goals for a user.')
    parser.add_argument('--user-id', type=int, required=True, help='ID of the user to report on')
    parser.add_argument('--csv', action='store_true', help='Also write the tables to the reports directory')
    parser.add_argument('--log-level', default=None, help='Override BUDGET_TRACKER_LOG_LEVEL')
    args = parser.parse_args()
    config.configure_logging(args.log_level)
    try:
        main(args.user_id, csv=args.csv)
    except LookupError as exc:
        logger.error("%s", exc)
        sys.exit(1)
