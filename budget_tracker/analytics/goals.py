"""Saving goal status and progress."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional

from ..models import SavingGoal

GOAL_ACTIVE = 'active'
GOAL_UPCOMING = 'upcoming'
GOAL_INCOMPLETE = 'incomplete'
GOAL_COMPLETED = 'completed'
GOAL_STATUSES = (GOAL_ACTIVE, GOAL_UPCOMING, GOAL_INCOMPLETE, GOAL_COMPLETED)


@dataclass
class GoalProgress:
    goal_name: str
    current_amount: float
    target_amount: float
    remaining: float
    percent: float
    gauge_value: float
    days_left: int
    status: str


def classify_goal(goal: SavingGoal, today: Optional[date] = None) -> str:
    """Return the display status of a goal.

    Completion wins over dates; otherwise the goal is upcoming before its
    start, active inside its window and incomplete once its end has passed.
    """
    current = today or date.today()
    if goal.is_completed:
        return GOAL_COMPLETED
    if goal.start_date > current:
        return GOAL_UPCOMING
    if goal.end_date < current:
        return GOAL_INCOMPLETE
    return GOAL_ACTIVE


def goals_by_status(goals: Iterable[SavingGoal], today: Optional[date] = None) -> Dict[str, List[SavingGoal]]:
    grouped: Dict[str, List[SavingGoal]] = {status: [] for status in GOAL_STATUSES}
    for goal in goals:
        grouped[classify_goal(goal, today)].append(goal)
    return grouped


def goal_progress(goal: SavingGoal, today: Optional[date] = None) -> GoalProgress:
    current = today or date.today()
    target = goal.target_amount
    percent = (goal.current_amount / target * 100) if target > 0 else 0.0
    return GoalProgress(
        goal_name=goal.goal_name,
        current_amount=goal.current_amount,
        target_amount=target,
        remaining=max(target - goal.current_amount, 0.0),
        percent=percent,
        gauge_value=min(goal.current_amount, target),
        days_left=max((goal.end_date - current).days, 0),
        status=classify_goal(goal, current),
    )
