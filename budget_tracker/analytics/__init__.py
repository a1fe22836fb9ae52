"""Analytics engine: pure calculations behind the dashboard widgets.

This package provides:
- Budget totals, windowed expense totals, period breakdowns and projections
- Category aggregation and the top category of the month
- Calendar-month cards (largest transaction, month-over-month change)
- Income/expense time series for charts
- Saving goal status and progress
"""

from .budgets import (
    BudgetBucket,
    BudgetProgress,
    BudgetProjection,
    budget_breakdown,
    budget_progress,
    budgets_by_period,
    calculate_projection,
    calculate_total_budget,
    calculate_total_expenses,
    classify_budget,
    days_in_budget_plan,
    days_since_start,
    days_until,
    get_active_budget,
    get_expired_budgets,
    get_upcoming_budgets,
)
from .categories import (
    CategoryTotal,
    aggregate_by_category,
    category_distribution,
    category_totals,
    highest_category_this_month,
)
from .monthly import (
    HighestTransaction,
    TransactionChange,
    filter_current_month,
    filter_month,
    highest_transaction_this_month,
    recent_transactions,
    total_for_month,
    transaction_change,
)
from .timeseries import (
    aggregate_transactions_by_month,
    aggregate_transactions_by_period,
)
from .goals import (
    GoalProgress,
    classify_goal,
    goal_progress,
    goals_by_status,
)

__all__ = [
    # Budgets
    'BudgetBucket',
    'BudgetProgress',
    'BudgetProjection',
    'budget_breakdown',
    'budget_progress',
    'budgets_by_period',
    'calculate_projection',
    'calculate_total_budget',
    'calculate_total_expenses',
    'classify_budget',
    'days_in_budget_plan',
    'days_since_start',
    'days_until',
    'get_active_budget',
    'get_expired_budgets',
    'get_upcoming_budgets',
    # Categories
    'CategoryTotal',
    'aggregate_by_category',
    'category_distribution',
    'category_totals',
    'highest_category_this_month',
    # Monthly
    'HighestTransaction',
    'TransactionChange',
    'filter_current_month',
    'filter_month',
    'highest_transaction_this_month',
    'recent_transactions',
    'total_for_month',
    'transaction_change',
    # Time series
    'aggregate_transactions_by_month',
    'aggregate_transactions_by_period',
    # Goals
    'GoalProgress',
    'classify_goal',
    'goal_progress',
    'goals_by_status',
]
