"""Top-level package for the Budget Tracker.

The primary modules are:

* ``analytics`` – pure budget, category, monthly and goal calculations
* ``db`` – SQLite storage for users, transactions, budgets and saving goals
* ``state`` – the per-user application state handed to every view
* ``visualization`` – functions that generate Plotly figures

To run the dashboard from the command line you can execute:

```bash
python run_dashboard.py
```
"""

from . import analytics  # noqa: F401  # re-exported for convenience
from . import models  # noqa: F401  # re-exported for convenience

__all__ = ["analytics", "models"]
