#!/usr/bin/env python3
"""Launcher for the Budget Tracker dashboard.

Streamlit runs with the budget_tracker directory as the app root so that
pages are discovered from budget_tracker/pages/.
"""

import os
import subprocess
import sys
from pathlib import Path

project_root = Path(__file__).parent.resolve()
app_dir = project_root / "budget_tracker"

if __name__ == "__main__":
    os.chdir(app_dir)
    sys.path.insert(0, str(project_root))
    subprocess.run([
        sys.executable, "-m", "streamlit", "run",
        "Home.py"
    ])
