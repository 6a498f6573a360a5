"""Insert a demo painter account with a few sample timesheets."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.timesheet_tracker.timesheet_tracker.database.bootstrap import DEMO_PAINTER, seed_demo_data
from src.timesheet_tracker.timesheet_tracker.database.connection import DBConfig, DatabaseConnection


def main() -> int:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))

    if seed_demo_data(db):
        username, password, _ = DEMO_PAINTER
        print(f"Seeded {db.config.describe()}; log in as {username} / {password}")
    else:
        print(f"Demo data already present in {db.config.describe()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
