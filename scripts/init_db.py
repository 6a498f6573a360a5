"""Create the database, apply database/schema.sql and add the default admin."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.timesheet_tracker.timesheet_tracker.database.bootstrap import apply_schema, ensure_default_admin, list_tables
from src.timesheet_tracker.timesheet_tracker.database.connection import DBConfig, DatabaseConnection
from src.timesheet_tracker.timesheet_tracker.main import SCHEMA_PATH


def main() -> int:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))

    count = apply_schema(db, schema_path=SCHEMA_PATH)
    password = getattr(settings, "DEFAULT_ADMIN_PASSWORD", "")
    created = ensure_default_admin(db, password=password) if password else False

    print(f"Schema applied to {db.config.describe()}: {count} statements, tables={', '.join(list_tables(db))}")
    print("Default admin created" if created else "Default admin not created (exists or no password set)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
