from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.konecta_wfm.konecta_wfm.database.bootstrap import apply_schema, list_tables

EXPECTED_TABLES = {"users", "schedules", "attendance", "auxlogs", "leave_requests", "shift_swaps", "notifications"}


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = set(list_tables(db_config))
    missing = sorted(EXPECTED_TABLES - tables)
    if missing:
        raise SystemExit(f"Schema applied but tables are missing: {', '.join(missing)}")

    print(
        "OK: Konecta WFM schema ready -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"({', '.join(sorted(tables))})"
    )


if __name__ == "__main__":
    main()
