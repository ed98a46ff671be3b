from __future__ import annotations

import importlib
import sys

from dotenv import load_dotenv

from shift_compliance.config import get_settings_module
from shift_compliance.database.bootstrap import apply_schema, missing_tables
from shift_compliance.main import SCHEMA_PATH


def main() -> int:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    count = apply_schema(db_config, schema_path=SCHEMA_PATH)
    missing = missing_tables(db_config)
    target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    if missing:
        print(f"FAILED: {target} is missing tables: {', '.join(missing)}")
        return 1
    print(f"OK: applied {count} statements from schema.sql -> {target}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
