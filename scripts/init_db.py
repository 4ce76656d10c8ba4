from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.candi_qr.candi_qr.database.bootstrap import apply_schema, list_tables, upsert_admin


def main() -> None:
    parser = argparse.ArgumentParser(description="Apply database/schema.sql and optionally create the admin account.")
    parser.add_argument("--admin-password", help="create (or reset) the 'admin' account with this password")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    schema_path = REPO_ROOT / "database" / "schema.sql"
    apply_schema(db_config, schema_path=schema_path)
    tables = list_tables(db_config)
    print(
        "OK: Applied schema.sql -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(tables)})"
    )

    if args.admin_password:
        upsert_admin(db_config, username="admin", password=args.admin_password, full_name="Administrator")
        print("OK: admin account ready")


if __name__ == "__main__":
    main()
