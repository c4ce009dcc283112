#!/usr/bin/env python3
"""
Import a JSON backup file into the timesheet database.

The file is the one produced by GET /api/backup: an object mapping
"month:YYYY-MM" keys to month documents. Existing months with the same key
are overwritten; other months are left alone.

Usage:
    python import_backup.py ChamCong_backup_2026-01-31.json
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from app.core.storage import BackupImportError, SqlKeyValueStore, import_months_json  # noqa: E402
from app.database.database import SessionLocal, create_tables  # noqa: E402


def import_backup_file(backup_path: Path) -> int:
    """Import one backup file. Returns the number of months written."""
    payload = backup_path.read_text(encoding="utf-8")

    create_tables()
    session = SessionLocal()
    try:
        return import_months_json(SqlKeyValueStore(session), payload)
    finally:
        session.close()


def main(argv: list[str]) -> int:
    if len(argv) != 2:
        print(__doc__)
        return 2

    backup_path = Path(argv[1])
    if not backup_path.exists():
        print(f"[ERROR] Backup file not found: {backup_path}")
        return 1

    print(f"Importing {backup_path} ...")
    try:
        count = import_backup_file(backup_path)
    except BackupImportError as e:
        print(f"[ERROR] {e}")
        return 1

    print(f"[OK] Imported {count} month(s).")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
