"""
Recreate the local CollabX database and load the demo data.

    python scripts/reset_db.py            # wipe, recreate, seed
    python scripts/reset_db.py --no-seed  # wipe and recreate only
"""

import argparse
import sys
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parent.parent
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

import collabx.models  # noqa: E402,F401 - register tables on Base.metadata
from collabx.db import Base, engine, get_db_path  # noqa: E402
from collabx.demo_seed import seed_demo_data  # noqa: E402


def _wipe() -> None:
    db_path = get_db_path()
    if db_path is None:
        print(f"[reset_db] Dropping all tables on {engine.url.render_as_string(hide_password=True)}")
        Base.metadata.drop_all(bind=engine)
        return

    engine.dispose()
    path = Path(db_path)
    if path.exists():
        print(f"[reset_db] Removing sqlite file {path}")
        path.unlink()
    else:
        print(f"[reset_db] No sqlite file at {path}")


def reset_database(seed: bool = True) -> None:
    _wipe()
    Base.metadata.create_all(bind=engine)
    print(f"[reset_db] Created tables: {', '.join(sorted(Base.metadata.tables))}")

    if seed:
        for table, created in seed_demo_data().items():
            print(f"[reset_db] Seeded {created} {table} row(s)")


def main() -> None:
    parser = argparse.ArgumentParser(description="Reset the local CollabX database.")
    parser.add_argument("--no-seed", action="store_true", help="Recreate the schema without demo data.")
    args = parser.parse_args()
    reset_database(seed=not args.no_seed)


if __name__ == "__main__":
    main()
