from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.invention_station.invention_station.container import build_store
from src.invention_station.invention_station.database.bootstrap import seed_defaults


def main() -> None:
    parser = argparse.ArgumentParser(description="Write the sample collections into the configured store.")
    parser.add_argument("--overwrite", action="store_true", help="replace collections that already exist")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    backend = getattr(settings, "STORAGE_BACKEND", "file")
    store = build_store(
        backend=backend,
        data_dir=getattr(settings, "DATA_DIR", None),
        db_config=dict(getattr(settings, "DB_CONFIG", {})),
    )

    written = seed_defaults(store, overwrite=args.overwrite)
    print(f"OK: Seeded {len(written)} collection(s) -> {backend}")
    for key in written:
        print(f"  - {key}")


if __name__ == "__main__":
    main()
