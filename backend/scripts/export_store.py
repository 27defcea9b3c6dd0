"""
Export the reference store to a JSON file, or import one into it.

The file layout is {"drugs": [...], "alerts": [...]}. On import, each
non-empty collection replaces the stored one; an empty or missing
collection leaves the store's copy untouched.

Usage:
    python -m scripts.export_store backup.json
    python -m scripts.export_store --import backup.json
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pharmref.config import get_settings
from pharmref.database import async_session, init_db
from pharmref.exceptions import DatasetLoadError, PharmRefError
from pharmref.services.dataset import parse_bundle
from pharmref.services.store import ReferenceStore

logging.basicConfig(
    level=get_settings().LOG_LEVEL, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def export_store(path: Path) -> int:
    await init_db()
    async with async_session() as db:
        bundle = await ReferenceStore(db).export_data()

    with open(path, "w", encoding="utf-8") as f:
        json.dump(bundle.model_dump(mode="json"), f, ensure_ascii=False, indent=2)

    logger.info(f"Exported {len(bundle.drugs)} drugs and {len(bundle.alerts)} alert rules to {path}")
    return 0


async def import_store(path: Path) -> int:
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
        bundle = parse_bundle(payload)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read {path}: {e}")
        return 1
    except DatasetLoadError as e:
        logger.error(f"Rejected {path}: {e.detail}")
        return 1

    await init_db()
    async with async_session() as db:
        try:
            await ReferenceStore(db).import_data(bundle)
        except PharmRefError as e:
            logger.error(f"Import failed [{e.error_code}]: {e.detail}")
            return 1
    return 0


def main():
    """Entry point with argument parsing."""
    parser = argparse.ArgumentParser(description="Export or import the reference store")
    parser.add_argument("path", type=Path, help="JSON file to write (or read with --import)")
    parser.add_argument(
        "--import",
        dest="do_import",
        action="store_true",
        help="Import the file instead of exporting",
    )
    args = parser.parse_args()

    if args.do_import:
        sys.exit(asyncio.run(import_store(args.path)))
    sys.exit(asyncio.run(export_store(args.path)))


if __name__ == "__main__":
    main()
