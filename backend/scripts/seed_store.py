"""
Create the local reference store and load the bundled dataset.

Seeding only fills empty collections, so running it against an existing
store is safe. Use --reset to discard stored drugs and alert rules and
reload the bundled ones.

Usage:
    python -m scripts.seed_store
    python -m scripts.seed_store --reset
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pharmref.config import get_settings
from pharmref.database import async_session, init_db
from pharmref.exceptions import PharmRefError
from pharmref.services.store import ReferenceStore

logging.basicConfig(
    level=get_settings().LOG_LEVEL, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def seed_store(reset: bool = False) -> int:
    settings = get_settings()
    logger.info(f"Initializing store at {settings.DATABASE_URL}")
    await init_db()

    async with async_session() as db:
        store = ReferenceStore(db)
        try:
            if reset:
                added = await store.reset_database()
            else:
                added = await store.seed_database()
        except PharmRefError as e:
            logger.error(f"Seeding failed [{e.error_code}]: {e.detail}")
            return 1

        drug_count = await store.count_drugs()
        alert_count = await store.count_alerts()

    print()
    print("=" * 50)
    print(f"  {settings.APP_NAME} store ready")
    print("=" * 50)
    print(f"  Drugs added:        {added['drugs']}")
    print(f"  Alert rules added:  {added['alerts']}")
    print(f"  Drugs in store:     {drug_count}")
    print(f"  Alert rules stored: {alert_count}")
    print("=" * 50)
    return 0


def main():
    """Entry point with argument parsing."""
    parser = argparse.ArgumentParser(description="Seed the local reference store")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear drugs and alert rules before seeding",
    )
    args = parser.parse_args()
    sys.exit(asyncio.run(seed_store(reset=args.reset)))


if __name__ == "__main__":
    main()
