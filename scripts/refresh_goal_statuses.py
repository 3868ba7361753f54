"""Move every overdue pending goal to "past due".

Meant to run on a schedule (e.g. hourly cron); reads never reclassify goals.

Usage:
    python scripts/refresh_goal_statuses.py \\
        --mongodb-url mongodb://localhost:27017 \\
        --db-name tandem
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from motor.motor_asyncio import AsyncIOMotorClient

from tandem.concepts.tracking import TrackingConcept


async def refresh(mongodb_url: str, db_name: str) -> int:
    """Run one sweep and return how many goals were moved."""
    client = AsyncIOMotorClient(mongodb_url)
    try:
        return await TrackingConcept(client[db_name]).update_goal_statuses()
    finally:
        client.close()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--mongodb-url", required=True, help="MongoDB connection URL")
    parser.add_argument("--db-name", default="tandem", help="Database name")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    moved = asyncio.run(refresh(args.mongodb_url, args.db_name))
    print(f"Moved {moved} goals to past due")


if __name__ == "__main__":
    main()
