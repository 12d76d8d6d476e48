#!/usr/bin/env python3
"""Create the Journai Neo4j schema.

Usage:
    python scripts/setup_schema.py
    python scripts/setup_schema.py --clear

Options:
    --clear     Delete all journal entries before creating the schema
"""

import argparse
import asyncio
import logging
import sys

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def setup(clear: bool = False) -> bool:
    """Connect to Neo4j and create constraints."""
    from neo4j.exceptions import DriverError, Neo4jError

    from journai.errors import StorageError
    from journai.storage.neo4j_client import Neo4jClient

    db = Neo4jClient()
    try:
        await db.connect()
        if clear:
            await db.clear_all()
        await db.setup_schema()
        entries = await db.list_entries()
        print(f"Schema ready, {len(entries)} journal entries stored")
        return True
    except (StorageError, DriverError, Neo4jError) as e:
        logger.error(f"Schema setup failed: {e}")
        return False
    finally:
        await db.close()


def main() -> int:
    parser = argparse.ArgumentParser(description="Set up the Journai Neo4j schema")
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Delete all journal entries first",
    )
    args = parser.parse_args()

    ok = asyncio.run(setup(clear=args.clear))
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
