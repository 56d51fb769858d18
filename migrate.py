#!/usr/bin/env python3
"""
Database schema management script.
Creates the schema (including the one-cover-per-property index), checks connectivity
and resets development databases.
"""

import argparse
import asyncio
import logging
import sys

from sejour.config import settings
from sejour.database import Base, engine, create_tables, test_database_connection, close_db_connection

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def reset_database() -> None:
    """Drop and recreate all tables."""
    if not (settings.is_development or settings.is_testing):
        raise RuntimeError("Database reset is only allowed in development or test mode")

    logger.warning("Resetting database - all data will be lost!")

    import sejour.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        logger.info("All tables dropped")
        await conn.run_sync(Base.metadata.create_all)
        logger.info("All tables created")


async def run(command: str) -> bool:
    """Run one command against the configured database."""
    try:
        if command == "check":
            return await test_database_connection()
        if command == "create":
            await create_tables()
        elif command == "reset":
            await reset_database()
        return True
    finally:
        await close_db_connection()


def main(argv=None) -> int:
    """Main CLI interface for schema management."""
    parser = argparse.ArgumentParser(description="Database schema management")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create", help="Create missing tables and indexes")
    subparsers.add_parser("check", help="Check database connectivity")

    reset_parser = subparsers.add_parser("reset", help="Reset database (development only)")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "reset" and not args.confirm:
        print("Database reset requires --confirm flag")
        return 1

    logger.info(f"Running '{args.command}' against {settings.database_url.split('@')[-1]}")
    ok = asyncio.run(run(args.command))
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
