#!/usr/bin/env python
"""
Database initialization script.

This script creates the configuration store schema (blocked keywords and
preferences) from the SQLAlchemy metadata.

Usage:
    python scripts/init_db.py              # Create missing tables
    python scripts/init_db.py --drop       # Drop all tables and re-create them (DANGER: deletes all data!)
    python scripts/init_db.py --drop --yes # Same as --drop, without interactive prompt
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from messages_core.config.settings import get_settings
from messages_core.infra.db import close_database, init_database
from messages_core.infra.logging.config import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """Initialize database."""
    parser = argparse.ArgumentParser(description="Initialize database")
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop all tables before creating them (WARNING: deletes all data!)",
    )
    parser.add_argument(
        "--yes",
        action="store_true",
        help="Confirm dangerous operations without prompting (use with --drop).",
    )
    args = parser.parse_args()

    setup_logging()
    settings = get_settings()

    logger.info("Starting database initialization")
    logger.info("Database: %s", settings.database.url)

    if args.drop:
        logger.warning("--drop flag specified: All existing tables will be dropped!")
        if not args.yes:
            if sys.stdin is not None and sys.stdin.isatty():
                response = input("Are you sure you want to drop all tables? (yes/no): ")
                if response.lower() != "yes":
                    logger.info("Aborted by user")
                    return
            else:
                raise RuntimeError(
                    "Non-interactive mode: pass --yes together with --drop to confirm."
                )

    try:
        init_database(drop_existing=args.drop)
        logger.info("Database initialization completed successfully")

    except Exception as e:
        logger.error("Database initialization failed: %s", e, exc_info=True)
        sys.exit(1)

    finally:
        close_database()


if __name__ == "__main__":
    main()
