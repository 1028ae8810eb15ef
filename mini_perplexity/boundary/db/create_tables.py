"""
Schema bootstrap for the conversation store.

Creates the sessions, messages, message_sources, search_analytics and
users tables on the database named by POSTGRES_URL (or the POSTGRES_*
fields). Only missing tables are created; existing ones are left as they
are, so the command can be re-run after adding a model.

Dependencies: sqlalchemy, mini_perplexity.configs
System role: Database schema initialization

Usage:
    python -m mini_perplexity.boundary.db.create_tables
    python -m mini_perplexity.boundary.db.create_tables --drop   # wipe first
"""

import argparse
import logging

from sqlalchemy import Engine

from mini_perplexity.boundary.db import models  # noqa: F401  (registers tables)
from mini_perplexity.boundary.db.base import Base
from mini_perplexity.boundary.db.connection import get_engine
from mini_perplexity.observability import configure_logging

logger = logging.getLogger(__name__)


def create_all_tables(engine: Engine | None = None) -> list[str]:
    """
    Create every registered table that does not exist yet.

    Args:
        engine: Target engine, the configured database when None

    Returns:
        list[str]: Names of the registered tables
    """
    owned = engine is None
    engine = engine or get_engine()
    try:
        Base.metadata.create_all(bind=engine)
    finally:
        if owned:
            engine.dispose()
    tables = sorted(Base.metadata.tables)
    logger.info(f"{__name__}:create_all_tables - Tables ready: {tables}")
    return tables


def drop_all_tables(engine: Engine | None = None) -> None:
    """Drop every registered table. Irreversible; development only."""
    owned = engine is None
    engine = engine or get_engine()
    try:
        Base.metadata.drop_all(bind=engine)
    finally:
        if owned:
            engine.dispose()
    logger.warning(f"{__name__}:drop_all_tables - All tables dropped")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Create the Mini Perplexity tables")
    parser.add_argument("--drop", action="store_true", help="drop existing tables first")
    args = parser.parse_args(argv)

    configure_logging()
    if args.drop:
        drop_all_tables()
    create_all_tables()


if __name__ == "__main__":
    main()
