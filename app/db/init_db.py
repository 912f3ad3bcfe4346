"""
Database initialization.

Creates all tables directly from the SQLModel metadata.  Production
databases are migrated with Alembic instead; this is for local runs.
"""

import logging

from sqlmodel import SQLModel

import app.db.base  # noqa: F401
from app.db.session import engine

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Create all SQLModel tables that do not exist yet."""
    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Database initialization complete")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
