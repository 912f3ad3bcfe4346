"""
Database session management.

Provides SQLModel engine and session creation.
"""

from typing import Generator

from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from app.core.config import settings

DATABASE_URL: str = settings.DATABASE_URL


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # One shared connection so an in-memory database survives across sessions
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {
        "pool_pre_ping": True,  # Verify connections before using
        "pool_size": 5,         # Connection pool size
        "max_overflow": 10,     # Max connections beyond pool_size
    }


engine = create_engine(
    DATABASE_URL,
    echo=settings.DEBUG and settings.LOG_LEVEL == "DEBUG",
    **_engine_options(DATABASE_URL),
)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for FastAPI endpoints to get database session.

    Services commit once per request; anything left uncommitted when the
    request ends is rolled back when the session closes.
    """
    with Session(engine) as session:
        yield session
