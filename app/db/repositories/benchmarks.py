"""
Benchmark repository.
"""

import datetime
from typing import Any, Optional

from sqlmodel import Session, select

from app.models.benchmarks import Benchmarks


class BenchmarkRepository:
    """Repository for Benchmarks database operations."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_user(self, user_id: int) -> Optional[Benchmarks]:
        statement = select(Benchmarks).where(Benchmarks.user_id == user_id)
        return self.session.exec(statement).first()

    def upsert(self, user_id: int, values: dict[str, Any]) -> Benchmarks:
        """Replace the user's benchmarks with *values* (missing keys clear)."""
        entry = self.get_by_user(user_id)
        if entry is None:
            entry = Benchmarks(user_id=user_id)
        for name in Benchmarks.model_fields:
            if name in ("id", "user_id", "updated_at"):
                continue
            setattr(entry, name, values.get(name))
        entry.updated_at = datetime.datetime.utcnow()
        self.session.add(entry)
        self.session.flush()
        self.session.refresh(entry)
        return entry
