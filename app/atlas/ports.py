"""
Store protocols the core depends on.

The core never talks to a database.  Repositories in
:mod:`app.db.repositories` implement these protocols on top of SQLModel;
tests use in-memory fakes.
"""

import datetime
from typing import Any, Iterable, Optional, Protocol

from app.schemas.proposal import AppliedPatchRecord, Proposal


class WorkoutStore(Protocol):
    def get_fields(
        self, workout_id: int, fields: Iterable[str],
    ) -> Optional[dict[str, Any]]:
        """Current values of *fields*, or ``None`` if the workout is missing."""
        ...

    def update_fields(self, workout_id: int, values: dict[str, Any]) -> None:
        ...


class AppliedPatchStore(Protocol):
    def create(
        self, workout_id: int, before: dict[str, Any], after: dict[str, Any],
    ) -> int:
        ...

    def get(self, patch_id: int) -> Optional[AppliedPatchRecord]:
        ...

    def mark_reverted(self, patch_id: int, at: datetime.datetime) -> None:
        ...


class ProposalStore(Protocol):
    def get(self, proposal_id: int) -> Optional[Proposal]:
        ...

    def get_pending_for_workout(self, workout_id: int) -> Optional[Proposal]:
        ...

    def create_pending(self, proposal: Proposal) -> Proposal:
        """Insert a PENDING proposal.

        Must be atomic with respect to other PENDING proposals for the
        same workout and raise :class:`~app.atlas.errors.ConflictError`
        when one already exists.
        """
        ...

    def update(self, proposal: Proposal) -> Proposal:
        ...
