"""
Proposal and applied-patch repositories.

Implement :class:`~app.atlas.ports.ProposalStore` and
:class:`~app.atlas.ports.AppliedPatchStore` on top of SQLModel.  Rows
are converted to the core's pydantic models at this boundary, so the
ledger and patcher never see ORM objects.
"""

import datetime
import logging
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.atlas.errors import ConflictError
from app.models.proposal import AppliedPatch, PlanChangeProposal
from app.schemas.proposal import AppliedPatchRecord, Proposal, ProposalStatus

logger = logging.getLogger(__name__)


class ProposalRepository:
    """Repository for PlanChangeProposal database operations."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, proposal_id: int) -> Optional[Proposal]:
        row = self.session.get(PlanChangeProposal, proposal_id)
        return Proposal.model_validate(row) if row else None

    def get_pending_for_workout(self, workout_id: int) -> Optional[Proposal]:
        statement = select(PlanChangeProposal).where(
            PlanChangeProposal.workout_id == workout_id,
            PlanChangeProposal.status == ProposalStatus.PENDING.value,
        )
        row = self.session.exec(statement).first()
        return Proposal.model_validate(row) if row else None

    def list_for_workout(self, workout_id: int) -> list[Proposal]:
        statement = (
            select(PlanChangeProposal)
            .where(PlanChangeProposal.workout_id == workout_id)
            .order_by(PlanChangeProposal.created_at.desc(), PlanChangeProposal.id.desc())
        )
        return [Proposal.model_validate(row) for row in self.session.exec(statement).all()]

    def create_pending(self, proposal: Proposal) -> Proposal:
        """Insert a PENDING proposal.

        The partial unique index turns a concurrent second PENDING
        proposal into an :class:`IntegrityError`, reported as
        :class:`ConflictError`.  The failed insert rolls back the
        current transaction.
        """
        row = PlanChangeProposal(
            workout_id=proposal.workout_id,
            summary=proposal.summary,
            patch=proposal.patch.dump(),
            before=proposal.before,
            confidence=proposal.confidence,
            source_type=proposal.source_type.value,
            status=ProposalStatus.PENDING.value,
            created_at=proposal.created_at or datetime.datetime.utcnow(),
        )
        self.session.add(row)
        try:
            self.session.flush()
        except IntegrityError as exc:
            self.session.rollback()
            logger.warning("Pending proposal conflict on workout %s: %s", proposal.workout_id, exc.orig)
            raise ConflictError(
                "Plan is locked and a proposal is already pending for this workout"
            ) from exc
        self.session.refresh(row)
        return Proposal.model_validate(row)

    def update(self, proposal: Proposal) -> Proposal:
        row = self.session.get(PlanChangeProposal, proposal.id)
        if row is None:
            raise LookupError(f"Proposal {proposal.id} not found")
        row.status = proposal.status.value
        row.applied_patch_id = proposal.applied_patch_id
        row.decided_at = proposal.decided_at
        row.undone_at = proposal.undone_at
        self.session.add(row)
        self.session.flush()
        return Proposal.model_validate(row)


class AppliedPatchRepository:
    """Repository for AppliedPatch database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, workout_id: int, before: dict[str, Any], after: dict[str, Any]) -> int:
        row = AppliedPatch(workout_id=workout_id, before=before, after=after)
        self.session.add(row)
        self.session.flush()
        return row.id

    def get(self, patch_id: int) -> Optional[AppliedPatchRecord]:
        row = self.session.get(AppliedPatch, patch_id)
        return AppliedPatchRecord.model_validate(row) if row else None

    def mark_reverted(self, patch_id: int, at: datetime.datetime) -> None:
        row = self.session.get(AppliedPatch, patch_id)
        if row is None:
            raise LookupError(f"Applied patch {patch_id} not found")
        row.reverted_at = at
        self.session.add(row)
        self.session.flush()
