"""
Proposal service.

Lists, accepts, declines and undoes plan-change proposals for the
caller's own workouts.  Accepting or undoing a proposal writes to the
workout, so neither is allowed once the workout's day has passed.
"""

import datetime
from typing import Callable, Optional

from sqlmodel import Session

from app.atlas.errors import NotFoundError
from app.atlas.ledger import ProposalLedger
from app.atlas.patcher import PlanPatcher
from app.db.repositories.proposal import AppliedPatchRepository, ProposalRepository
from app.db.repositories.workout import WorkoutRepository
from app.models.workout import Workout
from app.schemas.patch import WorkoutFieldValues
from app.schemas.proposal import (
    DecideResult,
    Proposal,
    ProposalDecision,
    ProposalResponse,
    UndoResult,
)
from app.services.common import ensure_not_past, unit_of_work


class ProposalService:
    """Service for proposal decisions."""

    def __init__(
        self,
        session: Session,
        today: Optional[Callable[[], datetime.date]] = None,
    ):
        self.session = session
        self.today = today or datetime.date.today
        self.workouts = WorkoutRepository(session)
        self.proposals = ProposalRepository(session)
        self.ledger = ProposalLedger(
            self.proposals,
            PlanPatcher(self.workouts, AppliedPatchRepository(session)),
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_for_workout(self, user_id: int, workout_id: int) -> list[ProposalResponse]:
        with unit_of_work(self.session):
            self._require_workout(user_id, workout_id)
            proposals = self.proposals.list_for_workout(workout_id)
        return [self._to_response(p) for p in proposals]

    def decide(self, user_id: int, proposal_id: int, decision: ProposalDecision) -> DecideResult:
        with unit_of_work(self.session):
            workout = self._require_owned(user_id, proposal_id)
            if decision == ProposalDecision.ACCEPT:
                ensure_not_past(workout.date, self.today())
            result = self.ledger.decide(proposal_id, decision)
        return result

    def undo(self, user_id: int, proposal_id: int) -> UndoResult:
        with unit_of_work(self.session):
            workout = self._require_owned(user_id, proposal_id)
            ensure_not_past(workout.date, self.today())
            result = self.ledger.undo(proposal_id)
        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_workout(self, user_id: int, workout_id: int) -> None:
        if self.workouts.get_for_user(user_id, workout_id) is None:
            raise NotFoundError("Workout not found")

    def _require_owned(self, user_id: int, proposal_id: int) -> Workout:
        """The proposal's workout. Other users' proposals are reported as missing."""
        proposal = self.proposals.get(proposal_id)
        workout = None if proposal is None else self.workouts.get_for_user(user_id, proposal.workout_id)
        if workout is None:
            raise NotFoundError("Proposal not found")
        return workout

    @staticmethod
    def _to_response(proposal: Proposal) -> ProposalResponse:
        return ProposalResponse(
            id=proposal.id,
            workout_id=proposal.workout_id,
            summary=proposal.summary,
            changes=WorkoutFieldValues.to_json(proposal.patch.values()),
            before=proposal.before,
            confidence=proposal.confidence,
            source_type=proposal.source_type,
            status=proposal.status,
            created_at=proposal.created_at,
            decided_at=proposal.decided_at,
            undone_at=proposal.undone_at,
        )
