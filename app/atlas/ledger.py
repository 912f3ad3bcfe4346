"""
Proposal ledger: the state machine behind locked-plan changes.

States
------
::

    PENDING ──ACCEPT──▶ APPLIED ──undo──▶ UNDONE
       └─────DECLINE──▶ DECLINED

Acceptance and application are one operation: the patch is applied
first and the proposal only moves out of PENDING once the patch is in
place, so an accepted-but-unapplied proposal is never stored.
DECLINED and UNDONE are terminal; APPLIED can be undone exactly once.

At most one PENDING proposal exists per workout.  The ledger checks
first for a clear error message; the store enforces it atomically.
"""

import datetime
import logging
from typing import Callable, Optional

from app.atlas.errors import ConflictError, InvalidStateError, NotFoundError
from app.atlas.patcher import PlanPatcher
from app.atlas.ports import ProposalStore
from app.schemas.patch import PatchOperation
from app.schemas.proposal import (
    DecideResult,
    Proposal,
    ProposalDecision,
    ProposalSourceType,
    ProposalStatus,
    UndoResult,
)

logger = logging.getLogger(__name__)


class ProposalLedger:
    """Creates, decides and undoes plan-change proposals."""

    def __init__(
        self,
        proposals: ProposalStore,
        patcher: PlanPatcher,
        clock: Optional[Callable[[], datetime.datetime]] = None,
    ):
        self.proposals = proposals
        self.patcher = patcher
        self.clock = clock or datetime.datetime.utcnow

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def create(
        self,
        workout_id: int,
        summary: str,
        patch: PatchOperation,
        confidence: int,
        source_type: ProposalSourceType,
    ) -> Proposal:
        """Store a PENDING proposal for *workout_id*.

        Raises:
            NotFoundError: The workout does not exist.
            ConflictError: A PENDING proposal already exists for it.
        """
        if self.proposals.get_pending_for_workout(workout_id) is not None:
            raise ConflictError(
                "Plan is locked and a proposal is already pending for this workout"
            )

        proposal = Proposal(
            workout_id=workout_id,
            summary=summary,
            patch=patch,
            before=self.patcher.snapshot(workout_id, patch),
            confidence=confidence,
            source_type=source_type,
            status=ProposalStatus.PENDING,
            created_at=self.clock(),
        )
        proposal = self.proposals.create_pending(proposal)
        logger.info(
            "Proposal %s created for workout %s (%s)",
            proposal.id, workout_id, source_type.value,
        )
        return proposal

    def decide(self, proposal_id: int, decision: ProposalDecision) -> DecideResult:
        """Accept (and apply) or decline a PENDING proposal.

        Raises:
            NotFoundError: No such proposal.
            InvalidStateError: The proposal is no longer PENDING.
        """
        proposal = self._get(proposal_id)
        if proposal.status != ProposalStatus.PENDING:
            raise InvalidStateError("Proposal already decided")

        now = self.clock()

        if decision == ProposalDecision.DECLINE:
            self.proposals.update(proposal.model_copy(update={
                "status": ProposalStatus.DECLINED,
                "decided_at": now,
            }))
            logger.info("Proposal %s declined", proposal_id)
            return DecideResult(applied=False, status=ProposalStatus.DECLINED)

        patch_id = self.patcher.apply(proposal.workout_id, proposal.patch)
        self.proposals.update(proposal.model_copy(update={
            "status": ProposalStatus.APPLIED,
            "applied_patch_id": patch_id,
            "decided_at": now,
        }))
        logger.info("Proposal %s accepted and applied (patch %s)", proposal_id, patch_id)
        return DecideResult(
            applied=True,
            status=ProposalStatus.APPLIED,
            applied_patch_id=patch_id,
        )

    def undo(self, proposal_id: int) -> UndoResult:
        """Revert an APPLIED proposal.

        Raises:
            NotFoundError: No such proposal.
            InvalidStateError: The proposal is not APPLIED.
        """
        proposal = self._get(proposal_id)
        if proposal.status != ProposalStatus.APPLIED or proposal.applied_patch_id is None:
            raise InvalidStateError(
                f"Only applied proposals can be undone (status: {proposal.status.value})"
            )

        self.patcher.invert(proposal.applied_patch_id)
        self.proposals.update(proposal.model_copy(update={
            "status": ProposalStatus.UNDONE,
            "undone_at": self.clock(),
        }))
        logger.info("Proposal %s undone", proposal_id)
        return UndoResult(reverted=True, status=ProposalStatus.UNDONE)

    def pending_for_workout(self, workout_id: int) -> Optional[Proposal]:
        return self.proposals.get_pending_for_workout(workout_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get(self, proposal_id: int) -> Proposal:
        proposal = self.proposals.get(proposal_id)
        if proposal is None:
            raise NotFoundError("Proposal not found")
        return proposal
