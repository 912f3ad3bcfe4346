"""
In-memory implementations of the core store protocols.

They mirror the repositories' contracts (including the single-PENDING
rule) so the ledger and patcher can be tested without a database.
"""

import datetime
import itertools
from typing import Any, Iterable, Optional

import pytest

from app.atlas.errors import ConflictError
from app.atlas.ledger import ProposalLedger
from app.atlas.patcher import PlanPatcher
from app.schemas.patch import PATCHABLE_FIELDS
from app.schemas.proposal import AppliedPatchRecord, Proposal, ProposalStatus

FIXED_NOW = datetime.datetime(2026, 3, 2, 7, 30)


@pytest.fixture
def fixed_now() -> datetime.datetime:
    return FIXED_NOW


class InMemoryWorkoutStore:
    def __init__(self):
        self.workouts: dict[int, dict[str, Any]] = {}

    def add(self, workout_id: int, **fields) -> None:
        row = {name: None for name in PATCHABLE_FIELDS}
        row.update(fields)
        self.workouts[workout_id] = row

    def get_fields(self, workout_id: int, fields: Iterable[str]) -> Optional[dict[str, Any]]:
        row = self.workouts.get(workout_id)
        if row is None:
            return None
        return {name: row.get(name) for name in fields}

    def update_fields(self, workout_id: int, values: dict[str, Any]) -> None:
        self.workouts[workout_id].update(values)


class InMemoryAppliedPatchStore:
    def __init__(self):
        self.records: dict[int, AppliedPatchRecord] = {}
        self._ids = itertools.count(1)

    def create(self, workout_id: int, before: dict, after: dict) -> int:
        patch_id = next(self._ids)
        self.records[patch_id] = AppliedPatchRecord(
            id=patch_id, workout_id=workout_id, before=before, after=after, applied_at=FIXED_NOW,
        )
        return patch_id

    def get(self, patch_id: int) -> Optional[AppliedPatchRecord]:
        return self.records.get(patch_id)

    def mark_reverted(self, patch_id: int, at: datetime.datetime) -> None:
        self.records[patch_id] = self.records[patch_id].model_copy(update={"reverted_at": at})


class InMemoryProposalStore:
    def __init__(self):
        self.proposals: dict[int, Proposal] = {}
        self._ids = itertools.count(1)

    def get(self, proposal_id: int) -> Optional[Proposal]:
        return self.proposals.get(proposal_id)

    def get_pending_for_workout(self, workout_id: int) -> Optional[Proposal]:
        for p in self.proposals.values():
            if p.workout_id == workout_id and p.status == ProposalStatus.PENDING:
                return p
        return None

    def create_pending(self, proposal: Proposal) -> Proposal:
        if self.get_pending_for_workout(proposal.workout_id) is not None:
            raise ConflictError("Plan is locked and a proposal is already pending for this workout")
        stored = proposal.model_copy(update={"id": next(self._ids)})
        self.proposals[stored.id] = stored
        return stored

    def update(self, proposal: Proposal) -> Proposal:
        self.proposals[proposal.id] = proposal
        return proposal


@pytest.fixture
def workouts() -> InMemoryWorkoutStore:
    store = InMemoryWorkoutStore()
    store.add(
        1,
        title="Tempo run",
        type="run",
        duration_min=50,
        description_md="## Main set\n- 2×10:00 — Z3",
        prescription_json=None,
        ai_generated=False,
    )
    return store


@pytest.fixture
def patches() -> InMemoryAppliedPatchStore:
    return InMemoryAppliedPatchStore()


@pytest.fixture
def proposals() -> InMemoryProposalStore:
    return InMemoryProposalStore()


@pytest.fixture
def patcher(workouts, patches) -> PlanPatcher:
    return PlanPatcher(workouts, patches, clock=lambda: FIXED_NOW)


@pytest.fixture
def ledger(proposals, patcher) -> ProposalLedger:
    return ProposalLedger(proposals, patcher, clock=lambda: FIXED_NOW)
