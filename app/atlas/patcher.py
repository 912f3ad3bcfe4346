"""
Plan patcher: apply field-level patches to a workout and undo them.

Only the fields a patch touches are snapshotted, so inverting a patch
restores exactly those fields and leaves concurrent edits to other
fields of the same workout alone.
"""

import datetime
import logging
from typing import Callable, Optional

from app.atlas.errors import InvalidStateError, NotFoundError
from app.atlas.ports import AppliedPatchStore, WorkoutStore
from app.schemas.patch import PatchOperation, WorkoutFieldValues

logger = logging.getLogger(__name__)


class PlanPatcher:
    """Applies :class:`PatchOperation` objects through the store protocols."""

    def __init__(
        self,
        workouts: WorkoutStore,
        patches: AppliedPatchStore,
        clock: Optional[Callable[[], datetime.datetime]] = None,
    ):
        self.workouts = workouts
        self.patches = patches
        self.clock = clock or datetime.datetime.utcnow

    def snapshot(self, workout_id: int, patch: PatchOperation) -> dict:
        """JSON-safe current values of every field *patch* touches."""
        current = self.workouts.get_fields(workout_id, patch.touched_fields())
        if current is None:
            raise NotFoundError("Workout not found")
        return WorkoutFieldValues.to_json(current)

    def apply(self, workout_id: int, patch: PatchOperation) -> int:
        """Apply *patch* and return the id of the applied-patch record."""
        before = self.snapshot(workout_id, patch)
        values = patch.values()

        self.workouts.update_fields(workout_id, values)
        patch_id = self.patches.create(
            workout_id, before, WorkoutFieldValues.to_json(values),
        )
        logger.info(
            "Applied patch %s to workout %s (fields: %s)",
            patch_id, workout_id, ", ".join(values),
        )
        return patch_id

    def invert(self, applied_patch_id: int) -> None:
        """Restore the before-values recorded by :meth:`apply`."""
        record = self.patches.get(applied_patch_id)
        if record is None:
            raise NotFoundError("Applied patch not found")
        if record.reverted_at is not None:
            raise InvalidStateError("Patch already reverted")

        restored = WorkoutFieldValues.from_json(record.before)
        if self.workouts.get_fields(record.workout_id, restored) is None:
            raise NotFoundError("Workout not found")

        self.workouts.update_fields(record.workout_id, restored)
        self.patches.mark_reverted(applied_patch_id, self.clock())
        logger.info(
            "Reverted patch %s on workout %s", applied_patch_id, record.workout_id,
        )
