"""
Patch schemas: field-level edits to a workout.

A :class:`PatchOperation` is a list of tagged changes, one variant per
field group.  Only fields that were explicitly set count as touched, so a
change can clear a field by setting it to ``None``::

    PatchOperation(changes=(
        ScheduleChange(duration_min=45),
        AiMetadataChange(ai_generated=True, ai_reason="low readiness"),
    ))

touches exactly ``duration_min``, ``ai_generated`` and ``ai_reason``.
"""

import datetime
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class PrescriptionChange(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["prescription"] = "prescription"
    description_md: Optional[str] = None
    prescription_json: Optional[dict[str, Any]] = None


class AiMetadataChange(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["ai_metadata"] = "ai_metadata"
    ai_generated: Optional[bool] = None
    ai_reason: Optional[str] = None
    ai_confidence: Optional[int] = Field(None, ge=0, le=100)
    source: Optional[str] = Field(None, max_length=32)


class ScheduleChange(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["schedule"] = "schedule"
    title: Optional[str] = Field(None, max_length=255)
    type: Optional[str] = Field(None, max_length=32)
    date: Optional[datetime.date] = None
    duration_min: Optional[int] = Field(None, ge=0)
    tss: Optional[float] = Field(None, ge=0)


FieldChange = Annotated[
    Union[PrescriptionChange, AiMetadataChange, ScheduleChange],
    Field(discriminator="kind"),
]


class PatchOperation(BaseModel):
    model_config = ConfigDict(frozen=True)

    changes: tuple[FieldChange, ...] = Field(..., min_length=1)

    def values(self) -> dict[str, Any]:
        """Touched fields mapped to their new values."""
        out: dict[str, Any] = {}
        for change in self.changes:
            out.update(change.model_dump(exclude_unset=True, exclude={"kind"}))
        return out

    def touched_fields(self) -> list[str]:
        return list(self.values())

    def dump(self) -> dict[str, Any]:
        """JSON-safe form that keeps the set/unset distinction."""
        return {
            "changes": [
                {**c.model_dump(mode="json", exclude_unset=True), "kind": c.kind}
                for c in self.changes
            ],
        }


class WorkoutFieldValues(BaseModel):
    """Typed view over any subset of patchable workout fields.

    Used to store before/after values as JSON and restore them with their
    original Python types.
    """

    description_md: Optional[str] = None
    prescription_json: Optional[dict[str, Any]] = None
    ai_generated: Optional[bool] = None
    ai_reason: Optional[str] = None
    ai_confidence: Optional[int] = None
    source: Optional[str] = None
    title: Optional[str] = None
    type: Optional[str] = None
    date: Optional[datetime.date] = None
    duration_min: Optional[int] = None
    tss: Optional[float] = None

    @classmethod
    def to_json(cls, values: dict[str, Any]) -> dict[str, Any]:
        return cls.model_validate(values).model_dump(mode="json", exclude_unset=True)

    @classmethod
    def from_json(cls, values: dict[str, Any]) -> dict[str, Any]:
        return cls.model_validate(values).model_dump(exclude_unset=True)


PATCHABLE_FIELDS: tuple[str, ...] = tuple(WorkoutFieldValues.model_fields)
