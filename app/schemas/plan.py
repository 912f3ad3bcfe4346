"""
Structured workout plan schemas.

A plan is a value object: sections of blocks, rebuilt on every
generation or adjustment and never edited in place (all models are
frozen; edits go through ``model_copy``).

    StructuredPlan
    └── Section (warmup | main | cooldown | strength | technique)
        └── Block (reps?, distance_m?, duration_sec?, rest_sec?, intensity)

``Block.intensity`` is a closed union discriminated on ``kind``.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

SectionType = Literal["warmup", "main", "cooldown", "strength", "technique"]


# ---------------------------------------------------------------------------
# Intensity variants
# ---------------------------------------------------------------------------

class ZoneIntensity(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["zone"] = "zone"
    zone: Literal["Z1", "Z2", "Z3", "Z4", "Z5"]


class RpeIntensity(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["rpe"] = "rpe"
    min: int = Field(..., ge=1, le=10)
    max: Optional[int] = Field(None, ge=1, le=10)


class PaceIntensity(BaseModel):
    """Pace range in seconds per unit; ``low_sec`` is the faster bound."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["pace"] = "pace"
    low_sec: int = Field(..., ge=0)
    high_sec: int = Field(..., ge=0)
    unit: Literal["/km", "/100m"]


class PowerIntensity(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["power"] = "power"
    min_w: int = Field(..., ge=0)
    max_w: int = Field(..., ge=0)


class HeartRateIntensity(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["hr"] = "hr"
    min_bpm: int = Field(..., ge=30, le=230)
    max_bpm: int = Field(..., ge=30, le=230)


Intensity = Annotated[
    Union[ZoneIntensity, RpeIntensity, PaceIntensity, PowerIntensity, HeartRateIntensity],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Plan structure
# ---------------------------------------------------------------------------

class Block(BaseModel):
    """One prescribed effort, optionally repeated."""

    model_config = ConfigDict(frozen=True)

    id: str
    reps: Optional[int] = Field(None, ge=1)
    distance_m: Optional[int] = Field(None, gt=0)
    duration_sec: Optional[int] = Field(None, gt=0)
    rest_sec: Optional[int] = Field(None, ge=0)
    intensity: Intensity
    notes: Optional[str] = None

    @property
    def total_meters(self) -> int:
        if not self.distance_m:
            return 0
        return (self.reps or 1) * self.distance_m


class Section(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    type: SectionType
    title: str
    blocks: tuple[Block, ...] = ()


class StructuredPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: int = 2
    objective: str = ""
    sections: tuple[Section, ...] = ()

    def iter_blocks(self):
        """Yield ``(section_index, block_index, block)`` in document order."""
        for si, section in enumerate(self.sections):
            for bi, block in enumerate(section.blocks):
                yield si, bi, block

    @property
    def total_meters(self) -> int:
        return sum(block.total_meters for _, _, block in self.iter_blocks())

    def replace_block(self, section_index: int, block_index: int, block: Block) -> "StructuredPlan":
        """Return a new plan with one block swapped out."""
        section = self.sections[section_index]
        blocks = list(section.blocks)
        blocks[block_index] = block
        sections = list(self.sections)
        sections[section_index] = section.model_copy(update={"blocks": tuple(blocks)})
        return self.model_copy(update={"sections": tuple(sections)})

    def append_block(self, section_index: int, block: Block) -> "StructuredPlan":
        section = self.sections[section_index]
        sections = list(self.sections)
        sections[section_index] = section.model_copy(
            update={"blocks": tuple(section.blocks) + (block,)},
        )
        return self.model_copy(update={"sections": tuple(sections)})


class PlanOptions(BaseModel):
    """Coach bundle: the planned session plus an easier alternative."""

    planned: StructuredPlan
    adjusted: Optional[StructuredPlan] = None
    label: str = Field(..., description="Short session label, e.g. 'tempo run'")
    reason: str
    summary: str
    safety_note: str
    targets_used: dict[str, str] = Field(default_factory=dict)
