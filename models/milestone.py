"""
Milestone definitions for the milestone status engine and funnel.

A milestone is a closed tagged variant on ``kind``:

- ``stage``: reaching a named stage (optionally pinned to one path type)
- ``employment``: currently employed
- ``salary``: income at or above the national median

``years_required`` is the elapsed calendar years a cohort needs before it
can plausibly have reached the milestone. The funnel uses it as the
eligibility window for the transition *into* this milestone.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from models.status import PathType


class _MilestoneBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    years_required: int = Field(default=0, ge=0)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Invalid name: cannot be empty")
        return value


class StageMilestone(_MilestoneBase):
    """Milestone reached when the record's stage index passes ``stage``."""

    kind: Literal["stage"] = "stage"
    stage: str
    path_type: Optional[PathType] = None


class EmploymentMilestone(_MilestoneBase):
    """Milestone tracking current employment, independent of stage."""

    kind: Literal["employment"] = "employment"


class SalaryMilestone(_MilestoneBase):
    """Milestone tracking income against the national median."""

    kind: Literal["salary"] = "salary"


MilestoneDefinition = Annotated[
    Union[StageMilestone, EmploymentMilestone, SalaryMilestone],
    Field(discriminator="kind"),
]

milestone_list_adapter = TypeAdapter(list[MilestoneDefinition])


def validate_milestone_sequence(milestones: Sequence[MilestoneDefinition]) -> Sequence[MilestoneDefinition]:
    """
    Validate an ordered milestone sequence used by the funnel.

    Rules:
    - at least one milestone
    - names are unique (transitions are addressed by name)
    - ``years_required`` never decreases along the sequence

    Raises:
        ValueError: If any rule is violated
    """
    if not milestones:
        raise ValueError("milestone sequence cannot be empty")

    seen = set()
    for milestone in milestones:
        if milestone.name in seen:
            raise ValueError(f"duplicate milestone name '{milestone.name}'")
        seen.add(milestone.name)

    for previous, current in zip(milestones, milestones[1:]):
        if current.years_required < previous.years_required:
            raise ValueError(
                f"years_required must not decrease: '{current.name}' requires "
                f"{current.years_required} but '{previous.name}' requires {previous.years_required}"
            )

    return milestones
