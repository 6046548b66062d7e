"""Static milestone configuration — config only.

Each MilestoneDefinition is a fixed progress threshold with the message
shown once a goal's progress percentage reaches it.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MilestoneDefinition:
    percentage: int
    celebration: str


MILESTONES: tuple[MilestoneDefinition, ...] = (
    MilestoneDefinition(percentage=25, celebration="Great start!"),
    MilestoneDefinition(percentage=50, celebration="Halfway there!"),
    MilestoneDefinition(percentage=75, celebration="Almost there!"),
    MilestoneDefinition(percentage=90, celebration="So close!"),
    MilestoneDefinition(percentage=100, celebration="Goal achieved!"),
)


def list_milestones() -> list[MilestoneDefinition]:
    return list(MILESTONES)


def get_milestone(percentage: int) -> MilestoneDefinition | None:
    return next((m for m in MILESTONES if m.percentage == percentage), None)
