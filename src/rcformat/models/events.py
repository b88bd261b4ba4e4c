"""Longitudinal event definition models.

An EventMap pairs each event's stable unique name (as exported in the
``redcap_event_name`` column) with its human-readable label.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class EventDefinition(BaseModel):
    """A single defined event of a longitudinal project."""

    unique_event_name: str = Field(
        ..., min_length=1, description="Stable identifier (e.g., 'baseline_arm_1')"
    )
    event_name: str = Field(..., min_length=1, description="Display label (e.g., 'Baseline')")
    arm_num: int | None = Field(default=None, description="Arm the event belongs to")


class EventMap(BaseModel):
    """Ordered, read-only collection of event definitions."""

    events: list[EventDefinition] = Field(
        default_factory=list, description="Events in project order"
    )

    @property
    def unique_event_names(self) -> list[str]:
        return [e.unique_event_name for e in self.events]

    @property
    def event_names(self) -> list[str]:
        return [e.event_name for e in self.events]

    def __len__(self) -> int:
        return len(self.events)
