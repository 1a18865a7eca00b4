"""Move preview models - what a rescheduling would change."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from itinerator.models.segment import Segment


class SegmentShift(BaseModel):
    """A single segment whose times change as part of a move."""

    segment_id: str
    label: str
    old_start: datetime
    old_end: datetime
    new_start: datetime
    new_end: datetime
    shift_minutes: int = Field(..., ge=0, description="Absolute shift, rounded to minutes")
    direction: Literal["later", "earlier"]


class MovePreview(BaseModel):
    """Outcome of moving one segment and cascading to its dependents.

    ``segments`` is the full adjusted itinerary in original order, ready to
    be persisted by the caller; ``shifts`` lists only the segments that moved.
    """

    moved_segment_id: str
    delta_ms: int
    shifts: list[SegmentShift]
    segments: list[Segment]
