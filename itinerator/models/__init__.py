"""Models package - re-exports for convenience."""

from itinerator.models.common import (
    Location,
    LocationType,
    SegmentKind,
    SegmentStatus,
    TransferType,
)
from itinerator.models.errors import DependencyError, DependencyErrorCode, SegmentConflict
from itinerator.models.move import MovePreview, SegmentShift
from itinerator.models.segment import (
    ActivitySegment,
    CustomSegment,
    FlightSegment,
    HotelSegment,
    MeetingSegment,
    Segment,
    SegmentAdapter,
    SegmentBase,
    TransferSegment,
    segment_label,
)

__all__ = [
    # Common
    "Location",
    "LocationType",
    "SegmentKind",
    "SegmentStatus",
    "TransferType",
    # Segments
    "Segment",
    "SegmentBase",
    "SegmentAdapter",
    "FlightSegment",
    "HotelSegment",
    "MeetingSegment",
    "ActivitySegment",
    "TransferSegment",
    "CustomSegment",
    "segment_label",
    # Errors
    "DependencyError",
    "DependencyErrorCode",
    "SegmentConflict",
    # Move previews
    "MovePreview",
    "SegmentShift",
]
