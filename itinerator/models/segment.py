"""Segment models - the atomic schedulable units of an itinerary.

A segment is a sum type: every variant shares the scheduling fields on
``SegmentBase`` and carries its own kind-specific payload. Pydantic picks the
variant from the ``kind`` discriminator when parsing raw payloads.

Segments are frozen. The scheduling engine never mutates them; it returns
copies built with ``model_copy(update=...)``.
"""

from typing import Annotated, Literal

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, TypeAdapter

from itinerator.models.common import Location, SegmentKind, SegmentStatus, TransferType


class SegmentBase(BaseModel):
    """Fields shared by every segment kind.

    ``start_datetime < end_datetime`` is guaranteed by the CRUD layer that
    owns segments and is not re-validated here. Times must carry a UTC offset
    so that every pair of segments is comparable.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    start_datetime: AwareDatetime
    end_datetime: AwareDatetime
    depends_on: list[str] = Field(
        default_factory=list, description="IDs of segments this one explicitly depends on"
    )
    status: SegmentStatus = SegmentStatus.confirmed
    traveler_ids: list[str] = Field(default_factory=list)
    notes: str | None = None
    metadata: dict[str, str] = Field(default_factory=dict)


class FlightSegment(SegmentBase):
    """Scheduled flight."""

    kind: Literal[SegmentKind.flight] = SegmentKind.flight
    airline_name: str
    airline_code: str | None = None
    flight_number: str
    origin: Location
    destination: Location


class HotelSegment(SegmentBase):
    """Hotel stay. Treated as background when scheduling."""

    kind: Literal[SegmentKind.hotel] = SegmentKind.hotel
    property_name: str
    location: Location
    room_count: int = Field(default=1, ge=1)


class MeetingSegment(SegmentBase):
    """Business or personal meeting."""

    kind: Literal[SegmentKind.meeting] = SegmentKind.meeting
    title: str
    location: Location | None = None
    attendees: list[str] = Field(default_factory=list)


class ActivitySegment(SegmentBase):
    """Sightseeing, tour or other leisure activity."""

    kind: Literal[SegmentKind.activity] = SegmentKind.activity
    name: str
    location: Location | None = None


class TransferSegment(SegmentBase):
    """Ground transfer between two places."""

    kind: Literal[SegmentKind.transfer] = SegmentKind.transfer
    transfer_type: TransferType = TransferType.taxi
    pickup_location: Location
    dropoff_location: Location


class CustomSegment(SegmentBase):
    """Free-form event that fits no other kind."""

    kind: Literal[SegmentKind.custom] = SegmentKind.custom
    title: str


Segment = Annotated[
    FlightSegment
    | HotelSegment
    | MeetingSegment
    | ActivitySegment
    | TransferSegment
    | CustomSegment,
    Field(discriminator="kind"),
]

SegmentAdapter: TypeAdapter[list[Segment]] = TypeAdapter(list[Segment])


def segment_label(segment: Segment) -> str:
    """Short human-readable label for a segment, by kind."""
    if isinstance(segment, FlightSegment):
        return segment.flight_number or "Flight"
    if isinstance(segment, HotelSegment):
        return segment.property_name or "Hotel"
    if isinstance(segment, MeetingSegment):
        return segment.title or "Meeting"
    if isinstance(segment, ActivitySegment):
        return segment.name or "Activity"
    if isinstance(segment, CustomSegment):
        return segment.title or "Custom"
    return "Transfer"
