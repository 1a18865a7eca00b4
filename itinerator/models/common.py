"""Common types and enums shared across segment models."""

from enum import Enum

from pydantic import BaseModel, Field


class SegmentKind(str, Enum):
    """Type of itinerary segment."""

    flight = "flight"
    hotel = "hotel"
    meeting = "meeting"
    activity = "activity"
    transfer = "transfer"
    custom = "custom"


class SegmentStatus(str, Enum):
    """Booking status of a segment."""

    tentative = "tentative"
    confirmed = "confirmed"
    waitlisted = "waitlisted"
    cancelled = "cancelled"
    completed = "completed"


class TransferType(str, Enum):
    """Ground transfer mode."""

    taxi = "taxi"
    shuttle = "shuttle"
    private = "private"
    public = "public"
    ride_share = "ride_share"


class LocationType(str, Enum):
    """Kind of place a location refers to."""

    airport = "airport"
    city = "city"
    building = "building"
    attraction = "attraction"
    other = "other"


class Location(BaseModel):
    """Named place, optionally with an IATA or property code."""

    name: str = Field(..., min_length=1)
    code: str | None = None  # IATA code for airports, property code for hotels
    type: LocationType = LocationType.other
