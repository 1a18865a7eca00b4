"""Tests for the cascade adjuster."""

import logging
from datetime import datetime, timedelta, timezone

import pytest

from itinerator.core.result import Err, Ok
from itinerator.models.common import Location, LocationType
from itinerator.models.errors import DependencyErrorCode
from itinerator.models.segment import (
    ActivitySegment,
    FlightSegment,
    HotelSegment,
    Segment,
    TransferSegment,
)
from itinerator.scheduling.cascade import (
    adjust_dependent_segments,
    compute_adjustments,
    merge_dependency_edges,
)

HOUR_MS = 60 * 60 * 1000


def dt(day: int, hour: int, minute: int = 0) -> datetime:
    return datetime(2025, 6, day, hour, minute, tzinfo=timezone.utc)


def make_flight(
    segment_id: str, start: datetime, end: datetime, depends_on: list[str] | None = None
) -> FlightSegment:
    """Helper to create a test flight."""
    return FlightSegment(
        id=segment_id,
        start_datetime=start,
        end_datetime=end,
        depends_on=depends_on or [],
        airline_name="Test Airlines",
        flight_number=segment_id.upper(),
        origin=Location(name="JFK", code="JFK", type=LocationType.airport),
        destination=Location(name="LAX", code="LAX", type=LocationType.airport),
    )


def make_activity(
    segment_id: str, start: datetime, end: datetime, depends_on: list[str] | None = None
) -> ActivitySegment:
    """Helper to create a test activity."""
    return ActivitySegment(
        id=segment_id,
        start_datetime=start,
        end_datetime=end,
        depends_on=depends_on or [],
        name=segment_id,
    )


@pytest.fixture
def arrival_day() -> list[Segment]:
    """Flight 10:00-14:00, transfer 14:30-15:30 after it, hotel from 16:00 after that."""
    return [
        make_flight("flight", dt(1, 10), dt(1, 14)),
        TransferSegment(
            id="transfer",
            start_datetime=dt(1, 14, 30),
            end_datetime=dt(1, 15, 30),
            depends_on=["flight"],
            pickup_location=Location(name="LAX", code="LAX", type=LocationType.airport),
            dropoff_location=Location(name="Hotel", type=LocationType.building),
        ),
        HotelSegment(
            id="hotel",
            start_datetime=dt(1, 16),
            end_datetime=dt(2, 11),
            depends_on=["transfer"],
            property_name="Downtown Hotel",
            location=Location(name="Downtown", type=LocationType.city),
        ),
    ]


def test_cascade_shifts_flight_transfer_and_hotel(arrival_day: list[Segment]) -> None:
    """Moving the flight +2h moves the whole arrival chain by +2h."""
    result = adjust_dependent_segments(arrival_day, "flight", 2 * HOUR_MS)

    assert isinstance(result, Ok)
    flight, transfer, hotel = result.value
    assert (flight.start_datetime, flight.end_datetime) == (dt(1, 12), dt(1, 16))
    assert (transfer.start_datetime, transfer.end_datetime) == (dt(1, 16, 30), dt(1, 17, 30))
    assert (hotel.start_datetime, hotel.end_datetime) == (dt(1, 18), dt(2, 13))


def test_cascade_rejects_overlapping_flights() -> None:
    """Shifting F1 to 14:00-18:00 collides with F2 at 16:00-20:00."""
    segments = [
        make_flight("f1", dt(1, 10), dt(1, 14)),
        make_flight("f2", dt(1, 16), dt(1, 20)),
    ]

    result = adjust_dependent_segments(segments, "f1", 4 * HOUR_MS)

    assert isinstance(result, Err)
    assert result.error.code == DependencyErrorCode.ADJUSTMENT_FAILED
    assert [(c.first_id, c.second_id) for c in result.error.conflicts] == [("f1", "f2")]
    # Input is untouched
    assert segments[0].start_datetime == dt(1, 10)
    assert segments[0].end_datetime == dt(1, 14)


def test_cascade_applies_uniform_delta_not_compounded() -> None:
    """A -> B -> C moved +2h shifts B and C by exactly +2h each."""
    segments = [
        make_activity("a", dt(1, 8), dt(1, 9)),
        make_activity("b", dt(1, 12), dt(1, 13), depends_on=["a"]),
        make_activity("c", dt(1, 16), dt(1, 17), depends_on=["b"]),
    ]

    result = adjust_dependent_segments(segments, "a", 2 * HOUR_MS)

    assert isinstance(result, Ok)
    for before, after in zip(segments, result.value):
        assert after.start_datetime - before.start_datetime == timedelta(hours=2)
        assert after.end_datetime - before.end_datetime == timedelta(hours=2)


def test_cascade_missing_segment() -> None:
    segments = [make_activity("a", dt(1, 8), dt(1, 9))]

    result = adjust_dependent_segments(segments, "ghost", HOUR_MS)

    assert isinstance(result, Err)
    assert result.error.code == DependencyErrorCode.MISSING_DEPENDENCY
    assert result.error.segment_ids == ["ghost"]


def test_cascade_past_last_representable_date_is_an_error() -> None:
    """A shift beyond year 9999 is reported, not raised."""
    last_evening = datetime(9999, 12, 31, 20, 0, tzinfo=timezone.utc)
    segments = [make_activity("a", last_evening, last_evening + timedelta(hours=1))]

    result = adjust_dependent_segments(segments, "a", 24 * HOUR_MS)

    assert isinstance(result, Err)
    assert result.error.code == DependencyErrorCode.ADJUSTMENT_FAILED
    assert result.error.segment_ids == ["a"]
    assert result.error.conflicts == []


def test_cascade_follows_chronological_dependencies() -> None:
    """A segment starting shortly after the moved one follows it without depends_on."""
    segments = [
        make_activity("museum", dt(1, 10), dt(1, 11)),
        make_activity("lunch", dt(1, 11, 15), dt(1, 12)),
        make_activity("evening", dt(1, 19), dt(1, 21)),
    ]

    result = adjust_dependent_segments(segments, "museum", HOUR_MS)

    assert isinstance(result, Ok)
    museum, lunch, evening = result.value
    assert museum.start_datetime == dt(1, 11)
    assert lunch.start_datetime == dt(1, 12, 15)
    assert evening is segments[2]


def test_cascade_leaves_unrelated_segments_as_is_and_preserves_order() -> None:
    segments = [
        make_activity("unrelated", dt(1, 6), dt(1, 7)),
        make_activity("a", dt(1, 10), dt(1, 11)),
        make_activity("b", dt(1, 14), dt(1, 15), depends_on=["a"]),
    ]

    result = adjust_dependent_segments(segments, "a", -HOUR_MS)

    assert isinstance(result, Ok)
    assert [s.id for s in result.value] == ["unrelated", "a", "b"]
    assert result.value[0] is segments[0]
    assert result.value[1].start_datetime == dt(1, 9)
    assert result.value[2].start_datetime == dt(1, 13)


def test_cascade_does_not_mutate_input(arrival_day: list[Segment]) -> None:
    snapshot = [s.model_copy() for s in arrival_day]

    adjust_dependent_segments(arrival_day, "flight", 2 * HOUR_MS)

    assert arrival_day == snapshot


def test_cascade_preserves_other_segment_fields(arrival_day: list[Segment]) -> None:
    result = adjust_dependent_segments(arrival_day, "flight", HOUR_MS)

    assert isinstance(result, Ok)
    flight = result.value[0]
    assert isinstance(flight, FlightSegment)
    assert flight.flight_number == "FLIGHT"
    assert flight.origin.code == "JFK"


def test_cascade_zero_delta_returns_same_segments(arrival_day: list[Segment]) -> None:
    result = adjust_dependent_segments(arrival_day, "transfer", 0)

    assert isinstance(result, Ok)
    assert all(a is b for a, b in zip(result.value, arrival_day))


def test_cascade_conflict_from_dependent_not_moved_segment() -> None:
    """A dependent pushed into a fixed flight is a conflict too."""
    segments = [
        make_activity("meeting", dt(1, 8), dt(1, 9)),
        make_flight("outbound", dt(1, 12), dt(1, 14), depends_on=["meeting"]),
        make_flight("connection", dt(1, 16), dt(1, 18)),
    ]

    result = adjust_dependent_segments(segments, "meeting", 3 * HOUR_MS)

    assert isinstance(result, Err)
    assert [(c.first_id, c.second_id) for c in result.error.conflicts] == [
        ("outbound", "connection")
    ]


def test_cascade_logs_conflict_with_structured_data(caplog: pytest.LogCaptureFixture) -> None:
    segments = [
        make_flight("f1", dt(1, 10), dt(1, 14)),
        make_flight("f2", dt(1, 16), dt(1, 20)),
    ]

    with caplog.at_level(logging.INFO, logger="itinerator.utils.logging"):
        adjust_dependent_segments(segments, "f1", 4 * HOUR_MS)

    record = caplog.records[-1]
    assert record.levelno == logging.WARNING
    assert record.structured["outcome"] == "conflict"  # type: ignore[attr-defined]
    assert record.structured["conflict_count"] == 1  # type: ignore[attr-defined]


# merge / propagation helpers


def test_merge_dependency_edges_suppresses_duplicates() -> None:
    """An edge that is both explicit and inferred appears once."""
    segments = [
        make_activity("a", dt(1, 10), dt(1, 11)),
        make_activity("b", dt(1, 11, 10), dt(1, 12), depends_on=["a"]),
    ]

    assert merge_dependency_edges(segments) == {"a": ["b"]}


def test_merge_dependency_edges_appends_inferred_after_explicit() -> None:
    segments = [
        make_activity("a", dt(1, 10), dt(1, 11)),
        make_activity("later", dt(1, 15), dt(1, 16), depends_on=["a"]),
        make_activity("next", dt(1, 11, 5), dt(1, 12)),
    ]

    assert merge_dependency_edges(segments) == {"a": ["later", "next"]}


def test_compute_adjustments_terminates_on_cycle() -> None:
    edges = {"a": ["b"], "b": ["a", "c"]}

    assert compute_adjustments(edges, "a", 5) == {"a": 5, "b": 5, "c": 5}
