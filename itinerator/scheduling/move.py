"""Move planning - resolve a requested shift and preview its cascade."""

from collections.abc import Collection, Sequence
from datetime import datetime, timedelta

from itinerator.core.result import Err, Ok, Result
from itinerator.models.common import SegmentKind
from itinerator.models.errors import DependencyError
from itinerator.models.move import MovePreview, SegmentShift
from itinerator.models.segment import Segment, segment_label
from itinerator.scheduling.cascade import adjust_dependent_segments
from itinerator.scheduling.chronology import CHRONOLOGICAL_WINDOW
from itinerator.scheduling.conflicts import EXCLUSIVE_KINDS


def resolve_time_delta(
    segment: Segment,
    *,
    by_minutes: int | None = None,
    to: datetime | None = None,
) -> int:
    """Turn a move request into a signed delta in milliseconds.

    Exactly one of ``by_minutes`` (relative shift) or ``to`` (new start time)
    must be given.

    Raises:
        ValueError: if neither or both are given
    """
    if (by_minutes is None) == (to is None):
        raise ValueError("Specify exactly one of by_minutes or to")

    if to is None:
        return by_minutes * 60 * 1000

    return int((to - segment.start_datetime) / timedelta(milliseconds=1))


def plan_move(
    segments: Sequence[Segment],
    segment_id: str,
    delta_ms: int,
    *,
    window: timedelta = CHRONOLOGICAL_WINDOW,
    exclusive_kinds: Collection[SegmentKind] = EXCLUSIVE_KINDS,
) -> Result[MovePreview, DependencyError]:
    """Run the cascade for a move and describe which segments change.

    Returns:
        Ok with a MovePreview (shifted segments plus the full adjusted list),
        or the cascade's error unchanged
    """
    result = adjust_dependent_segments(
        segments, segment_id, delta_ms, window=window, exclusive_kinds=exclusive_kinds
    )
    if isinstance(result, Err):
        return result

    shifts: list[SegmentShift] = []

    # adjust_dependent_segments preserves input order
    for old, updated in zip(segments, result.value):
        if old.start_datetime == updated.start_datetime:
            continue

        shift = updated.start_datetime - old.start_datetime
        shifts.append(
            SegmentShift(
                segment_id=updated.id,
                label=segment_label(updated),
                old_start=old.start_datetime,
                old_end=old.end_datetime,
                new_start=updated.start_datetime,
                new_end=updated.end_datetime,
                shift_minutes=round(abs(shift) / timedelta(minutes=1)),
                direction="later" if shift > timedelta(0) else "earlier",
            )
        )

    return Ok(
        MovePreview(
            moved_segment_id=segment_id,
            delta_ms=delta_ms,
            shifts=shifts,
            segments=result.value,
        )
    )
