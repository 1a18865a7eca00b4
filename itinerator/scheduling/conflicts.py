"""Overlap and conflict checks with type-aware exclusivity."""

from collections.abc import Collection, Sequence
from itertools import combinations

from itinerator.core.result import Err, Ok, Result
from itinerator.models.common import SegmentKind
from itinerator.models.errors import DependencyError, SegmentConflict, segment_conflicts
from itinerator.models.segment import Segment

# Kinds that cannot share time with each other or with themselves
EXCLUSIVE_KINDS = frozenset({SegmentKind.flight, SegmentKind.transfer})


def would_overlap(
    a: Segment,
    b: Segment,
    exclusive_kinds: Collection[SegmentKind] = EXCLUSIVE_KINDS,
) -> bool:
    """Check whether two segments overlap and are not allowed to.

    Intervals are half-open: a segment ending exactly when the other starts
    does not overlap it. Only pairs where both kinds are exclusive conflict;
    hotels, meetings, activities and custom events may overlap anything.
    """
    time_overlap = a.start_datetime < b.end_datetime and b.start_datetime < a.end_datetime
    if not time_overlap:
        return False

    return a.kind in exclusive_kinds and b.kind in exclusive_kinds


def find_conflicts(
    segments: Sequence[Segment],
    exclusive_kinds: Collection[SegmentKind] = EXCLUSIVE_KINDS,
) -> list[SegmentConflict]:
    """List every conflicting unordered pair, in input order."""
    return [
        SegmentConflict(first_id=a.id, second_id=b.id)
        for a, b in combinations(segments, 2)
        if would_overlap(a, b, exclusive_kinds)
    ]


def validate_no_conflicts(
    segments: Sequence[Segment],
    exclusive_kinds: Collection[SegmentKind] = EXCLUSIVE_KINDS,
) -> Result[None, DependencyError]:
    """Validate that no exclusive segments overlap.

    Returns:
        Ok(None), or an ADJUSTMENT_FAILED error listing all conflicting pairs
    """
    conflicts = find_conflicts(segments, exclusive_kinds)
    if conflicts:
        return Err(segment_conflicts(conflicts))
    return Ok(None)
