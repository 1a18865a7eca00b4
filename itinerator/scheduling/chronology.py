"""Chronological dependency inference from time adjacency."""

from collections.abc import Sequence
from datetime import timedelta

from itinerator.models.common import SegmentKind
from itinerator.models.segment import Segment

CHRONOLOGICAL_WINDOW = timedelta(minutes=30)

# Kinds that run in the background and never chain by adjacency
BACKGROUND_KINDS = frozenset({SegmentKind.hotel})


def infer_chronological_dependencies(
    segments: Sequence[Segment],
    window: timedelta = CHRONOLOGICAL_WINDOW,
) -> dict[str, list[str]]:
    """Infer implicit predecessors from how closely segments follow each other.

    Segment B is inferred to depend on A when B starts between 0 and
    ``window`` (inclusive) after A ends. Every A inside the window counts,
    not only the nearest. Hotels are skipped on both sides.

    These edges are advisory: the cascade adjuster merges them into the
    explicit graph, but cycle detection and topological ordering never see
    them.

    Args:
        segments: Segment snapshot
        window: Maximum gap between A's end and B's start

    Returns:
        Map of dependent id to inferred predecessor ids, nearest start first.
        Segments with no inferred predecessor are absent.
    """
    # sorted() is stable, so equal start times keep their input order
    ordered = sorted(segments, key=lambda s: s.start_datetime)
    inferred: dict[str, list[str]] = {}

    for i, current in enumerate(ordered):
        if current.kind in BACKGROUND_KINDS:
            continue

        predecessors: list[str] = []
        for previous in reversed(ordered[:i]):
            if previous.kind in BACKGROUND_KINDS:
                continue

            gap = current.start_datetime - previous.end_datetime
            if timedelta(0) <= gap <= window:
                predecessors.append(previous.id)

        if predecessors:
            inferred[current.id] = predecessors

    return inferred
