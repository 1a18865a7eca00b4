"""Cascade adjuster - shift a moved segment and everything that depends on it.

Dependents come from two sources merged into one edge map: explicit
``depends_on`` references and chronological adjacency. The same delta is
applied to every reached segment, then the whole adjusted itinerary is
checked for exclusive overlaps. Nothing is mutated; on failure the caller's
snapshot is simply still authoritative.
"""

import logging
from collections import deque
from collections.abc import Collection, Sequence
from datetime import timedelta

from itinerator.core.result import Err, Ok, Result
from itinerator.models.common import SegmentKind
from itinerator.models.errors import (
    DependencyError,
    DependencyErrorCode,
    missing_segment,
    shift_out_of_range,
)
from itinerator.models.segment import Segment
from itinerator.scheduling.chronology import (
    CHRONOLOGICAL_WINDOW,
    infer_chronological_dependencies,
)
from itinerator.scheduling.conflicts import EXCLUSIVE_KINDS, validate_no_conflicts
from itinerator.scheduling.graph import build_graph
from itinerator.utils.logging import StructuredCascadeLogger
from itinerator.utils.metrics import PrometheusCascadeMetrics

logger = logging.getLogger(__name__)

_cascade_logger = StructuredCascadeLogger()
_metrics = PrometheusCascadeMetrics()


def merge_dependency_edges(
    segments: Sequence[Segment],
    window: timedelta = CHRONOLOGICAL_WINDOW,
) -> dict[str, list[str]]:
    """Combine explicit and inferred edges into one predecessor -> dependents map.

    Inferred dependents are appended after explicit ones and skipped if the
    predecessor already lists them.
    """
    edges = {k: list(v) for k, v in build_graph(segments).edges.items()}

    for dependent_id, predecessor_ids in infer_chronological_dependencies(segments, window).items():
        for predecessor_id in predecessor_ids:
            dependents = edges.setdefault(predecessor_id, [])
            if dependent_id not in dependents:
                dependents.append(dependent_id)

    return edges


def compute_adjustments(
    edges: dict[str, list[str]], moved_segment_id: str, delta_ms: int
) -> dict[str, int]:
    """Propagate ``delta_ms`` breadth-first from the moved segment.

    Every reached segment receives the same delta; shifts never compound
    along a path. The visited set guards against residual cycles.
    """
    adjustments = {moved_segment_id: delta_ms}
    visited = {moved_segment_id}
    queue = deque([moved_segment_id])

    while queue:
        current = queue.popleft()
        for dependent_id in edges.get(current, []):
            if dependent_id not in visited:
                visited.add(dependent_id)
                adjustments[dependent_id] = adjustments[current]
                queue.append(dependent_id)

    return adjustments


def apply_adjustments(segments: Sequence[Segment], adjustments: dict[str, int]) -> list[Segment]:
    """Return segments with their recorded deltas applied, in original order."""
    adjusted: list[Segment] = []
    for segment in segments:
        delta_ms = adjustments.get(segment.id)
        if not delta_ms:
            adjusted.append(segment)
            continue

        shift = timedelta(milliseconds=delta_ms)
        adjusted.append(
            segment.model_copy(
                update={
                    "start_datetime": segment.start_datetime + shift,
                    "end_datetime": segment.end_datetime + shift,
                }
            )
        )
    return adjusted


def adjust_dependent_segments(
    segments: Sequence[Segment],
    moved_segment_id: str,
    delta_ms: int,
    *,
    window: timedelta = CHRONOLOGICAL_WINDOW,
    exclusive_kinds: Collection[SegmentKind] = EXCLUSIVE_KINDS,
) -> Result[list[Segment], DependencyError]:
    """Shift a segment and all of its explicit and chronological dependents.

    Args:
        segments: Full segment snapshot of the itinerary
        moved_segment_id: Segment being rescheduled
        delta_ms: Signed shift in milliseconds (positive = later)
        window: Chronological inference window
        exclusive_kinds: Kinds that may not overlap after the shift

    Returns:
        Ok with the complete adjusted list (unmoved segments included, order
        preserved), or Err with MISSING_DEPENDENCY if the moved segment is
        unknown, or ADJUSTMENT_FAILED listing every conflict the shift causes
        (or naming the moved segment if a shifted time leaves the date range)
    """
    if not any(s.id == moved_segment_id for s in segments):
        _cascade_logger.log_cascade(
            moved_segment_id, delta_ms, "not_found", error_code="missing_dependency"
        )
        _metrics.record_outcome("not_found")
        return Err(missing_segment(moved_segment_id))

    edges = merge_dependency_edges(segments, window)
    adjustments = compute_adjustments(edges, moved_segment_id, delta_ms)
    try:
        adjusted = apply_adjustments(segments, adjustments)
    except OverflowError:
        _cascade_logger.log_cascade(
            moved_segment_id,
            delta_ms,
            "out_of_range",
            affected_count=len(adjustments),
            error_code=DependencyErrorCode.ADJUSTMENT_FAILED.value,
        )
        _metrics.record_outcome("out_of_range")
        return Err(shift_out_of_range(moved_segment_id, delta_ms))

    logger.debug(f"Cascade from {moved_segment_id} reaches {sorted(adjustments)}")

    validation = validate_no_conflicts(adjusted, exclusive_kinds)
    if isinstance(validation, Err):
        _cascade_logger.log_cascade(
            moved_segment_id,
            delta_ms,
            "conflict",
            affected_count=len(adjustments),
            conflict_count=len(validation.error.conflicts),
            error_code=validation.error.code.value,
        )
        _metrics.record_outcome("conflict")
        return validation

    _cascade_logger.log_cascade(
        moved_segment_id, delta_ms, "success", affected_count=len(adjustments)
    )
    _metrics.record_outcome("success")
    _metrics.observe_affected(len(adjustments))
    return Ok(adjusted)
