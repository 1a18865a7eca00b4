"""Segment scheduling endpoints - stateless views over the dependency engine.

Every request carries the current segment snapshot; nothing is loaded or
stored here. Persisting an accepted move is the caller's job.
"""

import logging
from datetime import timedelta
from typing import Annotated, NoReturn

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import AwareDatetime, BaseModel, Field

from itinerator.config import Settings, get_settings
from itinerator.core.result import Err
from itinerator.models.errors import (
    DependencyError,
    DependencyErrorCode,
    SegmentConflict,
    missing_segment,
)
from itinerator.models.move import MovePreview
from itinerator.models.segment import Segment
from itinerator.scheduling.chronology import infer_chronological_dependencies
from itinerator.scheduling.conflicts import find_conflicts
from itinerator.scheduling.graph import build_graph, find_dependents, get_topological_order
from itinerator.scheduling.move import plan_move, resolve_time_delta

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/segments", tags=["segments"])

_ERROR_STATUS = {
    DependencyErrorCode.MISSING_DEPENDENCY: status.HTTP_404_NOT_FOUND,
    DependencyErrorCode.CIRCULAR_DEPENDENCY: status.HTTP_422_UNPROCESSABLE_ENTITY,
    DependencyErrorCode.ADJUSTMENT_FAILED: status.HTTP_409_CONFLICT,
}

# Ten years either way
MAX_SHIFT_MINUTES = 10 * 366 * 24 * 60


class SegmentsRequest(BaseModel):
    """Request body carrying a segment snapshot."""

    segments: list[Segment]


class DependentsRequest(SegmentsRequest):
    """Request body for POST /segments/dependents."""

    segment_id: str = Field(..., min_length=1)


class MoveRequest(SegmentsRequest):
    """Request body for POST /segments/move.

    Exactly one of ``by_minutes`` or ``to`` must be set.
    """

    segment_id: str = Field(..., min_length=1)
    by_minutes: int | None = Field(
        None,
        ge=-MAX_SHIFT_MINUTES,
        le=MAX_SHIFT_MINUTES,
        description="Shift in minutes (negative = earlier)",
    )
    to: AwareDatetime | None = Field(None, description="New start datetime for the moved segment")


class GraphResponse(BaseModel):
    """Response for POST /segments/graph."""

    nodes: list[str]
    edges: dict[str, list[str]]


class OrderResponse(BaseModel):
    """Response for POST /segments/order."""

    order: list[str]


class DependentsResponse(BaseModel):
    """Response for POST /segments/dependents."""

    segment_id: str
    dependents: list[str]


class ChronologyResponse(BaseModel):
    """Response for POST /segments/chronology."""

    window_minutes: int
    dependencies: dict[str, list[str]]


class ConflictsResponse(BaseModel):
    """Response for POST /segments/conflicts."""

    conflicts: list[SegmentConflict]


def _raise_for_error(error: DependencyError) -> NoReturn:
    """Translate an engine error into an HTTP error response."""
    raise HTTPException(
        status_code=_ERROR_STATUS[error.code],
        detail=error.model_dump(mode="json"),
    )


@router.post("/graph", response_model=GraphResponse)
async def graph(request: SegmentsRequest) -> GraphResponse:
    """Return the explicit dependency graph of a snapshot."""
    dependency_graph = build_graph(request.segments)
    return GraphResponse(nodes=list(dependency_graph.nodes), edges=dependency_graph.edges)


@router.post("/order", response_model=OrderResponse)
async def order(request: SegmentsRequest) -> OrderResponse:
    """Return segment ids in dependency order.

    Returns:
        200 with the ordering, 422 if explicit dependencies form a cycle
    """
    result = get_topological_order(request.segments)
    if isinstance(result, Err):
        _raise_for_error(result.error)
    return OrderResponse(order=[s.id for s in result.value])


@router.post("/dependents", response_model=DependentsResponse)
async def dependents(request: DependentsRequest) -> DependentsResponse:
    """Preview which segments depend on a segment, directly or transitively."""
    return DependentsResponse(
        segment_id=request.segment_id,
        dependents=find_dependents(request.segments, request.segment_id),
    )


@router.post("/chronology", response_model=ChronologyResponse)
async def chronology(
    request: SegmentsRequest,
    settings: Annotated[Settings, Depends(get_settings)],
) -> ChronologyResponse:
    """Return dependencies inferred from time adjacency."""
    window = timedelta(minutes=settings.chronological_window_min)
    return ChronologyResponse(
        window_minutes=settings.chronological_window_min,
        dependencies=infer_chronological_dependencies(request.segments, window),
    )


@router.post("/conflicts", response_model=ConflictsResponse)
async def conflicts(
    request: SegmentsRequest,
    settings: Annotated[Settings, Depends(get_settings)],
) -> ConflictsResponse:
    """List overlapping exclusive segments in a snapshot (always 200)."""
    return ConflictsResponse(
        conflicts=find_conflicts(request.segments, set(settings.exclusive_segment_kinds))
    )


@router.post("/move", response_model=MovePreview)
async def move(
    request: MoveRequest,
    settings: Annotated[Settings, Depends(get_settings)],
) -> MovePreview:
    """Preview moving a segment and cascading the shift to its dependents.

    Returns:
        200 with the shifted segments and full adjusted snapshot
        404 if the segment is not in the snapshot
        409 if the cascade would overlap exclusive segments or leave the date range
        422 if the shift request is malformed
    """
    target = next((s for s in request.segments if s.id == request.segment_id), None)
    if target is None:
        logger.info(f"[POST /segments/move] segment_id={request.segment_id} not in snapshot")
        _raise_for_error(missing_segment(request.segment_id))

    try:
        delta_ms = resolve_time_delta(target, by_minutes=request.by_minutes, to=request.to)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    result = plan_move(
        request.segments,
        request.segment_id,
        delta_ms,
        window=timedelta(minutes=settings.chronological_window_min),
        exclusive_kinds=set(settings.exclusive_segment_kinds),
    )
    if isinstance(result, Err):
        _raise_for_error(result.error)

    logger.info(
        f"[POST /segments/move] segment_id={request.segment_id} "
        f"delta_ms={delta_ms} shifted={len(result.value.shifts)}"
    )
    return result.value

