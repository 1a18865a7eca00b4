"""Dependency error models - failures reported by the scheduling engine.

Errors are returned as data inside ``Err`` results rather than raised, so
callers can build precise explanations (cycle path, conflicting pairs,
missing ids) without parsing message strings.
"""

from enum import Enum

from pydantic import BaseModel, Field


class DependencyErrorCode(str, Enum):
    """Categories of scheduling failures."""

    MISSING_DEPENDENCY = "missing_dependency"
    CIRCULAR_DEPENDENCY = "circular_dependency"
    ADJUSTMENT_FAILED = "adjustment_failed"


class SegmentConflict(BaseModel):
    """Two mutually exclusive segments whose time ranges overlap."""

    first_id: str
    second_id: str

    @property
    def description(self) -> str:
        return f"{self.first_id} overlaps with {self.second_id}"


class DependencyError(BaseModel):
    """A failure detected while ordering or cascading segments.

    Exactly one payload field is populated, depending on ``code``:
    ``segment_ids`` for MISSING_DEPENDENCY, ``path`` for CIRCULAR_DEPENDENCY
    and ``conflicts`` for ADJUSTMENT_FAILED. An ADJUSTMENT_FAILED caused by a
    shift beyond the representable date range carries ``segment_ids`` instead.
    """

    code: DependencyErrorCode
    message: str  # Human-readable summary (1 sentence)
    segment_ids: list[str] = Field(default_factory=list)
    path: list[str] = Field(default_factory=list)
    conflicts: list[SegmentConflict] = Field(default_factory=list)


def missing_segment(segment_id: str) -> DependencyError:
    """Build the error for a segment id absent from the snapshot."""
    return DependencyError(
        code=DependencyErrorCode.MISSING_DEPENDENCY,
        message=f"Segment {segment_id} not found",
        segment_ids=[segment_id],
    )


def circular_dependency(path: list[str]) -> DependencyError:
    """Build the error for an explicit dependency cycle."""
    return DependencyError(
        code=DependencyErrorCode.CIRCULAR_DEPENDENCY,
        message=f"Circular dependency detected: {' -> '.join(path)}",
        path=path,
    )


def segment_conflicts(conflicts: list[SegmentConflict]) -> DependencyError:
    """Build the error for overlapping exclusive segments."""
    described = ", ".join(c.description for c in conflicts)
    return DependencyError(
        code=DependencyErrorCode.ADJUSTMENT_FAILED,
        message=f"Segment conflicts detected: {described}",
        conflicts=conflicts,
    )


def shift_out_of_range(segment_id: str, delta_ms: int) -> DependencyError:
    """Build the error for a shift that moves a segment past the supported calendar."""
    return DependencyError(
        code=DependencyErrorCode.ADJUSTMENT_FAILED,
        message=f"Shifting {segment_id} by {delta_ms} ms leaves the supported date range",
        segment_ids=[segment_id],
    )
