"""Explicit dependency graph over segments.

Edges run from predecessor to dependent: an edge ``A -> B`` means B depends
on A, so walking outward from a node visits everything affected when it
moves. The graph is a plain value rebuilt from the segment snapshot on every
call; nothing is cached between calls.
"""

import logging
from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass, field

from itinerator.core.result import Err, Ok, Result
from itinerator.models.errors import DependencyError, circular_dependency
from itinerator.models.segment import Segment

logger = logging.getLogger(__name__)


@dataclass
class DependencyGraph:
    """Nodes keyed by segment id, edges from predecessor id to dependent ids."""

    nodes: dict[str, Segment] = field(default_factory=dict)
    edges: dict[str, list[str]] = field(default_factory=dict)

    def dependents_of(self, segment_id: str) -> list[str]:
        """Direct dependents of a segment (empty for unknown ids)."""
        return self.edges.get(segment_id, [])


def build_graph(segments: Sequence[Segment]) -> DependencyGraph:
    """Build the explicit dependency graph from ``depends_on`` references.

    References to ids that are not in ``segments`` (for example a segment
    deleted elsewhere) are skipped rather than reported.

    Args:
        segments: Segment snapshot, in itinerary order

    Returns:
        DependencyGraph with one node per segment id
    """
    graph = DependencyGraph()

    for segment in segments:
        graph.nodes[segment.id] = segment

    for segment in segments:
        for dependency_id in segment.depends_on:
            if dependency_id not in graph.nodes:
                logger.debug(f"Ignoring dangling dependency {dependency_id} on {segment.id}")
                continue
            graph.edges.setdefault(dependency_id, []).append(segment.id)

    return graph


def validate_no_cycles(segments: Sequence[Segment]) -> Result[None, DependencyError]:
    """Reject explicit dependency cycles using depth-first search.

    Every node is used as a DFS root unless an earlier search already visited
    it, so disconnected components are all checked. The search keeps the
    current path; a back edge to a node still on the path closes a cycle.

    Returns:
        Ok(None) if acyclic, otherwise Err with the cycle path (the DFS path
        up to the closing node, followed by the node it loops back to)
    """
    graph = build_graph(segments)
    visited: set[str] = set()
    on_stack: set[str] = set()

    for root in graph.nodes:
        if root in visited:
            continue

        # Iterative DFS: each frame is (node, iterator over its dependents)
        path: list[str] = [root]
        visited.add(root)
        on_stack.add(root)
        frames = [(root, iter(graph.dependents_of(root)))]

        while frames:
            node, children = frames[-1]
            child = next(children, None)

            if child is None:
                frames.pop()
                on_stack.discard(node)
                path.pop()
                continue

            if child in on_stack:
                cycle_path = [*path, child]
                logger.warning(f"Circular dependency detected: {' -> '.join(cycle_path)}")
                return Err(circular_dependency(cycle_path))

            if child not in visited:
                visited.add(child)
                on_stack.add(child)
                path.append(child)
                frames.append((child, iter(graph.dependents_of(child))))

    return Ok(None)


def get_topological_order(segments: Sequence[Segment]) -> Result[list[Segment], DependencyError]:
    """Order segments so each one follows everything it depends on (Kahn's algorithm).

    Ties are broken by input order: the queue is seeded in itinerary order
    and dependents are released in the order their edges were added, so the
    same snapshot always yields the same ordering.

    Returns:
        Ok with every segment exactly once, or the CIRCULAR_DEPENDENCY error
        from validate_no_cycles
    """
    cycle_check = validate_no_cycles(segments)
    if isinstance(cycle_check, Err):
        return cycle_check

    graph = build_graph(segments)

    # In-degree counts only references to known segments
    in_degree: dict[str, int] = {
        segment_id: sum(1 for d in segment.depends_on if d in graph.nodes)
        for segment_id, segment in graph.nodes.items()
    }

    queue = deque(segment_id for segment_id, degree in in_degree.items() if degree == 0)
    ordered: list[Segment] = []

    while queue:
        segment_id = queue.popleft()
        ordered.append(graph.nodes[segment_id])

        for dependent_id in graph.dependents_of(segment_id):
            in_degree[dependent_id] -= 1
            if in_degree[dependent_id] == 0:
                queue.append(dependent_id)

    return Ok(ordered)


def find_dependents(segments: Sequence[Segment], segment_id: str) -> list[str]:
    """Find every segment that depends on ``segment_id``, directly or transitively.

    Breadth-first over explicit edges with a visited set, so the result has
    no duplicates and terminates even if the caller skipped cycle validation.
    Unknown ids yield an empty list.

    Returns:
        Dependent ids in discovery (BFS) order
    """
    graph = build_graph(segments)
    dependents: list[str] = []
    seen: set[str] = set()
    queue = deque([segment_id])

    while queue:
        current = queue.popleft()
        for dependent_id in graph.dependents_of(current):
            if dependent_id not in seen:
                seen.add(dependent_id)
                dependents.append(dependent_id)
                queue.append(dependent_id)

    return dependents
