"""
Human-readable rendering of shortest-path results.

Positions are shown as display ids (position + 1).
"""

from typing import List, Optional

from algorithms import Path, PathResult, ShortestPathTree, Unreachable
from graph import Graph


ARROW = " <- "


def display_id(position: int) -> int:
    return position + 1


def render(
    result: PathResult,
    start: int,
    dest: int,
    graph: Optional[Graph] = None,
) -> str:
    """
    Render a query result.

    A path reads from the destination back to the start, e.g. "6 <- 7 <- 8".
    With a graph, named nodes are shown as "7 (Stairwell)".
    """
    if isinstance(result, Unreachable):
        return (
            f"Node {display_id(dest)} is unreachable from node {display_id(start)}."
        )
    if not isinstance(result, Path):
        raise TypeError(f"Unsupported result type: {type(result)!r}")
    return ARROW.join(_label(p, graph) for p in result.walk_back())


def render_summary(tree: ShortestPathTree, graph: Optional[Graph] = None) -> List[str]:
    """One line per position: hop count from the tree's start, or unreachable."""
    lines: List[str] = []
    origin = _label(tree.start, graph)
    for position, hops in enumerate(tree.distances):
        target = _label(position, graph)
        if hops is None:
            lines.append(f"{origin} -> {target}: unreachable")
        else:
            lines.append(f"{origin} -> {target}: hops={hops}")
    return lines


def _label(position: int, graph: Optional[Graph]) -> str:
    if graph is None:
        return str(display_id(position))
    name = graph.node_at(position).name
    return f"{display_id(position)} ({name})" if name else str(display_id(position))
