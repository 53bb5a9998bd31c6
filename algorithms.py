"""
Algorithm interfaces and result types for shortest-path queries.

Keeps the search separate from parsing, graph storage and presentation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from graph import Graph


NO_PREDECESSOR = -1


@dataclass(frozen=True)
class MalformedEdge:
    """
    Edge whose neighbor id resolves to no node in the graph.

    The edge is ignored by the search; it is kept only for reporting.
    """
    position: int
    neighbor_id: int


@dataclass(frozen=True)
class Path:
    """
    Shortest path found by a query.

    positions runs from start to destination; hops == len(positions) - 1.
    """
    positions: Tuple[int, ...]
    hops: int

    @property
    def start(self) -> int:
        return self.positions[0]

    @property
    def dest(self) -> int:
        return self.positions[-1]

    def walk_back(self) -> Tuple[int, ...]:
        """Positions from destination back to start."""
        return tuple(reversed(self.positions))


@dataclass(frozen=True)
class Unreachable:
    """No sequence of edges connects start to dest. Not an error."""
    start: int
    dest: int


PathResult = Union[Path, Unreachable]


@dataclass(frozen=True)
class ShortestPathTree:
    """
    Per-query working set after the search has finished.

    distances[i] is None for positions never reached.
    predecessors[i] is NO_PREDECESSOR for the start and unreached positions.
    """
    start: int
    distances: Tuple[Optional[int], ...]
    predecessors: Tuple[int, ...]
    malformed_edges: Tuple[MalformedEdge, ...] = ()

    def distance_to(self, dest: int) -> Optional[int]:
        """Hop count from start to dest, or None when unreachable."""
        self._check(dest)
        return self.distances[dest]

    def path_to(self, dest: int) -> PathResult:
        """Walk predecessors back from dest to start."""
        self._check(dest)
        hops = self.distances[dest]
        if hops is None:
            return Unreachable(self.start, dest)

        walk = [dest]
        cursor = dest
        while cursor != self.start:
            cursor = self.predecessors[cursor]
            walk.append(cursor)
        walk.reverse()
        return Path(positions=tuple(walk), hops=hops)

    def _check(self, position: int) -> None:
        if not 0 <= position < len(self.distances):
            raise IndexError(
                f"position {position} outside tree of {len(self.distances)} nodes"
            )


class ShortestPathEngine(ABC):
    """
    Interface for single-source shortest-path computation.
    """

    @abstractmethod
    def shortest_paths(self, graph: Graph, start: int) -> ShortestPathTree:
        """
        Compute hop counts and predecessors from start to every position.
        """
        raise NotImplementedError

    def shortest_path(self, graph: Graph, start: int, dest: int) -> PathResult:
        """
        Shortest path from start to dest, or Unreachable.
        """
        return self.shortest_paths(graph, start).path_to(dest)
