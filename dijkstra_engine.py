"""
Unit-weight DijkstraEngine implementation for anchorpath.

Every edge costs one hop. With at most CAPACITY nodes the minimum is found
by a full scan of the distance array rather than a heap, which keeps the
selection order deterministic: among equal distances the lowest position
is finalized first.
"""

from typing import List

import numpy as np

from algorithms import (
    NO_PREDECESSOR,
    MalformedEdge,
    ShortestPathEngine,
    ShortestPathTree,
)
from graph import Graph


UNREACHED = np.iinfo(np.int64).max


class UnitDijkstraEngine(ShortestPathEngine):
    """
    Single-source Dijkstra over unweighted edges.

    Complexity:
        O(V^2 + E) over the graph, V <= CAPACITY.
    """

    def __init__(self) -> None:
        # Instrumentation counters per invocation.
        self.last_visited = 0
        self.last_edges_examined = 0
        self.last_relaxed = 0
        self.last_malformed = 0

    def shortest_paths(self, graph: Graph, start: int) -> ShortestPathTree:
        """
        Finalize positions in order of hop count from start.

        Neighbor ids are resolved through graph.position_of; an id that
        resolves to nothing is recorded as a MalformedEdge and skipped, so a
        bad reference never touches another node's distance or predecessor.
        """
        count = graph.node_count
        if not 0 <= start < count:
            raise ValueError(f"start position {start} outside graph of {count} nodes")

        self.last_visited = 0
        self.last_edges_examined = 0
        self.last_relaxed = 0
        self.last_malformed = 0

        distance = np.full(count, UNREACHED, dtype=np.int64)
        visited = np.zeros(count, dtype=bool)
        predecessor = np.full(count, NO_PREDECESSOR, dtype=np.int64)
        malformed: List[MalformedEdge] = []

        distance[start] = 0

        for _ in range(count):
            frontier = np.where(visited, UNREACHED, distance)
            # argmin returns the first minimum, i.e. the lowest position.
            x = int(np.argmin(frontier))
            if frontier[x] == UNREACHED:
                break  # the rest is unreachable

            visited[x] = True
            self.last_visited += 1

            alt = distance[x] + 1
            for neighbor_id in graph.neighbor_ids(x):
                self.last_edges_examined += 1
                v = graph.position_of(neighbor_id)
                if v is None:
                    malformed.append(MalformedEdge(x, neighbor_id))
                    continue
                if alt < distance[v]:
                    distance[v] = alt
                    predecessor[v] = x
                    self.last_relaxed += 1

        self.last_malformed = len(malformed)
        return ShortestPathTree(
            start=start,
            distances=tuple(None if d == UNREACHED else int(d) for d in distance),
            predecessors=tuple(int(p) for p in predecessor),
            malformed_edges=tuple(malformed),
        )
