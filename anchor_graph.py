"""
Concrete fixed-capacity graph implementation for anchorpath.

Implements the Graph interface over a tuple of parsed AnchorNode records,
plus an id -> position lookup table built once at construction.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from anchor_parser import ParsedAnchors
from graph import Graph
from nodes import CAPACITY, AnchorNode


class AnchorGraph(Graph):
    """
    Immutable graph backed by declaration-ordered records.

    Declared ids and positions are independent: a neighbor id resolves only
    through the lookup table. When several nodes declare the same id the
    first declaration owns it. Nodes without an id cannot be reached as a
    neighbor but are still valid start/destination positions.
    """

    def __init__(self, nodes: Iterable[AnchorNode], capacity: int = CAPACITY) -> None:
        self._nodes: Tuple[AnchorNode, ...] = tuple(nodes)
        if len(self._nodes) > capacity:
            raise ValueError(
                f"{len(self._nodes)} nodes exceed graph capacity of {capacity}"
            )
        self._positions: Dict[int, int] = {}
        duplicates: List[int] = []
        unset: List[int] = []
        for position, node in enumerate(self._nodes):
            if not node.has_id:
                unset.append(position)
            elif node.id in self._positions:
                duplicates.append(node.id)
            else:
                self._positions[node.id] = position
        self.duplicate_ids: Tuple[int, ...] = tuple(duplicates)
        self.unset_positions: Tuple[int, ...] = tuple(unset)

    @classmethod
    def from_parsed(cls, parsed: ParsedAnchors) -> "AnchorGraph":
        return cls(parsed.nodes, capacity=parsed.capacity)

    # --- Graph interface -----------------------------------------------------

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    def node_at(self, position: int) -> AnchorNode:
        self._check_position(position)
        return self._nodes[position]

    def neighbor_ids(self, position: int) -> Sequence[int]:
        return self.node_at(position).neighbor_ids

    def position_of(self, node_id: int) -> Optional[int]:
        return self._positions.get(node_id)

    # -------------------------------------------------------------------------

    def nodes(self) -> Tuple[AnchorNode, ...]:
        return self._nodes

    def contains_position(self, position: int) -> bool:
        return 0 <= position < len(self._nodes)

    def _check_position(self, position: int) -> None:
        # Negative indexes would silently wrap around on a tuple.
        if not self.contains_position(position):
            raise IndexError(
                f"position {position} outside graph of {len(self._nodes)} nodes"
            )
