"""
Read-only graph abstraction for anchorpath.

Nodes are addressed by position (0-based declaration order).
Edges are directed and unweighted: position -> declared neighbor id.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from nodes import AnchorNode


class Graph(ABC):
    """Fixed, read-only graph over AnchorNode records."""

    @property
    @abstractmethod
    def node_count(self) -> int:
        """Number of populated positions."""
        raise NotImplementedError

    @abstractmethod
    def node_at(self, position: int) -> AnchorNode:
        """Record stored at position."""
        raise NotImplementedError

    @abstractmethod
    def neighbor_ids(self, position: int) -> Sequence[int]:
        """
        Declared neighbor ids of the node at position, in source order.

        Ids are unresolved; use position_of to turn one into a position.
        """
        raise NotImplementedError

    @abstractmethod
    def position_of(self, node_id: int) -> Optional[int]:
        """
        Position of the node declaring node_id.

        Returns None if no node in the graph declares that id.
        """
        raise NotImplementedError

    def __len__(self) -> int:
        return self.node_count
