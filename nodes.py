"""
Node abstraction for anchorpath.

An anchor is one entry of the "anchors" array in a floor description.
Records are kept in declaration order; the position of a record is its
index in that order, independent of the id it declares.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple


CAPACITY = 10           # nodes per graph
NEIGHBOR_CAPACITY = 10  # neighbor ids per node
NAME_MAX_LENGTH = 49

# Id of a node whose "id" field was absent or not numeric.
UNSET_ID = -1


class Node(ABC):
    """Abstract node in anchorpath."""

    @property
    @abstractmethod
    def id(self) -> int:
        """
        External identifier as declared in the source document.
        """
        raise NotImplementedError


@dataclass(frozen=True)
class AnchorNode(Node):
    """
    Parsed anchor record.

    neighbor_ids are external ids, not positions. id_declared is False when
    the source gave no numeric id; the id is then UNSET_ID. A document may
    still declare -1 as a real id.
    """

    _id: int
    name: str = ""
    neighbor_ids: Tuple[int, ...] = ()
    id_declared: bool = True

    @classmethod
    def without_id(cls, name: str = "", neighbor_ids: Tuple[int, ...] = ()) -> "AnchorNode":
        return cls(UNSET_ID, name=name, neighbor_ids=neighbor_ids, id_declared=False)

    @property
    def id(self) -> int:
        return self._id

    @property
    def has_id(self) -> bool:
        return self.id_declared

    @property
    def neighbor_count(self) -> int:
        return len(self.neighbor_ids)
