"""
Parser for anchor floor descriptions.

Turns a JSON document of the form

    {"anchors": [{"id": 1, "name": "Lobby", "neighbors": [2]}, ...]}

into a bounded sequence of AnchorNode records. The parser is pure: it does
no I/O and trusts the document's references completely. Resolution of
neighbor ids happens in AnchorGraph, and bad references surface there.

Truncation is bounded and best-effort: entries past CAPACITY and numeric
neighbor ids past NEIGHBOR_CAPACITY are dropped, but the counts are kept on
ParsedAnchors so callers can report them.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Tuple, Union
import json
import math

from nodes import (
    CAPACITY,
    NAME_MAX_LENGTH,
    NEIGHBOR_CAPACITY,
    AnchorNode,
)


ANCHORS_FIELD = "anchors"


class ParseErrorKind(Enum):
    MALFORMED_DOCUMENT = auto()


class ParseError(ValueError):
    """Raised when a document cannot be turned into anchor records."""

    def __init__(self, message: str, kind: ParseErrorKind = ParseErrorKind.MALFORMED_DOCUMENT) -> None:
        super().__init__(message)
        self.kind = kind


@dataclass(frozen=True)
class ParsedAnchors:
    """
    Result of parsing one document.

    nodes holds at most CAPACITY records in document order.
    declared_count is the length of the source array before truncation.
    dropped_neighbors maps position -> numeric neighbor ids discarded past
    NEIGHBOR_CAPACITY (positions with nothing dropped are omitted).
    capacity is the node capacity the document was parsed with.
    """

    nodes: Tuple[AnchorNode, ...]
    declared_count: int
    dropped_neighbors: Dict[int, Tuple[int, ...]] = field(default_factory=dict)
    capacity: int = CAPACITY

    @property
    def count(self) -> int:
        return len(self.nodes)

    @property
    def dropped_nodes(self) -> int:
        return self.declared_count - len(self.nodes)

    @property
    def truncated(self) -> bool:
        return self.dropped_nodes > 0 or bool(self.dropped_neighbors)


def parse_anchors(
    json_text: Union[str, bytes],
    capacity: int = CAPACITY,
    neighbor_capacity: int = NEIGHBOR_CAPACITY,
) -> ParsedAnchors:
    """
    Parse a floor description.

    Raises ParseError if the text is not JSON, the root is not an object, or
    the "anchors" field is missing or not an array.
    """
    if isinstance(json_text, bytes):
        try:
            json_text = json_text.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(f"document is not valid UTF-8: {exc}") from exc

    try:
        root = json.loads(json_text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"invalid JSON: {exc}") from exc

    if not isinstance(root, dict):
        raise ParseError("document root must be an object")
    anchors = root.get(ANCHORS_FIELD)
    if not isinstance(anchors, list):
        raise ParseError(f"'{ANCHORS_FIELD}' must be present and an array")

    nodes: List[AnchorNode] = []
    dropped: Dict[int, Tuple[int, ...]] = {}
    for entry in anchors:
        if len(nodes) >= capacity:
            break
        node, extra = _parse_entry(entry, neighbor_capacity)
        if extra:
            dropped[len(nodes)] = tuple(extra)
        nodes.append(node)

    return ParsedAnchors(
        nodes=tuple(nodes),
        declared_count=len(anchors),
        dropped_neighbors=dropped,
        capacity=capacity,
    )


def _parse_entry(entry: Any, neighbor_capacity: int) -> Tuple[AnchorNode, List[int]]:
    # Non-object entries still occupy a position, with every field defaulted.
    if not isinstance(entry, dict):
        return AnchorNode.without_id(), []

    node_id = _as_int(entry.get("id"))

    name = entry.get("name")
    name = name[:NAME_MAX_LENGTH] if isinstance(name, str) else ""

    kept: List[int] = []
    extra: List[int] = []
    neighbors = entry.get("neighbors")
    if isinstance(neighbors, list):
        for raw in neighbors:
            value = _as_int(raw)
            if value is None:
                continue
            if len(kept) < neighbor_capacity:
                kept.append(value)
            else:
                extra.append(value)

    if node_id is None:
        return AnchorNode.without_id(name, tuple(kept)), extra
    return AnchorNode(node_id, name=name, neighbor_ids=tuple(kept)), extra


def _as_int(value: Any) -> Optional[int]:
    """Numeric JSON value as an int (truncated toward zero), else None."""
    # bool is an int subclass but not a JSON number.
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return None
