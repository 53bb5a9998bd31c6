"""
Unit tests for parse_anchors.
"""

import json

import pytest

from anchor_parser import ParseError, ParseErrorKind, parse_anchors
from nodes import CAPACITY, NAME_MAX_LENGTH, NEIGHBOR_CAPACITY, UNSET_ID


def doc(*anchors) -> str:
    return json.dumps({"anchors": list(anchors)})


def test_parses_fields_in_document_order():
    parsed = parse_anchors(
        doc(
            {"id": 2, "name": "Hall", "neighbors": [1]},
            {"id": 1, "neighbors": [2]},
        )
    )

    assert parsed.count == 2
    first, second = parsed.nodes
    assert (first.id, first.name, first.neighbor_ids) == (2, "Hall", (1,))
    assert (second.id, second.name, second.neighbor_ids) == (1, "", (2,))
    assert not parsed.truncated


def test_accepts_bytes():
    parsed = parse_anchors(doc({"id": 1}).encode("utf-8"))
    assert parsed.nodes[0].id == 1


def test_missing_neighbors_field_gives_zero_neighbors():
    parsed = parse_anchors(doc({"id": 1, "name": "Alone"}))
    assert parsed.nodes[0].neighbor_count == 0


def test_non_numeric_id_is_unset():
    parsed = parse_anchors(doc({"name": "no id"}, {"id": "3"}, {"id": True}))
    assert [n.id for n in parsed.nodes] == [UNSET_ID, UNSET_ID, UNSET_ID]
    assert not any(n.has_id for n in parsed.nodes)


def test_declared_minus_one_is_kept_as_id():
    parsed = parse_anchors(doc({"id": -1}, {"name": "no id"}))
    declared, missing = parsed.nodes

    assert declared.id == UNSET_ID and declared.has_id
    assert missing.id == UNSET_ID and not missing.has_id


def test_parsed_anchors_record_capacity():
    assert parse_anchors(doc()).capacity == CAPACITY
    assert parse_anchors(doc(), capacity=3).capacity == 3


def test_float_id_truncates_toward_zero():
    parsed = parse_anchors(doc({"id": 4.9, "neighbors": [2.5]}))
    assert parsed.nodes[0].id == 4
    assert parsed.nodes[0].neighbor_ids == (2,)


def test_non_string_name_is_empty():
    parsed = parse_anchors(doc({"id": 1, "name": 42}))
    assert parsed.nodes[0].name == ""


def test_long_name_is_truncated():
    parsed = parse_anchors(doc({"id": 1, "name": "x" * 80}))
    assert parsed.nodes[0].name == "x" * NAME_MAX_LENGTH


def test_non_object_entry_keeps_its_position():
    parsed = parse_anchors(doc("junk", {"id": 2}))
    assert parsed.count == 2
    assert parsed.nodes[0].id == UNSET_ID
    assert parsed.nodes[1].id == 2


def test_non_numeric_neighbors_are_skipped_and_not_counted():
    parsed = parse_anchors(doc({"id": 1, "neighbors": [2, "3", None, 4, [5], False]}))
    node = parsed.nodes[0]
    assert node.neighbor_ids == (2, 4)
    assert node.neighbor_count == 2


def test_neighbors_past_capacity_are_dropped():
    ids = list(range(1, NEIGHBOR_CAPACITY + 4))
    parsed = parse_anchors(doc({"id": 1, "neighbors": ids}))

    assert parsed.nodes[0].neighbor_ids == tuple(ids[:NEIGHBOR_CAPACITY])
    assert parsed.dropped_neighbors == {0: tuple(ids[NEIGHBOR_CAPACITY:])}
    assert parsed.truncated


def test_anchors_past_capacity_are_dropped_in_order():
    anchors = [{"id": i} for i in range(1, CAPACITY + 6)]
    parsed = parse_anchors(doc(*anchors))

    assert parsed.count == CAPACITY
    assert [n.id for n in parsed.nodes] == list(range(1, CAPACITY + 1))
    assert parsed.declared_count == CAPACITY + 5
    assert parsed.dropped_nodes == 5


def test_custom_capacities():
    parsed = parse_anchors(
        doc({"id": 1, "neighbors": [2, 3, 4]}, {"id": 2}, {"id": 3}),
        capacity=2,
        neighbor_capacity=1,
    )
    assert parsed.count == 2
    assert parsed.nodes[0].neighbor_ids == (2,)


def test_empty_anchor_array_is_valid():
    parsed = parse_anchors(doc())
    assert parsed.count == 0
    assert parsed.declared_count == 0


@pytest.mark.parametrize(
    "text",
    [
        "",
        "{not json",
        "[]",
        '"anchors"',
        "{}",
        '{"nodes": []}',
        '{"anchors": {"id": 1}}',
        '{"anchors": null}',
    ],
)
def test_malformed_documents_raise(text):
    with pytest.raises(ParseError) as info:
        parse_anchors(text)
    assert info.value.kind is ParseErrorKind.MALFORMED_DOCUMENT


def test_invalid_utf8_raises_parse_error():
    with pytest.raises(ParseError):
        parse_anchors(b'{"anchors": ["\xff"]}')


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_anchors("{}")
