"""
Entry point: read a floor description, run one shortest-path query, print it.

The default query is the floor survey one: etage.json, from
position 9 (node 10) to position 5 (node 6). A YAML file can override these
values when main() is called with config_path.

Only the rendered result goes to stdout. Diagnostics are printed to stderr
with a [stage] prefix.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, TextIO
import sys

from algorithms import PathResult, ShortestPathTree
from anchor_graph import AnchorGraph
from anchor_parser import ParseError, ParsedAnchors, parse_anchors
from dijkstra_engine import UnitDijkstraEngine
from reporting import display_id, render, render_summary


@dataclass(frozen=True)
class Config:
    document: Path
    start: int  # 0-based position
    dest: int   # 0-based position
    show_names: bool = False


DEFAULT_CONFIG = Config(document=Path("etage.json"), start=9, dest=5)


def load_config(path: Path) -> Config:
    """
    Read a YAML query config. Missing keys keep their DEFAULT_CONFIG value.

    Raises ValueError for invalid YAML or a value of the wrong type.
    """
    import yaml  # type: ignore

    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"config {path} is not valid YAML: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ValueError(f"config {path} must be a mapping")

    document = data.get("document", str(DEFAULT_CONFIG.document))
    if not isinstance(document, str) or not document:
        raise ValueError(f"config {path}: document must be a file name")
    document_path = Path(document)
    if not document_path.is_absolute():
        document_path = path.parent / document_path
    return Config(
        document=document_path,
        start=_int_field(data, "start", DEFAULT_CONFIG.start, path),
        dest=_int_field(data, "dest", DEFAULT_CONFIG.dest, path),
        show_names=_bool_field(data, "show_names", DEFAULT_CONFIG.show_names, path),
    )


def _int_field(data: Mapping[str, Any], key: str, default: int, path: Path) -> int:
    value = data.get(key, default)
    # YAML booleans load as bool, which is an int subclass.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"config {path}: {key} must be an integer")
    return value


def _bool_field(data: Mapping[str, Any], key: str, default: bool, path: Path) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"config {path}: {key} must be true or false")
    return value


def read_document(path: Path) -> bytes:
    """Full content of path. OSError propagates to the caller."""
    return path.read_bytes()


@dataclass(frozen=True)
class QueryOutcome:
    graph: AnchorGraph
    tree: ShortestPathTree
    result: PathResult
    text: str


def run_query(
    raw: bytes | str,
    start: int,
    dest: int,
    show_names: bool = False,
    log: Optional[TextIO] = None,
) -> QueryOutcome:
    """
    Parse raw, validate start/dest, solve and render.

    Raises ParseError for a malformed document and ValueError when start or
    dest is not a position of the parsed graph.
    """
    parsed = parse_anchors(raw)
    _report_parse(parsed, log)

    graph = AnchorGraph.from_parsed(parsed)
    _report_graph(graph, log)
    for name, position in (("start", start), ("dest", dest)):
        if not graph.contains_position(position):
            raise ValueError(
                f"{name} position {position} outside graph of {graph.node_count} nodes"
            )

    engine = UnitDijkstraEngine()
    tree = engine.shortest_paths(graph, start)
    for edge in tree.malformed_edges:
        _log(
            log,
            f"[solve] ignored edge from node {display_id(edge.position)} "
            f"to unknown id {edge.neighbor_id}",
        )
    _log(
        log,
        f"[solve] visited={engine.last_visited} edges={engine.last_edges_examined} "
        f"relaxed={engine.last_relaxed} malformed={engine.last_malformed}",
    )
    for line in render_summary(tree):
        _log(log, f"[solve] {line}")

    result = tree.path_to(dest)
    text = render(result, start, dest, graph if show_names else None)
    return QueryOutcome(graph=graph, tree=tree, result=result, text=text)


def main(
    config_path: Path | None = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr

    try:
        cfg = load_config(config_path) if config_path else DEFAULT_CONFIG
    except (OSError, ValueError) as exc:
        print(f"[config] failed to load {config_path}: {exc}", file=err)
        return 1

    try:
        raw = read_document(cfg.document)
    except OSError as exc:
        print(f"[read] cannot read {cfg.document}: {exc}", file=err)
        return 1
    _log(err, f"[read] {cfg.document} ({len(raw)} bytes)")

    try:
        outcome = run_query(raw, cfg.start, cfg.dest, show_names=cfg.show_names, log=err)
    except ParseError as exc:
        print(f"[parse] {cfg.document}: {exc}", file=err)
        return 1
    except ValueError as exc:
        print(f"[solve] {exc}", file=err)
        return 1

    print(outcome.text, file=out)
    return 0


def cli() -> None:
    sys.exit(main())


def _report_parse(parsed: ParsedAnchors, log: Optional[TextIO]) -> None:
    _log(log, f"[parse] {parsed.count} of {parsed.declared_count} anchors loaded")
    if parsed.dropped_nodes:
        _log(log, f"[parse] warning: {parsed.dropped_nodes} anchors past capacity ignored")
    for position, extra in sorted(parsed.dropped_neighbors.items()):
        _log(
            log,
            f"[parse] warning: node {display_id(position)} neighbors past capacity "
            f"ignored: {list(extra)}",
        )


def _report_graph(graph: AnchorGraph, log: Optional[TextIO]) -> None:
    for position in graph.unset_positions:
        _log(log, f"[parse] warning: node {display_id(position)} has no numeric id")
    for node_id in graph.duplicate_ids:
        _log(log, f"[parse] warning: id {node_id} declared more than once, first wins")


def _log(stream: Optional[TextIO], message: Any) -> None:
    if stream is not None:
        print(message, file=stream)


if __name__ == "__main__":
    cli()
