"""
Heap Snapshot Decoder

Decodes the V8 heap snapshot JSON that AOT compilers emit as a
reachable-object profile. Layout:

    {
        "snapshot": {
            "meta": {
                "node_fields": ["type", "name", "id", "self_size", "edge_count", ...],
                "node_types": [["Library", "Class", ...], "string", "number", ...],
                "edge_fields": ["type", "name_or_index", "to_node"],
                "edge_types": [["context", "element", "property", ...], ...]
            },
            ...
        },
        "nodes": [flat int array, len(node_fields) ints per node],
        "edges": [flat int array, len(edge_fields) ints per edge],
        "strings": ["", "package:foo/bar.dart::Foo", ...]
    }

Edges are stored in node order: node i owns the next edge_count[i] edges.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

import orjson

from typefence.errors import MalformedSnapshot

logger = logging.getLogger(__name__)

REQUIRED_NODE_FIELDS = ("type", "name", "edge_count")
REQUIRED_EDGE_FIELDS = ("type", "name_or_index", "to_node")

# Edge types whose name_or_index is a numeric index rather than a string id
INDEXED_EDGE_TYPES = frozenset({"element", "hidden"})


@dataclass(frozen=True)
class SnapshotNode:
    """A single allocation site / object in the snapshot."""
    index: int
    type: str
    name: str
    node_id: int
    self_size: int
    edge_count: int


@dataclass(frozen=True)
class SnapshotEdge:
    """A reference from one node to another."""
    type: str
    name: str
    from_index: int
    to_index: int


@dataclass(frozen=True)
class SnapshotGraph:
    """Decoded snapshot: nodes and the references between them."""
    nodes: Tuple[SnapshotNode, ...]
    edges: Tuple[SnapshotEdge, ...]

    @property
    def total_size(self) -> int:
        return sum(n.self_size for n in self.nodes)

    def edges_from(self, index: int) -> List[SnapshotEdge]:
        return [e for e in self.edges if e.from_index == index]

    def __repr__(self):
        return f"SnapshotGraph({len(self.nodes)} nodes, {len(self.edges)} edges)"


def _require(mapping: Dict[str, Any], key: str, where: str, source: str) -> Any:
    if not isinstance(mapping, dict) or key not in mapping:
        raise MalformedSnapshot(f"missing '{key}' in {where}", source)
    return mapping[key]


def _int_table(value: Any, name: str, source: str) -> Sequence[int]:
    if not isinstance(value, list) or not all(isinstance(v, int) for v in value):
        raise MalformedSnapshot(f"'{name}' must be an array of integers", source)
    return value


def _field_layout(fields: Any, required: Sequence[str], name: str, source: str) -> Dict[str, int]:
    if not isinstance(fields, list) or not fields:
        raise MalformedSnapshot(f"'{name}' must be a non-empty array", source)
    layout = {field: i for i, field in enumerate(fields)}
    # Row width is taken from the layout, so every field name must be distinct
    if len(layout) != len(fields):
        raise MalformedSnapshot(f"'{name}' repeats a field name", source)
    missing = [f for f in required if f not in layout]
    if missing:
        raise MalformedSnapshot(f"'{name}' lacks {', '.join(missing)}", source)
    return layout


def _type_names(types: Any, layout: Dict[str, int], name: str, source: str) -> List[str]:
    """Return the enum of type names declared for the 'type' field."""
    if not isinstance(types, list) or len(types) <= layout["type"]:
        raise MalformedSnapshot(f"'{name}' does not describe the 'type' field", source)
    names = types[layout["type"]]
    if not isinstance(names, list):
        raise MalformedSnapshot(f"'{name}' type field is not an enum", source)
    return [str(n) for n in names]


def _lookup(table: Sequence[str], index: int, what: str, source: str) -> str:
    if index < 0 or index >= len(table):
        raise MalformedSnapshot(f"{what} index {index} out of range", source)
    return table[index]


def decode_snapshot(text: str | bytes, source: str = "<snapshot>") -> SnapshotGraph:
    """
    Decode raw snapshot text into a SnapshotGraph.

    Raises:
        MalformedSnapshot: the text is not JSON, lacks the node/edge/string
            tables, or the tables are inconsistent with each other.
    """
    try:
        doc = orjson.loads(text)
    except orjson.JSONDecodeError as e:
        raise MalformedSnapshot(f"invalid JSON ({e})", source) from e

    if not isinstance(doc, dict):
        raise MalformedSnapshot("top-level value must be an object", source)

    meta = _require(_require(doc, "snapshot", "document", source), "meta", "snapshot", source)
    node_layout = _field_layout(
        _require(meta, "node_fields", "meta", source), REQUIRED_NODE_FIELDS, "node_fields", source
    )
    edge_layout = _field_layout(
        _require(meta, "edge_fields", "meta", source), REQUIRED_EDGE_FIELDS, "edge_fields", source
    )
    node_types = _type_names(_require(meta, "node_types", "meta", source), node_layout, "node_types", source)
    edge_types = _type_names(_require(meta, "edge_types", "meta", source), edge_layout, "edge_types", source)

    flat_nodes = _int_table(_require(doc, "nodes", "document", source), "nodes", source)
    flat_edges = _int_table(_require(doc, "edges", "document", source), "edges", source)
    strings = _require(doc, "strings", "document", source)
    if not isinstance(strings, list):
        raise MalformedSnapshot("'strings' must be an array", source)

    node_width = len(meta["node_fields"])
    edge_width = len(meta["edge_fields"])
    if len(flat_nodes) % node_width:
        raise MalformedSnapshot(f"'nodes' length is not a multiple of {node_width}", source)
    if len(flat_edges) % edge_width:
        raise MalformedSnapshot(f"'edges' length is not a multiple of {edge_width}", source)

    nodes: List[SnapshotNode] = []
    for index, offset in enumerate(range(0, len(flat_nodes), node_width)):
        row = flat_nodes[offset:offset + node_width]
        nodes.append(SnapshotNode(
            index=index,
            type=_lookup(node_types, row[node_layout["type"]], "node type", source),
            name=str(_lookup(strings, row[node_layout["name"]], "node name", source)),
            node_id=row[node_layout["id"]] if "id" in node_layout else index,
            self_size=row[node_layout["self_size"]] if "self_size" in node_layout else 0,
            edge_count=row[node_layout["edge_count"]],
        ))

    expected_edges = sum(n.edge_count for n in nodes)
    if expected_edges * edge_width != len(flat_edges):
        raise MalformedSnapshot(
            f"nodes declare {expected_edges} edges but edge table holds "
            f"{len(flat_edges) // edge_width}",
            source,
        )

    edges: List[SnapshotEdge] = []
    offset = 0
    for node in nodes:
        for _ in range(node.edge_count):
            row = flat_edges[offset:offset + edge_width]
            offset += edge_width
            edge_type = _lookup(edge_types, row[edge_layout["type"]], "edge type", source)
            name_or_index = row[edge_layout["name_or_index"]]
            if edge_type in INDEXED_EDGE_TYPES:
                name = str(name_or_index)
            else:
                name = str(_lookup(strings, name_or_index, "edge name", source))
            to_node = row[edge_layout["to_node"]]
            if to_node % node_width or not 0 <= to_node < len(flat_nodes):
                raise MalformedSnapshot(f"edge target offset {to_node} is not a node", source)
            edges.append(SnapshotEdge(
                type=edge_type,
                name=name,
                from_index=node.index,
                to_index=to_node // node_width,
            ))

    graph = SnapshotGraph(nodes=tuple(nodes), edges=tuple(edges))
    logger.debug("Decoded %s from %s", graph, source)
    return graph
