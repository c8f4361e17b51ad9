"""
Pytest configuration and shared fixtures.
"""

import json
import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from typefence.fs import MemoryFileSystem


NODE_FIELDS = ["type", "name", "id", "self_size", "edge_count", "trace_node_id"]
EDGE_FIELDS = ["type", "name_or_index", "to_node"]
NODE_TYPES = ["Unknown", "ArtificialRoot", "Library", "Class", "Function", "Code", "Field", "String"]
EDGE_TYPES = ["context", "element", "property", "internal", "hidden", "shortcut", "weak"]

WORKSPACE = "/ws"
MANIFEST_PATH = "/ws/.dart_tool/package_config.json"


# =============================================================================
# SNAPSHOT BUILDERS
# =============================================================================

def make_snapshot(nodes, edges=()):
    """
    Build a V8 heap snapshot document.

    nodes: [(type, name, self_size), ...]
    edges: [(from_index, edge_type, name_or_index, to_index), ...]
    """
    strings = [""]

    def intern(s):
        if s not in strings:
            strings.append(s)
        return strings.index(s)

    edge_counts = [0] * len(nodes)
    for from_index, *_ in edges:
        edge_counts[from_index] += 1

    flat_nodes = []
    for i, (node_type, name, size) in enumerate(nodes):
        flat_nodes += [NODE_TYPES.index(node_type), intern(name), i + 1, size, edge_counts[i], 0]

    flat_edges = []
    for from_index, edge_type, name_or_index, to_index in sorted(edges, key=lambda e: e[0]):
        if edge_type in ("element", "hidden"):
            name_id = name_or_index
        else:
            name_id = intern(name_or_index)
        flat_edges += [EDGE_TYPES.index(edge_type), name_id, to_index * len(NODE_FIELDS)]

    return {
        "snapshot": {
            "meta": {
                "node_fields": NODE_FIELDS,
                "node_types": [NODE_TYPES, "string", "number", "number", "number", "number"],
                "edge_fields": EDGE_FIELDS,
                "edge_types": [EDGE_TYPES, "string_or_number", "node"],
            },
            "node_count": len(nodes),
            "edge_count": len(flat_edges) // len(EDGE_FIELDS),
        },
        "nodes": flat_nodes,
        "edges": flat_edges,
        "strings": strings,
    }


def snapshot_text(nodes, edges=()):
    return json.dumps(make_snapshot(nodes, edges))


def make_manifest(packages):
    """packages: {name: rootUri}; every package serves lib/."""
    return json.dumps({
        "configVersion": 2,
        "packages": [
            {"name": name, "rootUri": root, "packageUri": "lib/", "languageVersion": "3.0"}
            for name, root in packages.items()
        ],
    })


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def sample_nodes():
    """A small app: two libraries, one type with members, plus noise."""
    return [
        ("ArtificialRoot", "", 0),
        ("Library", "package:foo/bar.dart", 10),
        ("Class", "package:foo/bar.dart::Foo", 100),
        ("Function", "package:foo/bar.dart::Foo.build", 40),
        ("Code", "package:foo/bar.dart::Foo.build", 60),
        ("Class", "package:foo/src/baz.dart::Baz", 30),
        ("Class", "dart:core::int", 8),
        ("String", "hello world", 16),
    ]


@pytest.fixture
def sample_edges():
    return [
        (0, "element", 1, 1),
        (1, "property", "Foo", 2),
        (2, "internal", "build", 3),
        (3, "hidden", 0, 4),
    ]


@pytest.fixture
def memory_fs():
    """Workspace with a manifest and the sources of package:foo."""
    return MemoryFileSystem({
        MANIFEST_PATH: make_manifest({"foo": "../", "ext": "file:///cache/ext-1.0.0/"}),
        "/ws/lib/bar.dart": (
            "import 'package:foo/src/baz.dart';\n"
            "\n"
            "// class Gone extends Object {}\n"
            "class Foo extends Baz {\n"
            "  void build() {}\n"
            "}\n"
        ),
        "/ws/lib/src/baz.dart": "abstract class Baz {\n}\n",
        "/cache/ext-1.0.0/lib/ext.dart": "class Ext {\n}\n",
    })
