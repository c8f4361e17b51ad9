"""
typefence.snapshot - Heap snapshot decoding

Turns a V8-style heap snapshot export into an immutable node/edge graph.
"""

from typefence.snapshot.decoder import (
    SnapshotEdge,
    SnapshotGraph,
    SnapshotNode,
    decode_snapshot,
)
from typefence.errors import MalformedSnapshot

__all__ = [
    "SnapshotEdge",
    "SnapshotGraph",
    "SnapshotNode",
    "decode_snapshot",
    "MalformedSnapshot",
]
