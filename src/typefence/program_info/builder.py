"""
Program-Info Builder

Folds a flat SnapshotGraph into a tree keyed by qualified-name segments:

    (root)
      package:foo                      package
        package:foo/src/bar.dart       library
          Foo                          type
            build                      member

Every snapshot node contributes its self_size (and a count of 1) to the
tree node at the end of its path. Nodes whose name cannot be split land
in a separate "unknown" bucket so totals still reconcile with the snapshot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Sequence, Tuple

from typefence.program_info.names import split_qualified_name
from typefence.snapshot.decoder import SnapshotGraph

logger = logging.getLogger(__name__)

UNKNOWN_BUCKET = "@unknown"


@dataclass
class ProgramInfoNode:
    """One segment of a qualified name, with the metrics mapped to it."""
    name: str
    path: Tuple[str, ...] = ()
    children: Dict[str, "ProgramInfoNode"] = field(default_factory=dict)
    size: int = 0
    count: int = 0

    def child(self, name: str) -> Optional["ProgramInfoNode"]:
        return self.children.get(name)

    def get_or_create(self, name: str) -> "ProgramInfoNode":
        node = self.children.get(name)
        if node is None:
            node = ProgramInfoNode(name=name, path=self.path + (name,))
            self.children[name] = node
        return node

    @property
    def total_size(self) -> int:
        """Own size plus the size of every descendant."""
        return self.size + sum(c.total_size for c in self.children.values())

    @property
    def total_count(self) -> int:
        return self.count + sum(c.total_count for c in self.children.values())

    def walk(self) -> Iterator["ProgramInfoNode"]:
        """Yield this node and all descendants, parents first."""
        yield self
        for c in self.children.values():
            yield from c.walk()

    def __repr__(self):
        label = "::".join(self.path) if self.path else "<root>"
        return f"ProgramInfoNode({label}, size={self.size}, count={self.count}, children={len(self.children)})"


@dataclass
class ProgramInfo:
    """
    Hierarchical view of everything reachable in a snapshot.

    Treated as read-only once build_program_info returns it.
    """
    root: ProgramInfoNode = field(default_factory=lambda: ProgramInfoNode(name=""))
    unknown: ProgramInfoNode = field(default_factory=lambda: ProgramInfoNode(name=UNKNOWN_BUCKET))

    @property
    def total_size(self) -> int:
        return self.root.total_size + self.unknown.total_size

    @property
    def total_count(self) -> int:
        return self.root.total_count + self.unknown.total_count

    def lookup(self, path: Sequence[str]) -> Optional[ProgramInfoNode]:
        """
        Return the node at path, or None if any segment is missing.

        Exact match per level, no backtracking. The unknown bucket is not
        reachable from the root and can never be returned.
        """
        if not path:
            raise ValueError("lookup path must contain at least one segment")
        node = self.root
        for segment in path:
            node = node.child(segment)
            if node is None:
                return None
        return node

    def __contains__(self, path: Sequence[str]) -> bool:
        return self.lookup(path) is not None


def build_program_info(graph: SnapshotGraph) -> ProgramInfo:
    """Build the program-info tree for a decoded snapshot."""
    info = ProgramInfo()
    unknown_names = 0

    for node in graph.nodes:
        segments = split_qualified_name(node.name)
        if segments is None:
            target = info.unknown
            unknown_names += 1
        else:
            target = info.root
            for segment in segments:
                target = target.get_or_create(segment)
        target.size += node.self_size
        target.count += 1

    logger.info(
        "Built program info: %d packages, %d nodes mapped, %d unknown",
        len(info.root.children),
        len(graph.nodes) - unknown_names,
        unknown_names,
    )
    return info
