"""
typefence.program_info - Program-info tree

Hierarchical package -> library -> type -> member model built from a
decoded snapshot, with exact path lookup.
"""

from typefence.program_info.builder import (
    UNKNOWN_BUCKET,
    ProgramInfo,
    ProgramInfoNode,
    build_program_info,
)
from typefence.program_info.names import package_of, split_qualified_name

__all__ = [
    "UNKNOWN_BUCKET",
    "ProgramInfo",
    "ProgramInfoNode",
    "build_program_info",
    "package_of",
    "split_qualified_name",
]
