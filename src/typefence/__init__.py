"""
typefence - Forbidden type gate for compiled snapshots

Checks that a compiled program's reachable-code snapshot contains none of a
list of disallowed types.
"""

__version__ = "0.1.0"

from typefence.program_info import ProgramInfo, ProgramInfoNode, build_program_info
from typefence.runner import run_check
from typefence.snapshot import decode_snapshot
