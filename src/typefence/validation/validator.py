"""
Forbidden-type existence check.

The snapshot cannot tell "type was never reached" from "type no longer
exists", so a spec that silently stopped matching anything would pass the
gate forever. This module cross-checks that the declaring library still
mentions the type.

The check is a heuristic, not a parser:
- lines whose stripped text starts with a comment marker are skipped
  (block comments and trailing comments are not recognised)
- the type name must have whitespace on both sides, so composed names
  such as ``Foo&Bar`` or ``class Foo{`` are missed
- any mention counts, declaration or not
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence

from typefence.fs import FileSystem
from typefence.manifest import PACKAGE_SCHEME, PackageManifest
from typefence.validation.specs import ForbiddenTypeSpec

logger = logging.getLogger(__name__)

DEFAULT_COMMENT_MARKERS = ("//",)


class DeclarationStatus(Enum):
    """Outcome of checking a spec against its declaring source."""
    DECLARED = "declared"
    UNKNOWN_SCHEME = "unknown_scheme"      # not validated, treated as existing
    MISSING_SOURCE = "missing_source"      # manifest gave no file, or file absent
    NOT_DECLARED = "not_declared"          # file found, type name not in it


@dataclass(frozen=True)
class DeclarationCheck:
    status: DeclarationStatus
    source: Optional[Path] = None
    line: int = 0

    @property
    def exists(self) -> bool:
        return self.status in (DeclarationStatus.DECLARED, DeclarationStatus.UNKNOWN_SCHEME)


def line_mentions_type(line: str, type_name: str,
                       comment_markers: Sequence[str] = DEFAULT_COMMENT_MARKERS) -> bool:
    """True if line mentions type_name with whitespace on both sides."""
    if line.strip().startswith(tuple(comment_markers)):
        return False
    return re.search(rf"\s{re.escape(type_name)}\s", line) is not None


def find_type_mention(text: str, type_name: str,
                      comment_markers: Sequence[str] = DEFAULT_COMMENT_MARKERS) -> int:
    """Return the 1-based line number of the first mention, or 0."""
    for line_no, line in enumerate(text.split("\n"), start=1):
        if line_mentions_type(line, type_name, comment_markers):
            return line_no
    return 0


def check_declaration(spec: ForbiddenTypeSpec, manifest: Optional[PackageManifest], fs: FileSystem,
                      comment_markers: Sequence[str] = DEFAULT_COMMENT_MARKERS) -> DeclarationCheck:
    """
    Check whether spec still names a type declared in its library.

    Only package: locators can be resolved; any other scheme is reported
    as UNKNOWN_SCHEME and counts as existing.
    """
    if not spec.locator.startswith(PACKAGE_SCHEME):
        logger.info("Unable to validate %s, scheme %r is not resolvable", spec, spec.scheme)
        return DeclarationCheck(DeclarationStatus.UNKNOWN_SCHEME)
    if manifest is None:
        raise ValueError(f"a package manifest is required to validate {spec}")

    source = manifest.resolve(spec.locator)
    if source is None or not fs.exists(source):
        logger.info("Source for %s not found (resolved to %s)", spec, source)
        return DeclarationCheck(DeclarationStatus.MISSING_SOURCE, source)

    line_no = find_type_mention(fs.read_text(source), spec.type_name, comment_markers)
    if not line_no:
        logger.info("%s does not mention %s", source, spec.type_name)
        return DeclarationCheck(DeclarationStatus.NOT_DECLARED, source)

    logger.debug("%s mentions %s at line %d", source, spec.type_name, line_no)
    return DeclarationCheck(DeclarationStatus.DECLARED, source, line_no)


def validate_type(spec: ForbiddenTypeSpec, manifest: Optional[PackageManifest], fs: FileSystem,
                  comment_markers: Sequence[str] = DEFAULT_COMMENT_MARKERS) -> bool:
    """Boolean form of check_declaration."""
    return check_declaration(spec, manifest, fs, comment_markers).exists
