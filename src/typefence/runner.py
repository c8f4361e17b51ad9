"""
Forbidden-type check runner.

decode snapshot -> build program info -> for each forbidden type:
parse, validate against its declaring source, look it up.

Per-spec problems become findings; only structural input errors
(MalformedSnapshot, MalformedManifest, MissingManifest, OSError) escape.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from typefence.errors import MalformedSpec, MissingManifest
from typefence.fs import FileSystem, LocalFileSystem, PathLike
from typefence.manifest import PACKAGE_SCHEME, PackageManifest, load_package_manifest
from typefence.program_info import ProgramInfo, build_program_info
from typefence.reporting import (
    FORBIDDEN_TYPE_PRESENT,
    MALFORMED_SPEC,
    UNKNOWN_SCHEME,
    UNRESOLVABLE_TYPE,
    Finding,
    Reporter,
)
from typefence.snapshot import decode_snapshot
from typefence.validation import (
    DEFAULT_COMMENT_MARKERS,
    DeclarationStatus,
    ForbiddenTypeSpec,
    check_declaration,
    unique_specs,
)

logger = logging.getLogger(__name__)


class ForbiddenTypeChecker:
    """
    Checks forbidden-type specs against one program-info tree.

    The manifest is only read when a package: spec needs validating, and
    then only once.
    """

    def __init__(
        self,
        program_info: ProgramInfo,
        manifest_path: Optional[PathLike],
        fs: FileSystem,
        comment_markers: Sequence[str] = DEFAULT_COMMENT_MARKERS,
    ):
        self.program_info = program_info
        self.manifest_path = manifest_path
        self.fs = fs
        self.comment_markers = tuple(comment_markers)
        self._manifest: Optional[PackageManifest] = None

    def manifest_for(self, spec: ForbiddenTypeSpec) -> PackageManifest:
        """Load the manifest on first use."""
        if self._manifest is None:
            if self.manifest_path is None:
                raise MissingManifest(spec.raw)
            self._manifest = load_package_manifest(self.manifest_path, self.fs)
        return self._manifest

    def check(self, raw: str, reporter: Reporter) -> None:
        """Check one spec string, adding any findings to reporter."""
        reporter.checked.append(raw)
        try:
            spec = ForbiddenTypeSpec.parse(raw)
        except MalformedSpec as e:
            reporter.add(Finding(MALFORMED_SPEC, "ERROR", raw, str(e)))
            return

        manifest = self.manifest_for(spec) if spec.locator.startswith(PACKAGE_SCHEME) else None
        declaration = check_declaration(spec, manifest, self.fs, self.comment_markers)

        if declaration.status is DeclarationStatus.UNKNOWN_SCHEME:
            reporter.add(Finding(
                UNKNOWN_SCHEME, "WARN", raw,
                f"Warning: Unable to validate {raw}. Continuing.",
            ))
        elif not declaration.exists:
            evidence = ""
            if declaration.status is DeclarationStatus.MISSING_SOURCE and declaration.source is None:
                evidence = (
                    f"No file found for {spec.locator} - "
                    "forbidden type has moved or been removed."
                )
            elif declaration.status is DeclarationStatus.MISSING_SOURCE:
                evidence = (
                    f"File {declaration.source} does not exist - "
                    "forbidden type has moved or been removed."
                )
            reporter.add(Finding(
                UNRESOLVABLE_TYPE, "WARN", raw,
                f'Forbidden type "{raw}" does not seem to exist.',
                evidence=evidence,
                source=str(declaration.source) if declaration.source else None,
            ))
            return

        node = self.program_info.lookup(spec.lookup_path)
        if node is not None:
            logger.info("Forbidden type %s is reachable (%r)", raw, node)
            reporter.add(Finding(
                FORBIDDEN_TYPE_PRESENT, "ERROR", raw, raw,
                evidence=f"size={node.total_size} count={node.total_count}",
            ))

    def run(self, forbidden_types: Iterable[str]) -> Reporter:
        reporter = Reporter()
        for raw in unique_specs(forbidden_types):
            self.check(raw, reporter)
        return reporter


def run_check(
    snapshot_text: str | bytes,
    forbidden_types: Iterable[str],
    manifest_path: Optional[PathLike],
    fs: Optional[FileSystem] = None,
    comment_markers: Sequence[str] = DEFAULT_COMMENT_MARKERS,
    snapshot_source: str = "<snapshot>",
) -> Reporter:
    """Run the whole check and return a Reporter with findings."""
    fs = fs or LocalFileSystem()
    graph = decode_snapshot(snapshot_text, snapshot_source)
    program_info = build_program_info(graph)
    checker = ForbiddenTypeChecker(program_info, manifest_path, fs, comment_markers)
    reporter = checker.run(forbidden_types)
    logger.info(
        "Checked %d forbidden types: %d errors, %d warnings",
        len(reporter.checked), len(reporter.errors), len(reporter.warnings),
    )
    return reporter
