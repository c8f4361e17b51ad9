"""
CLI entry point for typefence.

Usage:
    typefence --snapshot build/snapshot.arm64-v8a.json \
        --package-config .dart_tool/package_config.json \
        --forbidden-type package:flutter/src/widgets/framework.dart::Widget

Exit status is 0 when no forbidden type is reachable, 1 otherwise.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from typefence import __version__
from typefence.config import TypefenceConfig
from typefence.errors import TypefenceError
from typefence.fs import FileSystem, LocalFileSystem
from typefence.runner import run_check

logger = logging.getLogger(__name__)

VERBOSITY_LEVELS = {1: logging.INFO, 2: logging.DEBUG}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="typefence",
        description="Fail the build if forbidden types are reachable in a compiled snapshot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    typefence --snapshot /tmp/snapshot.arm64-v8a.json \\
        --forbidden-type package:flutter/src/widgets/framework.dart::Widget
    typefence --config typefence.yaml --json
""",
    )
    parser.add_argument("--version", action="version", version=f"typefence {__version__}")
    parser.add_argument(
        "--snapshot",
        metavar="PATH",
        help="The V8 snapshot profile file, e.g. /tmp/snapshot.arm64-v8a.json",
    )
    parser.add_argument(
        "--package-config",
        metavar="PATH",
        help="package_config.json mapping packages to sources "
             "(default: .dart_tool/package_config.json)",
    )
    parser.add_argument(
        "--forbidden-type",
        dest="forbidden_types",
        action="append",
        default=[],
        metavar="<package_uri>::<type_name>",
        help='Type to forbid from release compilation, e.g. '
             '"package:flutter/src/widgets/framework.dart::Widget". Repeatable.',
    )
    parser.add_argument("--config", metavar="PATH", help="YAML config file")
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log progress (-v) or debug detail (-vv) to stderr",
    )
    return parser


def _configure_logging(verbose: int, configured_level: str) -> None:
    level = VERBOSITY_LEVELS.get(min(verbose, 2)) if verbose else logging.getLevelName(configured_level)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def _require_file(fs: FileSystem, path: Path, arg_name: str) -> bool:
    if not fs.exists(path):
        print(f"The {arg_name} file at {path} could not be found.", file=sys.stderr)
        return False
    return True


def main(argv: Optional[List[str]] = None, fs: Optional[FileSystem] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    fs = fs or LocalFileSystem()

    config_path = Path(args.config) if args.config else None
    if config_path is not None and not config_path.is_file():
        print(f"The config file at {config_path} could not be found.", file=sys.stderr)
        return 1
    config = TypefenceConfig(config_path)
    _configure_logging(args.verbose, config.log_level)

    snapshot = Path(args.snapshot) if args.snapshot else config.snapshot
    package_config = Path(args.package_config) if args.package_config else config.package_config
    forbidden_types = config.forbidden_types + list(args.forbidden_types)

    if snapshot is None:
        parser.error("no snapshot given, pass --snapshot or set 'snapshot' in the config")
    if not _require_file(fs, snapshot, "snapshot"):
        return 1
    if not _require_file(fs, package_config, "package-config"):
        return 1

    try:
        reporter = run_check(
            fs.read_bytes(snapshot),
            forbidden_types,
            package_config,
            fs=fs,
            comment_markers=config.comment_markers,
            snapshot_source=str(snapshot),
        )
    except (TypefenceError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(reporter.to_json() if args.json else reporter.render_human())
    return reporter.exit_code


if __name__ == "__main__":
    sys.exit(main())
