"""
File-system capability.

Everything that touches the disk goes through a ``FileSystem`` so the core
can run against ``MemoryFileSystem`` in tests.
"""

from __future__ import annotations

from pathlib import Path, PurePath
from typing import Dict, Protocol, Union

PathLike = Union[str, PurePath]


class FileSystem(Protocol):
    """Minimal read-only file access used by the checker."""

    def exists(self, path: PathLike) -> bool:
        ...

    def read_text(self, path: PathLike) -> str:
        ...

    def read_bytes(self, path: PathLike) -> bytes:
        ...


class LocalFileSystem:
    """The real file system."""

    def exists(self, path: PathLike) -> bool:
        return Path(path).is_file()

    def read_text(self, path: PathLike) -> str:
        return Path(path).read_text(encoding="utf-8", errors="replace")

    def read_bytes(self, path: PathLike) -> bytes:
        return Path(path).read_bytes()

    def __repr__(self) -> str:
        return "LocalFileSystem()"


class MemoryFileSystem:
    """
    In-memory file system.

    Usage:
        fs = MemoryFileSystem({"/pkg/lib/a.dart": "class A {}"})
        fs.read_text("/pkg/lib/a.dart")
    """

    def __init__(self, files: Dict[PathLike, str] | None = None):
        self._files: Dict[str, str] = {}
        for path, text in (files or {}).items():
            self.write_text(path, text)

    @staticmethod
    def _key(path: PathLike) -> str:
        return PurePath(path).as_posix()

    def write_text(self, path: PathLike, text: str) -> None:
        self._files[self._key(path)] = text

    def exists(self, path: PathLike) -> bool:
        return self._key(path) in self._files

    def read_text(self, path: PathLike) -> str:
        try:
            return self._files[self._key(path)]
        except KeyError:
            raise FileNotFoundError(str(path)) from None

    def read_bytes(self, path: PathLike) -> bytes:
        return self.read_text(path).encode("utf-8")

    def __repr__(self) -> str:
        return f"MemoryFileSystem({len(self._files)} files)"
