"""
Package manifest (package_config.json)

Maps package names to on-disk source roots so a locator such as
``package:foo/src/bar.dart`` can be turned into a file path:

    {
        "configVersion": 2,
        "packages": [
            {"name": "foo", "rootUri": "../foo", "packageUri": "lib/", "languageVersion": "3.0"},
            {"name": "bar", "rootUri": "file:///home/me/.pub-cache/bar-1.0.0/", "packageUri": "lib/"}
        ]
    }

Relative rootUri values are resolved against the directory holding the
manifest file.
"""

from __future__ import annotations

import logging
import os.path
from pathlib import Path, PurePath
from typing import Dict, List, Optional
from urllib.parse import urlparse
from urllib.request import url2pathname

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from typefence.errors import MalformedManifest
from typefence.fs import FileSystem, PathLike

logger = logging.getLogger(__name__)

PACKAGE_SCHEME = "package:"


class PackageEntry(BaseModel):
    """
    One package in the manifest.

    Attributes:
        name: Package name as used in package: URIs
        root_uri: Package root, absolute file: URI or relative to the manifest
        package_uri: Directory holding package: URI targets, relative to root_uri
        language_version: Language version, informational only
    """
    model_config = ConfigDict(populate_by_name=True)

    name: str
    root_uri: str = Field(alias="rootUri")
    package_uri: str = Field(default="", alias="packageUri")
    language_version: Optional[str] = Field(default=None, alias="languageVersion")


class PackageConfig(BaseModel):
    """The package_config.json document."""
    model_config = ConfigDict(populate_by_name=True)

    config_version: int = Field(alias="configVersion")
    packages: List[PackageEntry] = Field(default_factory=list)


def _uri_to_path(uri: str, base_dir: PurePath) -> str:
    parsed = urlparse(uri)
    if parsed.scheme == "file":
        return url2pathname(parsed.path)
    return os.path.join(str(base_dir), url2pathname(uri))


class PackageManifest:
    """Resolves package: locators to source files."""

    def __init__(self, config: PackageConfig, base_dir: PathLike = "."):
        self.config = config
        self.base_dir = PurePath(base_dir)
        self._packages: Dict[str, PackageEntry] = {p.name: p for p in config.packages}

    @property
    def package_names(self) -> List[str]:
        return list(self._packages)

    def package_root(self, name: str) -> Optional[Path]:
        """Directory that package:<name>/ URIs resolve into."""
        entry = self._packages.get(name)
        if entry is None:
            return None
        root = _uri_to_path(entry.root_uri, self.base_dir)
        return Path(os.path.normpath(os.path.join(root, entry.package_uri)))

    def resolve(self, locator: str) -> Optional[Path]:
        """
        Resolve ``package:<name>/<path>`` to a file location.

        Returns None for other schemes, unknown packages, or a locator with
        no path after the package name.
        """
        if not locator.startswith(PACKAGE_SCHEME):
            return None
        name, _, rel = locator[len(PACKAGE_SCHEME):].partition("/")
        if not name or not rel:
            return None
        root = self.package_root(name)
        if root is None:
            logger.debug("Package %s is not in the manifest", name)
            return None
        return Path(os.path.normpath(os.path.join(str(root), rel)))

    def __contains__(self, name: str) -> bool:
        return name in self._packages

    def __repr__(self):
        return f"PackageManifest({len(self._packages)} packages, base={self.base_dir})"


def parse_package_manifest(text: str | bytes, base_dir: PathLike = ".", source: str = "<manifest>") -> PackageManifest:
    """Parse manifest text. Raises MalformedManifest on bad JSON or schema."""
    try:
        config = PackageConfig.model_validate_json(text)
    except ValidationError as e:
        raise MalformedManifest(str(e), source) from e
    return PackageManifest(config, base_dir)


def load_package_manifest(path: PathLike, fs: FileSystem) -> PackageManifest:
    """Read and parse the manifest at path."""
    manifest = parse_package_manifest(fs.read_text(path), PurePath(path).parent, str(path))
    logger.info("Loaded %r from %s", manifest, path)
    return manifest
