"""
Tests for package_config.json loading and resolution.
"""

import json
from pathlib import Path

import pytest

from typefence.errors import MalformedManifest
from typefence.manifest import load_package_manifest, parse_package_manifest
from conftest import MANIFEST_PATH


class TestResolve:

    def test_relative_root(self, memory_fs):
        manifest = load_package_manifest(MANIFEST_PATH, memory_fs)
        assert manifest.resolve("package:foo/src/baz.dart") == Path("/ws/lib/src/baz.dart")

    def test_file_uri_root(self, memory_fs):
        manifest = load_package_manifest(MANIFEST_PATH, memory_fs)
        assert manifest.resolve("package:ext/ext.dart") == Path("/cache/ext-1.0.0/lib/ext.dart")

    def test_package_names(self, memory_fs):
        manifest = load_package_manifest(MANIFEST_PATH, memory_fs)
        assert manifest.package_names == ["foo", "ext"]
        assert "foo" in manifest

    @pytest.mark.parametrize("locator", [
        "package:nope/a.dart",
        "package:foo",
        "package:foo/",
        "dart:core",
        "file:///ws/lib/bar.dart",
    ])
    def test_unresolvable(self, memory_fs, locator):
        manifest = load_package_manifest(MANIFEST_PATH, memory_fs)
        assert manifest.resolve(locator) is None

    def test_package_uri_defaults_to_root(self):
        text = json.dumps({"configVersion": 2, "packages": [{"name": "a", "rootUri": "file:///a/"}]})
        manifest = parse_package_manifest(text, "/")
        assert manifest.resolve("package:a/b.dart") == Path("/a/b.dart")


class TestMalformed:

    def test_invalid_json(self):
        with pytest.raises(MalformedManifest):
            parse_package_manifest("{", "/")

    def test_missing_config_version(self):
        with pytest.raises(MalformedManifest):
            parse_package_manifest(json.dumps({"packages": []}), "/")

    def test_package_without_root(self):
        text = json.dumps({"configVersion": 2, "packages": [{"name": "a"}]})
        with pytest.raises(MalformedManifest, match="x.json"):
            parse_package_manifest(text, "/", source="x.json")
