"""
Tests for YAML configuration and environment overrides.
"""

from pathlib import Path

import pytest

from typefence.config import TypefenceConfig


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "typefence.yaml"
    path.write_text(
        "snapshot: build/snapshot.json\n"
        "package_config: custom/package_config.json\n"
        "forbidden_types:\n"
        "  - package:foo/bar.dart::Foo\n"
        "comment_markers: '#'\n"
        "log_level: info\n",
        encoding="utf-8",
    )
    return path


class TestTypefenceConfig:

    def test_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("typefence.config.CONFIG_SEARCH_PATHS", [tmp_path / "typefence.yaml"])
        config = TypefenceConfig(environ={})
        assert config.config_path is None
        assert config.snapshot is None
        assert config.package_config == Path(".dart_tool") / "package_config.json"
        assert config.forbidden_types == []
        assert config.comment_markers == ["//"]
        assert config.log_level == "WARNING"

    def test_file(self, config_file):
        config = TypefenceConfig(config_file, environ={})
        assert config.config_path == config_file
        assert config.snapshot == Path("build/snapshot.json")
        assert config.package_config == Path("custom/package_config.json")
        assert config.forbidden_types == ["package:foo/bar.dart::Foo"]
        assert config.comment_markers == ["#"]
        assert config.log_level == "INFO"

    def test_env_overrides_file(self, config_file):
        config = TypefenceConfig(config_file, environ={
            "TYPEFENCE_SNAPSHOT": "env.json",
            "TYPEFENCE_LOG_LEVEL": "debug",
        })
        assert config.snapshot == Path("env.json")
        assert config.log_level == "DEBUG"

    def test_invalid_yaml_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("forbidden_types: [unclosed\n", encoding="utf-8")
        config = TypefenceConfig(path, environ={})
        assert config.config_path is None
        assert config.forbidden_types == []

    def test_non_mapping_ignored(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        assert TypefenceConfig(path, environ={}).config_path is None

    def test_to_dict(self, config_file):
        data = TypefenceConfig(config_file, environ={}).to_dict()
        assert data["config_file"] == str(config_file)
        assert data["forbidden_types"] == ["package:foo/bar.dart::Foo"]
