"""
typefence Configuration

Loads configuration from a YAML file, then applies environment variable
overrides. Command-line options are applied on top by the CLI.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)


# Default configuration file locations (checked in order)
CONFIG_SEARCH_PATHS = [
    Path("typefence.yaml"),
    Path.home() / ".typefence" / "config.yaml",
]


DEFAULT_CONFIG: Dict[str, Any] = {
    "snapshot": None,
    "package_config": str(Path(".dart_tool") / "package_config.json"),
    "forbidden_types": [],
    "comment_markers": ["//"],
    "log_level": "WARNING",
}


ENV_OVERRIDES = {
    "TYPEFENCE_SNAPSHOT": "snapshot",
    "TYPEFENCE_PACKAGE_CONFIG": "package_config",
    "TYPEFENCE_LOG_LEVEL": "log_level",
}


class TypefenceConfig:
    """Configuration for a forbidden-type check."""

    def __init__(self, config_path: Optional[Path] = None, environ: Optional[Dict[str, str]] = None):
        self._config: Dict[str, Any] = dict(DEFAULT_CONFIG)
        self._config_path: Optional[Path] = None

        self._load_config(config_path)
        self._apply_env_overrides(os.environ if environ is None else environ)

    def _load_config(self, explicit_path: Optional[Path] = None) -> None:
        """Load configuration from YAML file."""
        search_paths = [explicit_path] if explicit_path else CONFIG_SEARCH_PATHS

        for config_path in search_paths:
            if config_path and config_path.is_file():
                try:
                    with open(config_path, "r", encoding="utf-8") as f:
                        user_config = yaml.safe_load(f) or {}
                except (OSError, yaml.YAMLError) as e:
                    logger.warning("Failed to load config from %s: %s", config_path, e)
                    continue
                if not isinstance(user_config, dict):
                    logger.warning("Ignoring config %s: top level is not a mapping", config_path)
                    continue
                self._config.update(user_config)
                self._config_path = config_path
                return

    def _apply_env_overrides(self, environ) -> None:
        """Apply environment variable overrides."""
        for env_var, config_key in ENV_OVERRIDES.items():
            if env_var in environ:
                self._config[config_key] = environ[env_var]

    @property
    def config_path(self) -> Optional[Path]:
        """Path to loaded config file, or None if using defaults."""
        return self._config_path

    @property
    def snapshot(self) -> Optional[Path]:
        value = self._config.get("snapshot")
        return Path(value) if value else None

    @property
    def package_config(self) -> Path:
        """Path to package_config.json."""
        return Path(self._config.get("package_config") or DEFAULT_CONFIG["package_config"])

    @property
    def forbidden_types(self) -> List[str]:
        value = self._config.get("forbidden_types") or []
        if isinstance(value, str):
            return [value]
        return [str(v) for v in value]

    @property
    def comment_markers(self) -> List[str]:
        value = self._config.get("comment_markers") or DEFAULT_CONFIG["comment_markers"]
        if isinstance(value, str):
            return [value]
        return [str(v) for v in value]

    @property
    def log_level(self) -> str:
        return str(self._config.get("log_level") or "WARNING").upper()

    def to_dict(self) -> Dict[str, Any]:
        """Export current configuration as dict."""
        return {
            "snapshot": str(self.snapshot) if self.snapshot else None,
            "package_config": str(self.package_config),
            "forbidden_types": self.forbidden_types,
            "comment_markers": self.comment_markers,
            "log_level": self.log_level,
            "config_file": str(self._config_path) if self._config_path else None,
        }
