"""Analyzer settings, read from a YAML file.

Expected keys in imported_config.yaml (all optional):
  module_extensions: [".js", ".jsx", ".ts", ".tsx"]
  module_ignores: ["*.d.ts", "node_modules/*", "*/node_modules/*"]
  resolve_dirs: ["app", "packages"]
  resolve_extensions: ["js", "jsx", "ts", "tsx", "json"]
  default_patterns: ["**"]
  log_level: "INFO"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config") / "imported_config.yaml"

MODULE_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx")
MODULE_IGNORES = ("*.d.ts", "node_modules/*", "*/node_modules/*")
RESOLVE_DIRS = ("app", "packages")
# Order matters: earlier extensions win when several candidates exist.
RESOLVE_EXTENSIONS = ("js", "jsx", "ts", "tsx", "json")
DEFAULT_PATTERNS = ("**",)


@dataclass(frozen=True)
class AnalyzerConfig:
    module_extensions: Tuple[str, ...] = MODULE_EXTENSIONS
    module_ignores: Tuple[str, ...] = MODULE_IGNORES
    resolve_dirs: Tuple[str, ...] = RESOLVE_DIRS
    resolve_extensions: Tuple[str, ...] = RESOLVE_EXTENSIONS
    default_patterns: Tuple[str, ...] = DEFAULT_PATTERNS
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalyzerConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))

        values: Dict[str, Any] = {}
        for key in known - {"log_level"}:
            if key in data:
                values[key] = _string_tuple(key, data[key])

        if "module_extensions" in values:
            values["module_extensions"] = tuple(
                ext if ext.startswith(".") else f".{ext}" for ext in values["module_extensions"]
            )
        if "resolve_extensions" in values:
            values["resolve_extensions"] = tuple(ext.lstrip(".") for ext in values["resolve_extensions"])

        if "log_level" in data:
            level = data["log_level"]
            if not isinstance(level, str) or not isinstance(logging.getLevelName(level.upper()), int):
                raise ConfigError(f"log_level must be a logging level name, got {level!r}")
            values["log_level"] = level.upper()

        return cls(**values)

    @classmethod
    def from_yaml(cls, path: Optional[Path] = None) -> "AnalyzerConfig":
        """Load settings from ``path``; a missing file yields the defaults."""
        config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.debug("No config at %s, using defaults", config_path)
            return cls()
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{config_path} must contain a mapping, got {type(data).__name__}")
        return cls.from_dict(data)


def _string_tuple(key: str, value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) and v for v in value):
        raise ConfigError(f"{key} must be a list of non-empty strings, got {value!r}")
    return tuple(value)
