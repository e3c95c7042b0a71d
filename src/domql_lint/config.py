"""
domql-lint configuration.

Settings come from, in increasing priority:
- built-in defaults
- a YAML file (explicit path, $DOMQL_LINT_CONFIG, or .domqllint.yaml/.yml
  in the lint root)
- CLI overrides

Example .domqllint.yaml:

    files:
      - "src/**/*.js"
    ignore:
      - "node_modules/**"
      - "src/vendor/**"
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)


DEFAULT_FILES: tuple[str, ...] = ("**/*.js", "**/*.jsx", "**/*.ts", "**/*.tsx")
DEFAULT_IGNORE: tuple[str, ...] = ("node_modules/**", "dist/**")

CONFIG_ENV_VAR = "DOMQL_LINT_CONFIG"
CONFIG_FILENAMES: tuple[str, ...] = (".domqllint.yaml", ".domqllint.yml")

_LIST_KEYS = ("files", "ignore")
_KNOWN_KEYS = _LIST_KEYS + ("jobs",)


class ConfigError(Exception):
    """Configuration value of the wrong shape."""


@dataclass
class LintConfig:
    """Runtime configuration for a lint run."""

    root: Path

    # Glob patterns, relative to root unless absolute
    files: tuple[str, ...] = DEFAULT_FILES
    ignore: tuple[str, ...] = DEFAULT_IGNORE

    # Worker processes for parse-and-validate (1 = sequential)
    jobs: int = 1

    # Output settings
    json_output: bool = False

    # Where file settings came from, if anywhere
    config_path: Optional[Path] = field(default=None, compare=False)


def split_patterns(value: str) -> tuple[str, ...]:
    """Split a comma-separated CLI pattern list, dropping empty entries."""
    return tuple(p.strip() for p in value.split(",") if p.strip())


def _as_patterns(key: str, value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return tuple(value)
    raise ConfigError(f"'{key}' must be a string or a list of strings, got {value!r}")


def _as_jobs(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"'jobs' must be a positive integer, got {value!r}")
    return value


def find_config_file(root: Path, explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Locate the config file to use, if any."""
    if explicit_path is not None:
        return explicit_path
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    for name in CONFIG_FILENAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def read_config_file(path: Path) -> dict[str, Any]:
    """
    Load raw settings from a YAML file.

    Missing or malformed files are logged and treated as empty.
    """
    if not path.exists():
        logger.warning("Config file not found: %s", path)
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config from %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level must be a mapping", path)
        return {}
    return data


def apply_settings(cfg: LintConfig, settings: dict[str, Any]) -> LintConfig:
    """Return a copy of cfg with validated settings applied."""
    updates: dict[str, Any] = {}
    for key, value in settings.items():
        if key not in _KNOWN_KEYS:
            logger.warning("Unknown config key ignored: %s", key)
            continue
        if value is None:
            continue
        if key in _LIST_KEYS:
            updates[key] = _as_patterns(key, value)
        elif key == "jobs":
            updates[key] = _as_jobs(value)
    return replace(cfg, **updates)


def load_config(
    root: Path | str = ".",
    config_path: Optional[Path | str] = None,
    **overrides: Any,
) -> LintConfig:
    """
    Build a LintConfig.

    Args:
        root: Directory patterns are resolved against
        config_path: Explicit YAML file; otherwise env var / root lookup
        **overrides: files, ignore, jobs, json_output; None values are skipped

    Raises:
        ConfigError: a setting has the wrong type
    """
    root = Path(root).resolve()
    cfg = LintConfig(root=root)

    path = find_config_file(root, Path(config_path) if config_path else None)
    if path is not None:
        settings = read_config_file(path)
        if settings:
            cfg = apply_settings(cfg, settings)
            cfg = replace(cfg, config_path=path)
            logger.debug("Loaded config from %s", path)

    cli_settings = {k: v for k, v in overrides.items() if v is not None and k != "json_output"}
    cfg = apply_settings(cfg, cli_settings)
    if overrides.get("json_output") is not None:
        cfg = replace(cfg, json_output=bool(overrides["json_output"]))
    return cfg
