"""
kernel/config.py — Paths, constants and run configuration.

All path constants and settings live here. The optional project file
``benchassert.yaml`` is read with PyYAML::

    targets:
      - benchmarks.string_suite:StringSuite
      - benchmarks.window_suite
    console: auto        # auto | rich | plain
    log_level: INFO      # DEBUG | INFO | WARNING | ERROR
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from domain.errors import ConfigurationError

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

STATE_DIR = ".benchassert"
CONFIG_FILE = "benchassert.yaml"
LOG_FILE = "benchassert.log"

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

CONSOLE_BACKENDS = ("auto", "rich", "plain")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

# CLI exit codes
EXIT_OK = 0
EXIT_ASSERT_FAILED = 1
EXIT_CONFIGURATION = 2

_KNOWN_KEYS = frozenset({"targets", "console", "log_level"})


def state_dir(project_root: Path) -> Path:
    """Return the .benchassert directory path for a project."""
    return project_root / STATE_DIR


def config_file(project_root: Path) -> Path:
    """Return the benchassert.yaml path."""
    return project_root / CONFIG_FILE


def log_file(project_root: Path) -> Path:
    """Return the log file path."""
    return state_dir(project_root) / LOG_FILE


@dataclass(frozen=True)
class RunConfig:
    """Settings read from benchassert.yaml."""

    targets: tuple[str, ...] = ()
    console: str = "auto"
    log_level: str = "INFO"
    source: Path | None = field(default=None, compare=False)


def _parse(data: dict[str, Any], path: Path) -> RunConfig:
    unknown = set(data) - _KNOWN_KEYS
    if unknown:
        msg = f"{path}: unknown key(s) {', '.join(sorted(unknown))}"
        raise ConfigurationError(msg)

    targets = data.get("targets") or []
    if isinstance(targets, str):
        targets = [targets]
    if not isinstance(targets, list) or not all(isinstance(t, str) for t in targets):
        msg = f"{path}: 'targets' must be a list of 'module' or 'module:Class' strings"
        raise ConfigurationError(msg)

    console = str(data.get("console", "auto")).lower()
    if console not in CONSOLE_BACKENDS:
        msg = f"{path}: 'console' must be one of {', '.join(CONSOLE_BACKENDS)}"
        raise ConfigurationError(msg)

    log_level = str(data.get("log_level", "INFO")).upper()
    if log_level not in LOG_LEVELS:
        msg = f"{path}: 'log_level' must be one of {', '.join(LOG_LEVELS)}"
        raise ConfigurationError(msg)

    return RunConfig(targets=tuple(targets), console=console, log_level=log_level, source=path)


def load_config(project_root: Path) -> RunConfig:
    """Load benchassert.yaml from *project_root*, or defaults if absent.

    Raises:
        ConfigurationError: The file is not valid YAML or has bad values.
    """
    path = config_file(project_root)
    if not path.exists():
        return RunConfig()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        msg = f"{path}: invalid YAML ({exc})"
        raise ConfigurationError(msg) from exc
    if data is None:
        return RunConfig(source=path)
    if not isinstance(data, dict):
        msg = f"{path}: expected a mapping at the top level"
        raise ConfigurationError(msg)
    return _parse(data, path)
