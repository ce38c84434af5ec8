"""Logging set-up shared by the hayride workspace crates."""

from __future__ import annotations

import logging
import os
import sys
import threading
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

DEPENDENCY_LEVEL = logging.WARNING
MANIFEST_DIR_ENV = "CARGO_MANIFEST_DIR"

_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE,
}
_FORMAT = "[%(asctime)s %(levelname)s %(name)s] %(message)s"


@dataclass
class _LoggerState:
    log_path: str | None = None
    handler: logging.Handler | None = None
    configured: list[str] = field(default_factory=list)


_state = _LoggerState()
_lock = threading.Lock()


def set_log_path(path: str | os.PathLike[str]) -> None:
    """Set, once, the file that every later logger set-up writes to."""
    with _lock:
        if _state.log_path is not None:
            raise RuntimeError("Log path has already been set")
        _state.log_path = os.fspath(path)


def parse_level(name: str) -> int:
    """Map a level name to a logging level; unknown names give INFO."""
    return _LEVELS.get(name.lower(), logging.INFO)


def workspace_crates(manifest_dir: str | os.PathLike[str]) -> list[str]:
    """Module names of the workspace members listed in a manifest.

    Each member's own manifest supplies its package name; when it cannot
    be read the member directory's last segment is used. Hyphens become
    underscores. Returns an empty list when the root manifest is unusable.
    """
    root = Path(manifest_dir)
    manifest = _read_toml(root / "Cargo.toml")
    if manifest is None:
        return []
    workspace = manifest.get("workspace")
    if not isinstance(workspace, dict):
        return []
    members = workspace.get("members")
    if not isinstance(members, list):
        return []

    names: list[str] = []
    for member in members:
        if not isinstance(member, str):
            continue
        package_name = _package_name(root / member / "Cargo.toml")
        if package_name is None:
            package_name = member.split("/")[-1]
        names.append(package_name.replace("-", "_"))
    return names


def init_logger(log_level: str) -> None:
    """Install or replace the hayride log handler.

    Workspace crates log at *log_level*; everything else at WARNING.
    Output goes to the file given to :func:`set_log_path`, or to stderr.
    """
    level = parse_level(log_level)
    crates = workspace_crates(os.environ.get(MANIFEST_DIR_ENV, "."))

    with _lock:
        handler = _make_handler(_state.log_path)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(_FORMAT))

        root = logging.getLogger()
        root.setLevel(DEPENDENCY_LEVEL)
        for name in _state.configured:
            if name not in crates:
                logging.getLogger(name).setLevel(logging.NOTSET)
        for name in crates:
            logging.getLogger(name).setLevel(level)
        _state.configured = crates

        if _state.handler is not None:
            root.removeHandler(_state.handler)
            _state.handler.close()
        root.addHandler(handler)
        _state.handler = handler


def _make_handler(log_path: str | None) -> logging.Handler:
    if log_path is None:
        return logging.StreamHandler(sys.stderr)
    Path(log_path).parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(log_path, mode="a", encoding="utf-8")


def _read_toml(path: Path) -> dict[str, Any] | None:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError, UnicodeDecodeError):
        return None


def _package_name(manifest_path: Path) -> str | None:
    manifest = _read_toml(manifest_path)
    if manifest is None:
        return None
    package = manifest.get("package")
    if not isinstance(package, dict):
        return None
    name = package.get("name")
    return name if isinstance(name, str) else None


def _shutdown() -> None:
    """Remove the installed handler and forget all settings."""
    with _lock:
        if _state.handler is not None:
            logging.getLogger().removeHandler(_state.handler)
            _state.handler.close()
        for name in _state.configured:
            logging.getLogger(name).setLevel(logging.NOTSET)
        _state.log_path = None
        _state.handler = None
        _state.configured = []