"""Locations of the hayride home directory and of morphs in its registry."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import semver

HAYRIDE_DIR_NAME = ".hayride"


def default_hayride_dir() -> Path:
    """Return the hayride home directory.

    On Windows it lives in the roaming application data directory,
    elsewhere in the user's home directory.
    """
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if not appdata:
            raise RuntimeError("Could not find local data directory")
        base = Path(appdata)
    else:
        try:
            base = Path.home()
        except (RuntimeError, KeyError) as exc:
            raise RuntimeError("Could not find home directory") from exc
    return base / HAYRIDE_DIR_NAME


def parse_identifier(text: str) -> tuple[str, str, str | None] | None:
    """Split ``package:name@version`` into its parts.

    The version is optional. Returns ``None`` when there is no ``:``.
    """
    package, sep, rest = text.partition(":")
    if not sep:
        return None
    name, at, version = rest.partition("@")
    return package, name, (version if at else None)


def find_morph_path(registry_path: str | os.PathLike[str], identifier: str) -> Path:
    """Find the wasm file for ``package:name@version`` in a registry.

    Without a version, the directory with the highest semantic version
    under the package is used. The returned path is absolute and exists.
    """
    parsed = parse_identifier(identifier)
    if parsed is None:
        raise ValueError(
            f"Invalid morph identifier: [{identifier}] "
            "expected format: <package>:<name>@<version>"
        )
    package, name, version = parsed

    path = Path(registry_path) / package
    if version is not None:
        path = path / version
    else:
        path = path / _latest_version(path, package)

    return (path / f"{name}.wasm").resolve(strict=True)


def _latest_version(package_dir: Path, package: str) -> str:
    """Name of the subdirectory of *package_dir* with the highest version."""
    candidates: list[tuple[semver.Version, str]] = []
    with os.scandir(package_dir) as entries:
        for entry in entries:
            try:
                if not entry.is_dir(follow_symlinks=False):
                    continue
            except OSError:
                continue
            try:
                version = semver.Version.parse(entry.name)
            except ValueError:
                continue
            candidates.append((version, entry.name))

    if not candidates:
        raise LookupError(f"No versions found for package: {package}")
    return max(candidates, key=lambda candidate: candidate[0])[1]