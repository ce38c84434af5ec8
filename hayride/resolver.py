"""Resolution of composition packages from the hayride file system."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from hayride.paths import find_morph_path

_log = logging.getLogger(__name__)

PACKAGE_EXTENSION = "wasm"


@dataclass(frozen=True)
class PackageKey:
    """A package reference: a ``namespace:name`` plus an optional version."""

    name: str
    version: str | None = None

    def __str__(self) -> str:
        if self.version is None:
            return self.name
        return f"{self.name}@{self.version}"


class ResolutionError(Exception):
    """A package referenced by a composition could not be resolved."""

    def __init__(self, message: str, name: str, span: Any = None) -> None:
        super().__init__(message)
        self.name = name
        self.span = span


class UnknownPackageError(ResolutionError):
    """No package exists for a referenced name."""

    def __init__(self, name: str, span: Any = None) -> None:
        super().__init__(f"unknown package `{name}`", name, span)


class PackageResolutionFailure(ResolutionError):
    """A package was found but could not be loaded."""

    def __init__(self, name: str, cause: str, span: Any = None) -> None:
        super().__init__(f"failed to resolve package `{name}`: {cause}", name, span)
        self.cause = cause


def append_extension(path: str | os.PathLike[str], extension: str) -> Path:
    """Append ``.extension`` to *path*, keeping any dots already in its name.

    ``0.0.1`` becomes ``0.0.1.wasm`` rather than ``0.0.wasm``.
    """
    return Path(f"{os.fspath(path)}.{extension}")


class HayridePackageResolver:
    """Loads packages from a directory tree laid out by package name."""

    def __init__(
        self,
        root: str | os.PathLike[str],
        overrides: Mapping[str, str | os.PathLike[str]] | None = None,
        error_on_unknown: bool = False,
    ) -> None:
        self.root = Path(root)
        self.overrides = {name: Path(p) for name, p in (overrides or {}).items()}
        self.error_on_unknown = error_on_unknown

    def _path_for(self, key: PackageKey, span: Any) -> Path:
        override = self.overrides.get(key.name)
        if override is not None and key.version is None:
            if not override.is_file():
                raise PackageResolutionFailure(
                    key.name,
                    f"local path `{override}` for package `{key.name}` does not exist",
                    span,
                )
            return override

        path = self.root.joinpath(*key.name.split(":"))
        if key.version is not None:
            path = path.parent / key.version / path.name
        if not path.is_dir():
            path = append_extension(path, PACKAGE_EXTENSION)
        return path

    def resolve(self, keys: Mapping[PackageKey, Any]) -> dict[PackageKey, bytes]:
        """Load the packages for *keys*, a mapping of key to source span.

        Keys without a package on disk are left out, unless the resolver
        was made with ``error_on_unknown``, in which case they raise.
        """
        packages: dict[PackageKey, bytes] = {}
        for key, span in keys.items():
            path = self._path_for(key, span)

            if not path.is_file():
                _log.debug("package `%s` does not exist at `%s`", key, path)
                if self.error_on_unknown:
                    raise UnknownPackageError(key.name, span)
                continue

            _log.debug("loading package `%s` from `%s`", key, path)
            try:
                packages[key] = path.read_bytes()
            except OSError as exc:
                raise PackageResolutionFailure(
                    key.name, f"failed to read package `{path}`: {exc}", span
                ) from exc
        return packages


class PackageResolver:
    """Resolves every package a composition refers to, or fails."""

    def __init__(
        self,
        directory: str | os.PathLike[str],
        overrides: Mapping[str, str | os.PathLike[str]] | None = None,
    ) -> None:
        self.fs = HayridePackageResolver(directory, overrides, False)

    def resolve(self, keys: Mapping[PackageKey, Any]) -> dict[PackageKey, bytes]:
        """Load all packages for *keys*; raise for the first one missing."""
        packages = self.fs.resolve(keys)
        for key, span in keys.items():
            if key not in packages:
                raise UnknownPackageError(key.name, span)
        return packages


def resolve_morph_path(
    registry_path: str | os.PathLike[str], morph_path: str
) -> Path:
    """Locate a morph by registry identifier, or else as a plain file path.

    Raises FileNotFoundError when neither gives an existing file.
    """
    try:
        return find_morph_path(registry_path, morph_path)
    except (ValueError, LookupError, OSError, RuntimeError):
        pass

    path = Path(morph_path)
    if not path.is_file():
        raise FileNotFoundError(f"morph not found: {morph_path}")
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        _log.error("Failed to canonicalize plug path: %s", exc)
        raise FileNotFoundError(f"morph not found: {morph_path}") from exc