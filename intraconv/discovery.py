"""Find crates and Rust sources to convert.

A directory holding a ``Cargo.toml`` is converted crate by crate: the package
name (with ``-`` turned into ``_``) becomes the crate name recognized in
links, and the sources are taken from the package's ``src`` directory.
Workspace manifests list their members with glob patterns.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
from pathlib import Path

import tomlkit

from .config.models import InvalidCrateNameError, normalize_crate_name

logger = logging.getLogger(__name__)

MANIFEST_NAME = "Cargo.toml"


class ManifestError(ValueError):
    """Raised when a ``Cargo.toml`` file cannot be read."""


@dc.dataclass(frozen=True, slots=True)
class CrateSources:
    """Crate name and the directory or file holding its sources."""

    krate: str
    path: Path


def _load_manifest(path: Path) -> dict[str, object]:
    try:
        return tomlkit.parse(path.read_text(encoding="utf-8")).unwrap()
    except tomlkit.exceptions.ParseError as exc:
        msg = f"Manifest '{path}' is not valid TOML: {exc}"
        raise ManifestError(msg) from exc


def _package_sources(manifest_path: Path, manifest: dict[str, object]) -> CrateSources | None:
    package = manifest.get("package")
    if not isinstance(package, dict) or "name" not in package:
        return None
    src = manifest_path.parent / "src"
    if not src.is_dir():
        logger.debug("skipping %s: no src directory", manifest_path)
        return None
    try:
        krate = normalize_crate_name(str(package["name"]))
    except InvalidCrateNameError:
        logger.warning("skipping %s: package name is not usable", manifest_path)
        return None
    return CrateSources(krate=krate, path=src)


def find_crates(root: Path) -> list[CrateSources]:
    """Return the crates described by ``root/Cargo.toml``.

    Parameters
    ----------
    root : Path
        Directory holding the manifest.

    Returns
    -------
    list[CrateSources]
        The package of the manifest, if any, followed by the packages of its
        workspace members, in manifest order.

    Raises
    ------
    FileNotFoundError
        If ``root`` has no ``Cargo.toml``.
    ManifestError
        If a manifest is not valid TOML.
    """
    manifest_path = root / MANIFEST_NAME
    if not manifest_path.is_file():
        msg = f"No {MANIFEST_NAME} found in '{root}'; pass the files explicitly."
        raise FileNotFoundError(msg)

    manifest = _load_manifest(manifest_path)
    crates: list[CrateSources] = []
    if (own := _package_sources(manifest_path, manifest)) is not None:
        crates.append(own)

    workspace = manifest.get("workspace")
    members = workspace.get("members", []) if isinstance(workspace, dict) else []
    seen = {crate.path for crate in crates}
    for pattern in members:
        for member in sorted(root.glob(str(pattern))):
            member_manifest = member / MANIFEST_NAME
            if not member_manifest.is_file():
                continue
            sources = _package_sources(member_manifest, _load_manifest(member_manifest))
            if sources is not None and sources.path not in seen:
                seen.add(sources.path)
                crates.append(sources)
    return crates


def resolve_targets(paths: cabc.Sequence[Path], default_krate: str) -> list[CrateSources]:
    """Pair each path argument with the crate name to use for it.

    Directories with a manifest contribute their crates; other directories
    and files use ``default_krate``. No paths at all means the current
    directory's manifest.
    """
    if not paths:
        return find_crates(Path.cwd())

    targets: list[CrateSources] = []
    for path in paths:
        if path.is_dir() and (path / MANIFEST_NAME).is_file():
            crates = find_crates(path)
            if crates:
                targets.extend(crates)
                continue
        targets.append(CrateSources(krate=default_krate, path=path))
    return targets


def rust_files(path: Path) -> list[Path]:
    """Return ``path`` itself or every ``.rs`` file below it, sorted."""
    if path.is_dir():
        return sorted(candidate for candidate in path.rglob("*.rs") if candidate.is_file())
    return [path]


__all__ = [
    "MANIFEST_NAME",
    "CrateSources",
    "ManifestError",
    "find_crates",
    "resolve_targets",
    "rust_files",
]
