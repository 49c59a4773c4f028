"""Typed dataclasses describing conversion options and ignored links."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from intraconv._constants import DEFAULT_KRATE, RUST_IDENTIFIER_RE


class InvalidCrateNameError(ValueError):
    """Raised when a crate name is not a valid Rust identifier."""


class IgnoreConfigError(ValueError):
    """Raised when the ignore file is malformed."""


def is_identifier(name: str) -> bool:
    """Return True when ``name`` is an ASCII Rust identifier."""
    return RUST_IDENTIFIER_RE.match(name) is not None


def validate_crate_name(name: str) -> str:
    """Return ``name`` unchanged or raise when it is not an identifier.

    Raises
    ------
    InvalidCrateNameError
        If ``name`` does not match ``[a-zA-Z_][a-zA-Z0-9_]*``.
    """
    if not is_identifier(name):
        msg = f"The passed crate identifier '{name}' is not valid."
        raise InvalidCrateNameError(msg)
    return name


def normalize_crate_name(name: str) -> str:
    """Turn a package name such as ``my-crate`` into ``my_crate``."""
    return validate_crate_name(name.replace("-", "_"))


@dc.dataclass(frozen=True, slots=True)
class ConversionOptions:
    """Options shared by every file of a conversion run.

    Attributes
    ----------
    krate : str
        Name of the crate being converted. Path segments equal to it render
        as ``crate``.
    disambiguate : bool
        Emit prefix disambiguators such as ``type@`` or ``mod@``.
    favored_links : bool
        Reduce ``docs.rs`` and ``doc.rust-lang.org`` URLs to intra-doc links.
    """

    krate: str = DEFAULT_KRATE
    disambiguate: bool = False
    favored_links: bool = True

    def __post_init__(self) -> None:
        validate_crate_name(self.krate)

    def with_krate(self, krate: str) -> ConversionOptions:
        return dc.replace(self, krate=krate)


LinkTable = dict[str, frozenset[str]]


@dc.dataclass(slots=True)
class IgnoreConfig:
    """Links that must be left untouched, globally or for given files."""

    globals: LinkTable = dc.field(default_factory=dict)
    per_file: dict[Path, LinkTable] = dc.field(default_factory=dict)

    def is_ignored(self, file: Path, name: str, target: str) -> bool:
        """Return True when the ``[name]: target`` link must not be rewritten.

        Parameters
        ----------
        file : Path
            File the link was found in.
        name : str
            Raw link text between the brackets, backticks included.
        target : str
            Link target as written in the file.
        """
        if _contains(self.globals, name, target):
            return True
        return any(
            _path_ends_with(file, configured) and _contains(links, name, target)
            for configured, links in self.per_file.items()
        )


def _contains(table: LinkTable, name: str, target: str) -> bool:
    return target in table.get(name, frozenset())


def _path_ends_with(file: Path, suffix: Path) -> bool:
    if not suffix.parts or len(suffix.parts) > len(file.parts):
        return False
    return file.parts[-len(suffix.parts) :] == suffix.parts


__all__ = [
    "ConversionOptions",
    "IgnoreConfig",
    "IgnoreConfigError",
    "InvalidCrateNameError",
    "LinkTable",
    "is_identifier",
    "normalize_crate_name",
    "validate_crate_name",
]
