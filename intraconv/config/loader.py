"""Load ignore files (TOML or YAML) into :class:`IgnoreConfig`."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import tomlkit
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .models import IgnoreConfig, IgnoreConfigError, LinkTable

GLOBAL_TABLE = "ignore"
YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def load_ignore_config(path: Path) -> IgnoreConfig:
    """Load the file listing links that must never be rewritten.

    Parameters
    ----------
    path : Path
        TOML file, or YAML file when the suffix is ``.yaml``/``.yml``. The
        ``ignore`` table maps link names to the targets ignored everywhere;
        every other table is keyed by a file path and only applies to files
        ending with that path.

    Returns
    -------
    IgnoreConfig
        Parsed configuration. Per-file keys with several components are
        resolved against the directory holding ``path``.

    Raises
    ------
    FileNotFoundError
        If the ignore file does not exist at ``path``.
    IgnoreConfigError
        If the document cannot be parsed or a table has the wrong shape.

    Examples
    --------
    An ignore file in TOML form:

    .. code-block:: toml

        [ignore]
        "`Regex`" = ["struct.Regex.html"]

        ["src/lib.rs"]
        "`downcast_ref`" = ["#method.downcast_ref"]

    >>> from pathlib import Path
    >>> from intraconv.config import load_ignore_config
    >>> config = load_ignore_config(Path("intraconv.toml"))  # doctest: +SKIP
    """
    if not path.exists():
        msg = f"Ignore file '{path}' not found."
        raise FileNotFoundError(msg)

    raw = _read_document(path)
    base_dir = path.resolve().parent

    globals_table: LinkTable = {}
    per_file: dict[Path, LinkTable] = {}
    for key, payload in raw.items():
        table = _build_link_table(str(key), payload)
        if key == GLOBAL_TABLE:
            globals_table = table
            continue
        per_file[_resolve_file_key(str(key), base_dir)] = table

    return IgnoreConfig(globals=globals_table, per_file=per_file)


def _read_document(path: Path) -> dict[str, typ.Any]:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in YAML_SUFFIXES:
        loader = YAML(typ="safe")
        loader.version = (1, 2)
        try:
            loaded = loader.load(text) or {}
        except YAMLError as exc:
            msg = f"Ignore file '{path}' is not valid YAML: {exc}"
            raise IgnoreConfigError(msg) from exc
    else:
        try:
            loaded = tomlkit.parse(text).unwrap()
        except tomlkit.exceptions.ParseError as exc:
            msg = f"Ignore file '{path}' is not valid TOML: {exc}"
            raise IgnoreConfigError(msg) from exc
    if not isinstance(loaded, dict):
        msg = f"Ignore file '{path}' must contain a mapping at the top level."
        raise IgnoreConfigError(msg)
    return dict(loaded)


def _build_link_table(section: str, payload: object) -> LinkTable:
    match payload:
        case dict():
            pass
        case _:
            msg = f"Section '{section}' must map link names to lists of links."
            raise IgnoreConfigError(msg)

    table: LinkTable = {}
    for name, targets in payload.items():
        match targets:
            case list():
                table[str(name)] = frozenset(str(target) for target in targets)
            case _:
                msg = f"Ignored links for '{name}' in '{section}' must be a list."
                raise IgnoreConfigError(msg)
    return table


def _resolve_file_key(key: str, base_dir: Path) -> Path:
    configured = Path(key)
    if len(configured.parts) < 2:
        return configured
    if configured.is_absolute():
        return configured.resolve()
    return (base_dir / configured).resolve()


__all__ = ["GLOBAL_TABLE", "load_ignore_config"]
