"""Cyclopts CLI entrypoint for converting rustdoc links to intra-doc links.

The ``intraconv`` console script reads Rust sources, rewrites markdown links
whose targets are rustdoc pages (``struct.Foo.html``, ``../mod/index.html``,
``https://docs.rs/...``) into intra-doc paths and prints every changed line.
Files are only modified when ``--apply`` is given.

Examples
--------
Report the changes for every crate of the current workspace:

>>> from intraconv.cli import main
>>> main()  # doctest: +SKIP

Convert a single file in place, treating ``regex`` as the current crate:

>>> from intraconv.cli import app
>>> app(["--crate", "regex", "--apply", "src/lib.rs"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_KRATE, VERSION
from .config import (
    ConversionOptions,
    IgnoreConfigError,
    InvalidCrateNameError,
    load_ignore_config,
    normalize_crate_name,
)
from .discovery import ManifestError, resolve_targets
from .runner import run

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s: %(message)s"

app = App(
    name="intraconv",
    version=VERSION,
    help="Convert rustdoc path links to intra-doc links.",
    config=cyclopts.config.Env("INTRACONV_", command=False),  # type: ignore[unknown-argument]
)


def _configure_logging(*, quiet: bool) -> None:
    logging.basicConfig(
        level=logging.ERROR if quiet else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the path as given."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _fail(message: str) -> typ.NoReturn:
    logger.error(message)
    raise SystemExit(1)


@app.default
def convert(
    *paths: Path,
    crate: typ.Annotated[
        str,
        Parameter(
            name=("--crate", "-c"),
            help="Name of the crate the files belong to",
            env_var="INTRACONV_CRATE",
        ),
    ] = DEFAULT_KRATE,
    apply: typ.Annotated[
        bool,
        Parameter(
            name=("--apply", "-a"),
            negative="",
            help="Write the converted files",
            env_var="INTRACONV_APPLY",
        ),
    ] = False,
    ignore_file: typ.Annotated[
        Path | None,
        Parameter(
            name=("--ignore-file", "-i"),
            help="TOML or YAML file listing links to keep",
            env_var="INTRACONV_IGNORE_FILE",
        ),
    ] = None,
    disambiguate: typ.Annotated[
        bool,
        Parameter(
            name=("--disambiguate", "-d"),
            negative="",
            help="Prefix converted links with their disambiguator",
            env_var="INTRACONV_DISAMBIGUATE",
        ),
    ] = False,
    no_favored: typ.Annotated[
        bool,
        Parameter(
            name=("--no-favored", "-f"),
            negative="",
            help="Keep docs.rs and doc.rust-lang.org links as they are",
            env_var="INTRACONV_NO_FAVORED",
        ),
    ] = False,
    quiet: typ.Annotated[
        bool,
        Parameter(
            name=("--quiet", "-q"),
            negative="",
            help="Only report errors",
            env_var="INTRACONV_QUIET",
        ),
    ] = False,
) -> None:
    """Convert the links of Rust sources and report the changed lines.

    Parameters
    ----------
    *paths : Path
        Files or directories to convert. A directory with a ``Cargo.toml``
        is converted with its package name as crate name. Without paths, the
        crates of the current directory's manifest are converted.
    crate : str, optional
        Crate name for paths that are not crate directories (``-`` is read
        as ``_``).
    apply : bool, optional
        Rewrite the changed files instead of only reporting them.
    ignore_file : Path or None, optional
        Ignore file in TOML or YAML.
    disambiguate : bool, optional
        Emit ``struct@``/``fn@``-style prefixes instead of bare paths.
    no_favored : bool, optional
        Do not reduce links to docs.rs and doc.rust-lang.org.
    quiet : bool, optional
        Print nothing but errors.

    Raises
    ------
    SystemExit
        With status 1 when the options are invalid or a file failed.
    """
    _configure_logging(quiet=quiet)

    try:
        options = ConversionOptions(
            krate=normalize_crate_name(crate),
            disambiguate=disambiguate,
            favored_links=not no_favored,
        )
    except InvalidCrateNameError as exc:
        _fail(str(exc))
    if options.krate != crate:
        logger.warning("crate name '%s' read as '%s'", crate, options.krate)

    ignore = None
    if ignore_file is not None:
        try:
            ignore = load_ignore_config(ignore_file)
        except (FileNotFoundError, IgnoreConfigError) as exc:
            _fail(str(exc))

    try:
        targets = resolve_targets(list(paths), options.krate)
    except (FileNotFoundError, ManifestError) as exc:
        _fail(str(exc))

    results = run(
        targets,
        options,
        ignore=ignore,
        apply=apply,
        quiet=quiet,
        format_path=_format_path,
    )
    failures = [result for result in results if result.failed]
    if failures:
        _fail(f"{len(failures)} file(s) could not be converted")


def main() -> None:
    """Invoke the Cyclopts application behind the ``intraconv`` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
