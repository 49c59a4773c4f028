"""Convert files on disk, report the changes and optionally write them back."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .action import Action, has_changes, rebuild_text
from .classifier import MalformedCaptureError
from .discovery import CrateSources, rust_files
from .transform import transform_lines

if typ.TYPE_CHECKING:
    from .config.models import ConversionOptions, IgnoreConfig

logger = logging.getLogger(__name__)

console = Console(soft_wrap=True, highlight=False)


@dc.dataclass(frozen=True, slots=True)
class FileResult:
    """Outcome of converting one file."""

    path: Path
    actions: tuple[Action, ...] = ()
    written: bool = False
    error: str | None = None

    @property
    def changed(self) -> bool:
        return has_changes(self.actions)

    @property
    def failed(self) -> bool:
        return self.error is not None


def format_report(display_path: str, actions: cabc.Iterable[Action]) -> str:
    """Return the ``rich`` markup listing the changed lines of a file."""
    title = escape(display_path)
    lines = [title, "=" * len(display_path), ""]
    for action in actions:
        if action.is_unchanged:
            continue
        lines.extend([action.report(), ""])
    return "\n".join(lines)


def convert_file(
    path: Path,
    options: ConversionOptions,
    *,
    ignore: IgnoreConfig | None = None,
    apply: bool = False,
) -> FileResult:
    """Convert the links of ``path``.

    Parameters
    ----------
    path : Path
        Rust source file.
    options : ConversionOptions
        Crate name and rendering switches.
    ignore : IgnoreConfig or None, optional
        Links to keep untouched.
    apply : bool, optional
        Write the converted content back when something changed.

    Returns
    -------
    FileResult
        Actions for every line, or the error that stopped the conversion.
    """
    try:
        with path.open(encoding="utf-8", newline="") as handle:
            lines = handle.read().splitlines(keepends=True)
        actions = tuple(
            transform_lines(lines, options, file=path.resolve(), ignore=ignore)
        )
    except (OSError, UnicodeDecodeError, MalformedCaptureError) as exc:
        logger.error("could not convert %s: %s", path, exc)
        return FileResult(path=path, error=str(exc))

    written = False
    if apply and has_changes(actions):
        try:
            with path.open("w", encoding="utf-8", newline="") as handle:
                handle.write(rebuild_text(actions))
        except OSError as exc:
            logger.error("could not write %s: %s", path, exc)
            return FileResult(path=path, actions=actions, error=str(exc))
        written = True
        logger.info("rewrote %s", path)
    return FileResult(path=path, actions=actions, written=written)


def run(
    targets: cabc.Iterable[CrateSources],
    options: ConversionOptions,
    *,
    ignore: IgnoreConfig | None = None,
    apply: bool = False,
    quiet: bool = False,
    format_path: cabc.Callable[[Path], str] = str,
) -> list[FileResult]:
    """Convert every Rust file of ``targets`` and print a report per file.

    Each target is converted with its own crate name. A failing file is
    logged and skipped; the remaining files are still processed.
    """
    results: list[FileResult] = []
    for target in targets:
        target_options = options.with_krate(target.krate)
        for path in rust_files(target.path):
            result = convert_file(path, target_options, ignore=ignore, apply=apply)
            results.append(result)
            if not quiet and result.changed:
                console.print(format_report(format_path(path), result.actions))
    return results


__all__ = ["FileResult", "console", "convert_file", "format_report", "run"]
