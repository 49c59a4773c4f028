"""Per-line outcome of a conversion.

Every input line produces exactly one action. Actions are both the material
for the human-readable report and the way to rebuild the converted file:
concatenating :attr:`new_line` over all actions yields the new content, with
deleted lines dropped.

Examples
--------
>>> from intraconv.action import Replaced, Unchanged, rebuild_text
>>> rebuild_text([Unchanged("a\\n"), Replaced("[x]: x.html\\n", "[x]: x\\n", 2)])
'a\\n[x]: x\\n'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc

from rich.markup import escape

from ._constants import DELETED_LOCAL_LINK_REASON

_INDENT = " " * 8


def _quoted(line: str, style: str) -> str:
    text = escape(line.rstrip("\r\n"))
    return f'"[{style}]{text}[/{style}]"'


@dc.dataclass(frozen=True, slots=True)
class Unchanged:
    """The line is kept as it is."""

    line: str

    @property
    def new_line(self) -> str:
        return self.line

    @property
    def is_unchanged(self) -> bool:
        return True

    def report(self) -> str:
        return ""


@dc.dataclass(frozen=True, slots=True)
class Deleted:
    """The line is dropped from the converted file."""

    line: str
    pos: int
    reason: str = DELETED_LOCAL_LINK_REASON

    @property
    def new_line(self) -> str:
        return ""

    @property
    def is_unchanged(self) -> bool:
        return False

    def report(self) -> str:
        """Return the ``rich`` markup describing the deletion."""
        return (
            f"{self.pos:5}:  {_quoted(self.line, 'red')}\n"
            f"{_INDENT}[yellow]{escape(self.reason)}[/yellow]"
        )


@dc.dataclass(frozen=True, slots=True)
class Replaced:
    """The line is replaced by ``new``."""

    line: str
    new: str
    pos: int

    @property
    def new_line(self) -> str:
        return self.new

    @property
    def is_unchanged(self) -> bool:
        return False

    def report(self) -> str:
        """Return the ``rich`` markup showing the old and the new line."""
        return (
            f"{self.pos:5}:  {_quoted(self.line, 'red')}\n"
            f"{_INDENT}{_quoted(self.new, 'green')}"
        )


Action = Unchanged | Deleted | Replaced


def rebuild_text(actions: cabc.Iterable[Action]) -> str:
    """Concatenate the new lines of ``actions``."""
    return "".join(action.new_line for action in actions)


def has_changes(actions: cabc.Iterable[Action]) -> bool:
    return any(not action.is_unchanged for action in actions)


__all__ = [
    "Action",
    "Deleted",
    "Replaced",
    "Unchanged",
    "has_changes",
    "rebuild_text",
]
