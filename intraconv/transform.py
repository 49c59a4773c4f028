"""Convert the lines of one file, tracking which type is in scope.

:class:`ConversionContext` is the per-file state machine. Before each line it
pops the next type block when none is active; after the line it closes the
active block once the block's end marker is reached. The active type is the
one bare associated-item anchors (``#method.name``) resolve against.

Examples
--------
>>> from intraconv.config import ConversionOptions
>>> from intraconv.transform import transform_lines
>>> actions = transform_lines(
...     ["impl Foo {\\n", "    /// [`bar`]: #method.bar\\n", "}\\n"],
...     ConversionOptions(),
... )
>>> actions[1].new
'    /// [`bar`]: Foo::bar()\\n'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import re
import typing as typ

from .action import Action, Deleted, Replaced, Unchanged
from .candidate import rewrite_line
from .type_blocks import TypeBlock, find_type_blocks

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config.models import ConversionOptions, IgnoreConfig

LOCAL_LINK_RE = re.compile(
    r"^\s*(?://[!/]\s*)?\[`?(?P<elem>.*?)`?\]:\s*(?P<elem2>.*?)(?:\r?\n)?\Z"
)


def is_local_link(line: str) -> bool:
    """Return True for ``[name]: name`` lines, which rustdoc resolves alone."""
    captures = LOCAL_LINK_RE.match(line)
    return captures is not None and captures.group("elem") == captures.group("elem2")


@dc.dataclass(slots=True)
class ConversionContext:
    """Mutable state for converting a single file.

    Attributes
    ----------
    options : ConversionOptions
        Crate name and rendering switches.
    file : Path or None
        File being converted, used for per-file ignore rules.
    ignore : IgnoreConfig or None
        Links that must be kept as they are.
    pos : int
        One-based number of the last processed line.
    type_blocks : list[TypeBlock]
        Remaining blocks, next one last.
    """

    options: ConversionOptions
    file: Path | None = None
    ignore: IgnoreConfig | None = None
    pos: int = 0
    curr_type_block: str | None = None
    end_type_block: str = ""
    type_block_line: int | None = None
    type_blocks: list[TypeBlock] = dc.field(default_factory=list)

    def reset(self, lines: cabc.Sequence[str]) -> None:
        """Prepare the context for a new file made of ``lines``."""
        self.pos = 0
        self._clear_type_block()
        self.type_blocks = find_type_blocks(lines)

    def set_current_type_block(self, name: str, end_marker: str, line: int) -> None:
        self.curr_type_block = name
        self.end_type_block = end_marker
        self.type_block_line = line

    @property
    def current_type(self) -> str | None:
        """Type in scope for the line being processed, if any."""
        if self.type_block_line is None or self.pos < self.type_block_line:
            return None
        return self.curr_type_block

    def transform_line(self, line: str) -> Action:
        """Convert the next line of the file and return its action."""
        self.pos += 1
        self._enter_type_block()
        action = self._action_for(line)
        self._leave_type_block(line)
        return action

    def _action_for(self, line: str) -> Action:
        rewrite = rewrite_line(
            line, self.options, self.current_type, ignored=self._is_ignored
        )
        if rewrite.converted and rewrite.long_form and is_local_link(rewrite.text):
            return Deleted(line=line, pos=self.pos)
        if rewrite.text == line:
            return Unchanged(line)
        return Replaced(line=line, new=rewrite.text, pos=self.pos)

    def _is_ignored(self, name: str, target: str) -> bool:
        if self.ignore is None or self.file is None:
            return False
        return self.ignore.is_ignored(self.file, name, target)

    def _enter_type_block(self) -> None:
        while self.curr_type_block is None and self.type_blocks:
            block = self.type_blocks.pop()
            # Declarations passed while another block was active are stale.
            if block.line < self.pos:
                continue
            self.set_current_type_block(block.name, block.end_marker, block.line)

    def _leave_type_block(self, line: str) -> None:
        if (
            self.curr_type_block is None
            or self.type_block_line is None
            or self.pos < self.type_block_line
        ):
            return
        if self.end_type_block == "\n" or line.startswith(self.end_type_block):
            self._clear_type_block()

    def _clear_type_block(self) -> None:
        self.curr_type_block = None
        self.end_type_block = ""
        self.type_block_line = None


def transform_lines(
    lines: cabc.Sequence[str],
    options: ConversionOptions,
    *,
    file: Path | None = None,
    ignore: IgnoreConfig | None = None,
) -> list[Action]:
    """Convert ``lines`` and return one action per line, in order.

    Parameters
    ----------
    lines : Sequence[str]
        File content split into lines, terminators kept.
    options : ConversionOptions
        Crate name and rendering switches.
    file : Path or None, optional
        Path of the file, needed for per-file ignore rules.
    ignore : IgnoreConfig or None, optional
        Links to keep untouched.

    Returns
    -------
    list[Action]
        ``Unchanged``, ``Replaced`` or ``Deleted`` for every input line.
    """
    ctx = ConversionContext(options=options, file=file, ignore=ignore)
    ctx.reset(lines)
    return [ctx.transform_line(line) for line in lines]


__all__ = [
    "LOCAL_LINK_RE",
    "ConversionContext",
    "is_local_link",
    "transform_lines",
]
