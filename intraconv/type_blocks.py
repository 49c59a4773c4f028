"""Locate the type and impl blocks of a Rust source file.

Inside ``impl Foo { ... }`` (or ``struct``/``enum``/``trait``/``union``
declarations) a bare anchor such as ``#method.bar`` refers to ``Foo::bar``.
:func:`find_type_blocks` scans a whole file once and records, for every block,
the type name, the text that marks its end and the line it starts on.

Blocks are not nested: the scan reports every declaration, but only one of
them is tracked as the current type at any point of the conversion.

Examples
--------
>>> from intraconv.type_blocks import find_type_blocks
>>> find_type_blocks(["let a = b;\\n", "impl<T> Trait for Foo<T> {\\n", "}\\n"])
[TypeBlock(name='Foo', end_marker='}', line=2)]
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import re

TYPE_BLOCK_START_RE = re.compile(
    r"^(?P<spaces>\s*)"
    r"(?:pub(?:\(.+\))? )?"
    r"(?:struct|trait|impl(?:<.*?>)?(?: .*? for)?|enum|union) "
    r"(?P<type>\w+)"
    r"(?:<.*?>)?"
    r"(?P<parenthese>\()?"
    r".*$"
)

SINGLE_LINE_END = "\n"


@dc.dataclass(frozen=True, slots=True)
class TypeBlock:
    """Type declaration or impl block found by the scan.

    Attributes
    ----------
    name : str
        Type the block is about, generics excluded.
    end_marker : str
        ``"\\n"`` when the block fits on its declaration line, otherwise the
        declaration's indentation followed by the closing bracket.
    line : int
        One-based line number of the declaration.
    """

    name: str
    end_marker: str
    line: int

    @property
    def is_single_line(self) -> bool:
        return self.end_marker == SINGLE_LINE_END


def parse_type_block(line: str, position: int) -> TypeBlock | None:
    """Return the block declared on ``line``, if any."""
    content = line.rstrip("\r\n")
    captures = TYPE_BLOCK_START_RE.match(content)
    if captures is None:
        return None
    if content.rstrip().endswith((";", "}")):
        end_marker = SINGLE_LINE_END
    else:
        bracket = ")" if captures.group("parenthese") else "}"
        end_marker = captures.group("spaces") + bracket
    return TypeBlock(name=captures.group("type"), end_marker=end_marker, line=position)


def find_type_blocks(lines: cabc.Iterable[str]) -> list[TypeBlock]:
    """Scan ``lines`` and return their type blocks, last declaration first.

    The returned list is used as a stack: popping it yields the blocks in
    file order.
    """
    blocks = [
        block
        for position, line in enumerate(lines, start=1)
        if (block := parse_type_block(line, position)) is not None
    ]
    blocks.reverse()
    return blocks


__all__ = ["SINGLE_LINE_END", "TypeBlock", "find_type_blocks", "parse_type_block"]
