"""Tests for whole-file conversion and type block tracking."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from intraconv._constants import DELETED_LOCAL_LINK_REASON
from intraconv.action import Deleted, Replaced, Unchanged, has_changes, rebuild_text
from intraconv.config import ConversionOptions, IgnoreConfig
from intraconv.transform import ConversionContext, is_local_link, transform_lines

OPTIONS = ConversionOptions(krate="krate")


def _lines(source: str) -> list[str]:
    return textwrap.dedent(source).lstrip("\n").splitlines(keepends=True)


def test_current_type_only_inside_blocks() -> None:
    ctx = ConversionContext(options=OPTIONS)
    lines = ["let a = b;\n", "struct A();\n", "// Comment\n", "struct B();\n"]
    ctx.reset(lines)

    seen: list[str | None] = []
    for line in lines:
        ctx.pos += 1
        ctx._enter_type_block()
        seen.append(ctx.current_type)
        ctx._leave_type_block(line)

    assert seen == [None, "A", None, "B"]


def test_impl_block_resolves_associated_items() -> None:
    lines = _lines(
        """
        /// [`new`]: #method.new
        impl Block {
            /// See [`len`](#method.len).
            ///
            /// [`Item`]: #associatedtype.Item
            pub fn len(&self) -> usize {
                0
            }
        }
        /// [`drain`]: #method.drain
        """
    )

    actions = transform_lines(lines, OPTIONS)

    assert actions[0] == Replaced(
        line=lines[0], new="/// [`new`]: Self::new()\n", pos=1
    ), "links before the block have no current type"
    assert actions[2].new_line == "    /// See [`len`](Block::len()).\n"
    assert actions[4].new_line == "    /// [`Item`]: Block::Item\n"
    assert actions[9].new_line == "/// [`drain`]: Self::drain()\n"


def test_nested_declaration_inside_block_is_skipped() -> None:
    lines = _lines(
        """
        impl Outer {
            /// [`a`]: #method.a
            struct Inner;
            /// [`b`]: #method.b
        }
        /// [`c`]: #method.c
        """
    )

    actions = transform_lines(lines, OPTIONS)

    assert actions[1].new_line.endswith("Outer::a()\n")
    assert actions[3].new_line.endswith("Outer::b()\n")
    assert actions[5].new_line.endswith("Self::c()\n")


def test_local_link_is_deleted() -> None:
    lines = _lines(
        """
        /// Uses [`Vec`].
        ///
        /// [`Vec`]: struct.Vec.html
        """
    )

    actions = transform_lines(lines, OPTIONS)

    assert isinstance(actions[0], Unchanged)
    assert actions[2] == Deleted(line=lines[2], pos=3)
    assert actions[2].reason == DELETED_LOCAL_LINK_REASON
    assert rebuild_text(actions) == "/// Uses [`Vec`].\n///\n"


def test_already_local_link_is_deleted() -> None:
    actions = transform_lines(["//! [Link]: Link\n"], OPTIONS)

    assert isinstance(actions[0], Deleted)


def test_section_link_kept_unchanged() -> None:
    actions = transform_lines(["/// [`Link`]: #section\n"], OPTIONS)

    assert actions == [Unchanged("/// [`Link`]: #section\n")]
    assert not has_changes(actions)


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("[name]: name", True),
        ("/// [`name`]: name\n", True),
        ("  //! [name]:name\r\n", True),
        ("[name]: other", False),
        ("no link here", False),
    ],
)
def test_is_local_link(line: str, expected: bool) -> None:
    assert is_local_link(line) is expected


def test_ignored_links_stay(tmp_path: Path) -> None:
    source = tmp_path / "src" / "lib.rs"
    ignore = IgnoreConfig(
        globals={"`Regex`": frozenset({"struct.Regex.html"})},
        per_file={Path("lib.rs"): {"`escape`": frozenset({"fn.escape.html"})}},
    )
    lines = [
        "/// [`Regex`]: struct.Regex.html\n",
        "/// [`escape`]: fn.escape.html\n",
        "/// [`Match`]: struct.Match.html\n",
    ]

    actions = transform_lines(lines, OPTIONS, file=source, ignore=ignore)
    other = transform_lines(lines, OPTIONS, file=tmp_path / "main.rs", ignore=ignore)

    assert [action.is_unchanged for action in actions] == [True, True, False]
    assert [action.is_unchanged for action in other] == [True, False, False]


def test_rebuild_preserves_unchanged_lines() -> None:
    lines = _lines(
        """
        //! Crate docs.
        //!
        //! See [`Regex`](struct.Regex.html) and [the guide](../guide/index.html).
        """
    )

    actions = transform_lines(lines, ConversionOptions(krate="regex"))

    assert rebuild_text(actions) == (
        "//! Crate docs.\n"
        "//!\n"
        "//! See [`Regex`] and [the guide](super::guide).\n"
    )
