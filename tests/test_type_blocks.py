"""Tests for the scan of type declarations and impl blocks."""

from __future__ import annotations

import pytest

from intraconv.type_blocks import (
    SINGLE_LINE_END,
    TypeBlock,
    find_type_blocks,
    parse_type_block,
)


@pytest.mark.parametrize(
    ("line", "name", "end_marker"),
    [
        ("struct Foo {\n", "Foo", "}"),
        ("pub struct Foo<T> {\n", "Foo", "}"),
        ("pub(crate) enum Kind {\n", "Kind", "}"),
        ("    impl Foo {\n", "Foo", "    }"),
        ("impl<T: Clone> Trait for Foo<T> {\n", "Foo", "}"),
        ("pub struct Wrapper(\n", "Wrapper", ")"),
        ("pub struct Unit;\n", "Unit", SINGLE_LINE_END),
        ("struct Pair(u8, u8);\n", "Pair", SINGLE_LINE_END),
        ("impl Default for Foo {}\n", "Foo", SINGLE_LINE_END),
        ("trait Marker {}\r\n", "Marker", SINGLE_LINE_END),
    ],
)
def test_parse_type_block(line: str, name: str, end_marker: str) -> None:
    block = parse_type_block(line, 3)

    assert block == TypeBlock(name=name, end_marker=end_marker, line=3)


@pytest.mark.parametrize(
    "line",
    ["let a = b;\n", "/// struct Foo in docs\n", "fn struct_like() {\n", "}\n"],
)
def test_lines_without_blocks(line: str) -> None:
    assert parse_type_block(line, 1) is None


def test_find_type_blocks_returns_a_stack() -> None:
    lines = ["let a = b;\n", "struct A();\n", "// Comment\n", "struct B();\n"]

    blocks = find_type_blocks(lines)

    assert [block.name for block in blocks] == ["B", "A"]
    assert blocks.pop() == TypeBlock(name="A", end_marker=SINGLE_LINE_END, line=2)
    assert blocks[-1].is_single_line


@pytest.mark.parametrize("line", ["struct A; \n", "impl Marker for A {}\t\r\n"])
def test_trailing_whitespace_keeps_single_line_blocks(line: str) -> None:
    block = parse_type_block(line, 1)

    assert block is not None
    assert block.is_single_line
