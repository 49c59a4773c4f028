"""Unit tests for disambiguators and the intra-doc renderer."""

from __future__ import annotations

import pytest

from intraconv.disambiguator import (
    EMPTY,
    FN_SUFFIX,
    MACRO_PREFIX,
    MACRO_SUFFIX,
    MOD_PREFIX,
    TYPE_PREFIX,
    VALUE_PREFIX,
    disambiguator_for,
)
from intraconv.link_parts import (
    AssociatedItem,
    CrateStart,
    EmptyStart,
    Item,
    LinkParts,
    LocalStart,
    ModStart,
    Module,
    Section,
    SupersStart,
)


@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        ("struct", TYPE_PREFIX),
        ("enum", TYPE_PREFIX),
        ("trait", TYPE_PREFIX),
        ("union", TYPE_PREFIX),
        ("type", TYPE_PREFIX),
        ("const", VALUE_PREFIX),
        ("static", VALUE_PREFIX),
        ("value", VALUE_PREFIX),
        ("derive", MACRO_PREFIX),
        ("attr", MACRO_PREFIX),
        ("mod", MOD_PREFIX),
        ("fn", FN_SUFFIX),
        ("method", FN_SUFFIX),
        ("macro", MACRO_SUFFIX),
        ("constant", EMPTY),
        ("primitive", EMPTY),
        ("variant", EMPTY),
        ("tymethod", EMPTY),
    ],
)
def test_disambiguator_for_kind(kind: str, expected: object) -> None:
    assert disambiguator_for(kind) == expected, f"unexpected rule for {kind!r}"


def _item(kind: str, name: str = "Type", added: object = None) -> Item:
    return Item(kind=kind, dis=disambiguator_for(kind), name=name, added=added)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("parts", "with_dis", "without_dis"),
    [
        (
            LinkParts(start=SupersStart(1), end=_item("struct"), modules=("mod1",)),
            "type@super::mod1::Type",
            "super::mod1::Type",
        ),
        (
            LinkParts(start=SupersStart(2), end=Module("regex")),
            "mod@super::super::regex",
            "super::super::regex",
        ),
        (
            LinkParts(start=CrateStart(), end=_item("fn", "escape")),
            "crate::escape()",
            "crate::escape()",
        ),
        (
            LinkParts(start=EmptyStart(), end=_item("fn", added=Section("examples"))),
            "Type()#examples",
            "Type()#examples",
        ),
        (
            LinkParts(start=EmptyStart(), end=_item("attr", added=Section("usage"))),
            "macro@Type#usage",
            "Type#usage",
        ),
        (
            LinkParts(
                start=EmptyStart(),
                end=_item("struct", added=AssociatedItem(FN_SUFFIX, "call")),
            ),
            "Type::call()",
            "Type::call()",
        ),
        (
            LinkParts(start=ModStart("regex"), end=Section("syntax"), modules=("bytes",)),
            "regex::bytes#syntax",
            "regex::bytes#syntax",
        ),
        (
            LinkParts(start=EmptyStart(), end=Module("self", Section("intro"))),
            "mod@self#intro",
            "self#intro",
        ),
        (
            LinkParts(start=EmptyStart(), end=_item("macro", "vec")),
            "vec!",
            "vec!",
        ),
        (
            LinkParts(start=LocalStart(), end=Section("safety")),
            "#safety",
            "#safety",
        ),
    ],
)
def test_render_link_parts(parts: LinkParts, with_dis: str, without_dis: str) -> None:
    assert parts.render(disambiguate=True) == with_dis
    assert parts.render(disambiguate=False) == without_dis


def test_local_associated_item_uses_current_type() -> None:
    parts = LinkParts(start=LocalStart(), end=AssociatedItem(FN_SUFFIX, "drain"))

    assert parts.render("Block") == "Block::drain()"
    assert parts.render() == "Self::drain()", "no enclosing type falls back to Self"


def test_local_associated_item_with_type_prefix() -> None:
    parts = LinkParts(start=LocalStart(), end=AssociatedItem(TYPE_PREFIX, "Item"))

    assert parts.render("Block", disambiguate=True) == "type@Block::Item"


def test_disambiguator_prefers_associated_item() -> None:
    parts = LinkParts(
        start=EmptyStart(),
        end=_item("struct", added=AssociatedItem(FN_SUFFIX, "call")),
    )

    assert parts.disambiguator == FN_SUFFIX
    assert LinkParts(start=EmptyStart(), end=Section("a")).disambiguator == EMPTY
    assert LinkParts(start=EmptyStart(), end=Module("m")).disambiguator == MOD_PREFIX


def test_primitive_detection() -> None:
    assert LinkParts(start=EmptyStart(), end=_item("primitive", "u8")).is_primitive
    assert not LinkParts(start=EmptyStart(), end=_item("struct")).is_primitive
