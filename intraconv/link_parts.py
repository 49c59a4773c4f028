"""Structured form of a classified link target and its intra-doc rendering.

A link such as ``../mod1/struct.Type.html#method.call`` is broken down into a
start marker (``super``), intermediate modules (``mod1``) and an end
(``Type`` with the associated item ``call``). ``render_link_parts`` turns that
structure back into text, this time as an intra-doc path.

Examples
--------
>>> from intraconv.disambiguator import disambiguator_for
>>> from intraconv.link_parts import LinkParts, Item, SupersStart
>>> parts = LinkParts(
...     start=SupersStart(1),
...     modules=("mod1",),
...     end=Item(kind="struct", dis=disambiguator_for("struct"), name="Type"),
... )
>>> parts.render(disambiguate=True)
'type@super::mod1::Type'
"""

from __future__ import annotations

import dataclasses as dc

from .disambiguator import EMPTY, MOD_PREFIX, Disambiguator


@dc.dataclass(frozen=True, slots=True)
class EmptyStart:
    """No leading scope marker."""


@dc.dataclass(frozen=True, slots=True)
class LocalStart:
    """Current module or current type (``./`` or a bare anchor)."""


@dc.dataclass(frozen=True, slots=True)
class CrateStart:
    """Root of the crate being converted."""


@dc.dataclass(frozen=True, slots=True)
class ModStart:
    """First path segment naming a sibling module."""

    name: str


@dc.dataclass(frozen=True, slots=True)
class SupersStart:
    """``count`` consecutive parent-module steps."""

    count: int


Start = EmptyStart | LocalStart | CrateStart | ModStart | SupersStart


@dc.dataclass(frozen=True, slots=True)
class Section:
    """Same-page anchor (``#name``)."""

    name: str


@dc.dataclass(frozen=True, slots=True)
class AssociatedItem:
    """Associated item anchor (``#method.name``)."""

    dis: Disambiguator
    name: str


@dc.dataclass(frozen=True, slots=True)
class Item:
    """Top-level item page (``struct.Name.html``) with an optional anchor."""

    kind: str
    dis: Disambiguator
    name: str
    added: AssociatedItem | Section | None = None


@dc.dataclass(frozen=True, slots=True)
class Module:
    """Module, inferred from ``index.html``, a bare segment or a crate root."""

    name: str
    section: Section | None = None


End = Section | AssociatedItem | Item | Module


@dc.dataclass(frozen=True, slots=True)
class LinkParts:
    """Parsed link target: ``start``, intermediate ``modules`` and ``end``."""

    start: Start
    end: End
    modules: tuple[str, ...] = ()

    @property
    def disambiguator(self) -> Disambiguator:
        """Return the disambiguator of the innermost decorated part."""
        match self.end:
            case Section():
                return EMPTY
            case Module():
                return MOD_PREFIX
            case AssociatedItem(dis=dis):
                return dis
            case Item(added=AssociatedItem(dis=dis)):
                return dis
            case Item(dis=dis):
                return dis
        msg = f"Unknown link end: {self.end!r}"
        raise TypeError(msg)

    @property
    def is_primitive(self) -> bool:
        return isinstance(self.end, Item) and self.end.kind == "primitive"

    def render(
        self, current_type: str | None = None, *, disambiguate: bool = False
    ) -> str:
        """Shortcut for :func:`render_link_parts`."""
        return render_link_parts(self, current_type, disambiguate=disambiguate)


def _render_start(parts: LinkParts, current_type: str | None) -> str:
    match parts.start:
        case LocalStart():
            if isinstance(parts.end, AssociatedItem) and not parts.modules:
                return current_type or "Self"
            return ""
        case CrateStart():
            return "crate"
        case ModStart(name=name):
            return name
        case SupersStart(count=count):
            return "::".join(["super"] * count)
    return ""


def _join(result: str, segment: str) -> str:
    return f"{result}::{segment}" if result else segment


def render_link_parts(
    parts: LinkParts, current_type: str | None = None, *, disambiguate: bool = False
) -> str:
    """Render ``parts`` as an intra-doc link.

    Parameters
    ----------
    parts : LinkParts
        Classified link target.
    current_type : str or None, optional
        Type whose block encloses the link. Bare associated items resolve
        against it and fall back to ``Self`` when it is ``None``.
    disambiguate : bool, optional
        Emit prefix disambiguators (``type@``, ``mod@`` ...). Suffix
        disambiguators (``()``, ``!``) are always emitted.

    Returns
    -------
    str
        The intra-doc path, for example ``type@crate::mod1::Type``.
    """
    result = _render_start(parts, current_type)
    for module in parts.modules:
        result = _join(result, module)

    dis = parts.disambiguator
    suffix_placed = False
    match parts.end:
        case Section(name=name):
            result = f"{result}#{name}"
        case AssociatedItem(name=name):
            result = _join(result, name)
        case Module(name=name, section=section):
            result = _join(result, name)
            if section is not None:
                result = f"{result}#{section.name}"
        case Item(name=name, added=added):
            result = _join(result, name)
            if isinstance(added, Section):
                if dis.is_suffix:
                    result += dis.token
                result = f"{result}#{added.name}"
                suffix_placed = True
            elif isinstance(added, AssociatedItem):
                result = f"{result}::{added.name}"

    if dis.is_prefix:
        if disambiguate:
            result = dis.token + result
    elif dis.is_suffix and not suffix_placed:
        result += dis.token
    return result


__all__ = [
    "AssociatedItem",
    "CrateStart",
    "EmptyStart",
    "End",
    "Item",
    "LinkParts",
    "LocalStart",
    "ModStart",
    "Module",
    "Section",
    "Start",
    "SupersStart",
    "render_link_parts",
]
