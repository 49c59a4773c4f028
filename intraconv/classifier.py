"""Classify link targets into :class:`~intraconv.link_parts.LinkParts`.

Targets are read as slash-separated paths. Favored documentation URLs
(``docs.rs`` and ``doc.rust-lang.org``) are first reduced to the relative path
they stand for; everything then goes through the same ordered cascade of
parsers:

1. a bare associated item (``#method.name``),
2. a section anchor (``#name``, optionally below some modules),
3. an item page (``struct.Name.html`` with an optional anchor),
4. a module (``index.html``, ``name`` or ``name#section``).

The first parser that recognizes the target wins, so the order matters.

Examples
--------
>>> from intraconv.classifier import classify
>>> from intraconv.config import ConversionOptions
>>> opts = ConversionOptions(krate="regex")
>>> classify("../bytes/struct.Regex.html", opts).render()
'super::bytes::Regex'
>>> classify("https://docs.rs/regex/latest/regex/fn.escape.html", opts).render()
'crate::escape()'
"""

from __future__ import annotations

import re
import typing as typ

from ._constants import (
    DOC_RUST_LANG_ORG,
    DOCS_RS,
    DOCS_RS_VERSION_RE,
    HTML_SECTION,
    ITEM_TYPES_PATTERN,
    RUST_IDENTIFIER,
    RUST_LANG_CHANNELS,
    RUST_LANG_CRATES,
    RUST_LANG_VERSION_RE,
)
from .config.models import is_identifier
from .disambiguator import disambiguator_for
from .doc_path import CUR_DIR, PARENT_DIR, ROOT_DIR, DocPath
from .link_parts import (
    AssociatedItem,
    CrateStart,
    EmptyStart,
    End,
    Item,
    LinkParts,
    LocalStart,
    ModStart,
    Module,
    Section,
    Start,
    SupersStart,
)

if typ.TYPE_CHECKING:
    from .config.models import ConversionOptions

HTTP_SCHEMES = ("http:", "https:")

ASSOC_ITEM_RE = re.compile(
    rf"^#(?P<dis>{ITEM_TYPES_PATTERN})\.(?P<name>{RUST_IDENTIFIER})$"
)
SECTION_RE = re.compile(rf"^(?P<name>{HTML_SECTION})$")
ITEM_RE = re.compile(
    rf"^(?P<i_ty>{ITEM_TYPES_PATTERN})\.(?P<i_name>{RUST_IDENTIFIER})\.html"
    rf"(?:#(?P<ai_ty>{ITEM_TYPES_PATTERN})\.(?P<ai_name>{RUST_IDENTIFIER})"
    rf"|(?P<section>{HTML_SECTION}))?$"
)
MODULE_RE = re.compile(
    rf"^(?:index\.html|(?P<name>{RUST_IDENTIFIER}))(?P<section>{HTML_SECTION})?$"
)


class UnclassifiableLinkError(ValueError):
    """Raised when a target does not match any known link shape."""


class MalformedCaptureError(RuntimeError):
    """Raised when a regex match lacks a group its pattern guarantees."""


def _group(captures: re.Match[str], name: str) -> str:
    value = captures.group(name)
    if value is None:
        msg = f"Pattern {captures.re.pattern!r} matched without group '{name}'."
        raise MalformedCaptureError(msg)
    return value


def classify(target: str, options: ConversionOptions) -> LinkParts:
    """Classify ``target`` into its structured form.

    Parameters
    ----------
    target : str
        Link target as written in the markdown link.
    options : ConversionOptions
        Crate name and the favored-links switch.

    Returns
    -------
    LinkParts
        Parsed start, modules and end of the link.

    Raises
    ------
    UnclassifiableLinkError
        If the target matches none of the recognized link shapes.
    """
    path = DocPath.parse(target)
    parts = favored_parts(path, options) or start_middle_end(path, options.krate)
    if parts is None:
        msg = f"Cannot classify link target '{target}'."
        raise UnclassifiableLinkError(msg)
    return parts


def favored_parts(path: DocPath, options: ConversionOptions) -> LinkParts | None:
    """Reduce a ``docs.rs`` or ``doc.rust-lang.org`` URL, when enabled."""
    if not options.favored_links:
        return None
    if path.first not in HTTP_SCHEMES or len(path) < 3:
        return None
    domain = path.parts[1]
    if domain == DOCS_RS:
        return _favored_docs_rs(path.strip_first(2), options.krate)
    if domain == DOC_RUST_LANG_ORG:
        return _favored_doc_rust_lang_org(path.strip_first(2), options.krate)
    return None


def _crate_root(name: str) -> LinkParts:
    return LinkParts(start=EmptyStart(), end=Module(name))


def _docs_rs_crate_only(crate_name: str, krate: str) -> LinkParts | None:
    if crate_name == krate:
        return _crate_root("crate")
    if is_identifier(crate_name):
        return _crate_root(crate_name)
    fixed = crate_name.replace("-", "_")
    if is_identifier(fixed):
        return _crate_root(fixed)
    return None


def _favored_docs_rs(untreated: DocPath, krate: str) -> LinkParts | None:
    # ``https://docs.rs/crate/regex`` is the crate's info page, not its docs.
    crate_name = untreated.first
    if crate_name is None or crate_name == "crate":
        return None
    if len(untreated) < 3:
        if len(untreated) == 2 and not DOCS_RS_VERSION_RE.search(untreated.parts[1]):
            return None
        return _docs_rs_crate_only(crate_name, krate)
    if not DOCS_RS_VERSION_RE.search(untreated.parts[1]):
        return None
    return start_middle_end(untreated.strip_first(2), krate)


def _favored_doc_rust_lang_org(untreated: DocPath, krate: str) -> LinkParts | None:
    channel_or_crate = untreated.first
    if channel_or_crate is None:
        return None
    if channel_or_crate in RUST_LANG_CHANNELS or RUST_LANG_VERSION_RE.search(
        channel_or_crate
    ):
        untreated = untreated.strip_first()
    linked_crate = untreated.first
    if linked_crate not in RUST_LANG_CRATES:
        return None
    return start_middle_end(untreated, krate)


def start_middle_end(path: DocPath, krate: str) -> LinkParts | None:
    """Run the generic cascade of parsers on a relative path."""
    for parser in (
        lambda: associated_item_parts(path),
        lambda: section_parts(path, krate),
        lambda: item_parts(path, krate),
        lambda: module_parts(path, krate),
    ):
        parts = parser()
        if parts is not None:
            return parts
    return None


def associated_item_parts(path: DocPath) -> LinkParts | None:
    """Recognize ``#kind.name``, optionally behind ``./`` components."""
    remaining = path.strip_first() if path.first == CUR_DIR else path
    if len(remaining) != 1:
        return None
    captures = ASSOC_ITEM_RE.match(remaining.parts[0])
    if captures is None:
        return None
    end = AssociatedItem(
        dis=disambiguator_for(_group(captures, "dis")), name=_group(captures, "name")
    )
    return LinkParts(start=LocalStart(), end=end)


def section_parts(path: DocPath, krate: str) -> LinkParts | None:
    """Recognize ``[path/]#section`` when it is not an associated item."""
    if associated_item_parts(path) is not None:
        return None
    section = path.file_name
    if section is None:
        return None
    captures = SECTION_RE.match(section)
    if captures is None:
        return None
    end = Section(_group(captures, "name").removeprefix("#"))
    untreated = path.parent
    if not untreated:
        return LinkParts(start=LocalStart(), end=end)
    return start_and_middle(untreated, end, krate)


def item_parts(path: DocPath, krate: str) -> LinkParts | None:
    """Recognize ``[path/]kind.Name.html[#kind.name|#section]``."""
    last = path.file_name
    if last is None:
        return None
    captures = ITEM_RE.match(last)
    if captures is None:
        return None

    added: AssociatedItem | Section | None = None
    if captures.group("ai_ty") is not None:
        added = AssociatedItem(
            dis=disambiguator_for(_group(captures, "ai_ty")),
            name=_group(captures, "ai_name"),
        )
    elif captures.group("section") is not None:
        added = Section(_group(captures, "section").removeprefix("#"))

    kind = _group(captures, "i_ty")
    end = Item(
        kind=kind,
        dis=disambiguator_for(kind),
        name=_group(captures, "i_name"),
        added=added,
    )
    return start_and_middle(path.parent, end, krate)


def module_parts(path: DocPath, krate: str) -> LinkParts | None:
    """Recognize ``[path/]index.html``, ``[path/]name`` and their ``#section``."""
    last = path.file_name
    if last is None:
        return None
    captures = MODULE_RE.match(last)
    if captures is None:
        return None

    name = captures.group("name")
    section = captures.group("section")
    end: End
    if section is not None:
        section_name = section.removeprefix("#")
        if name is not None:
            end = Module(name, Section(section_name))
        elif last.startswith("index.html") and len(path) == 1:
            end = Module("self", Section(section_name))
        else:
            end = Section(section_name)
    elif name is not None:
        end = Module(name)
    else:
        # A bare ``index.html`` names the directory holding it.
        match path.parent.parts[-1:]:
            case () | (".",):
                end = Module("self")
            case ("..",):
                end = Module("super")
            case (directory,) if directory == krate:
                # ``crate`` is absolute, but what leads to it must still parse.
                end = Module("crate")
                if start_and_middle(path.parent.parent, end, krate) is None:
                    return None
                return LinkParts(start=EmptyStart(), end=end)
            case (directory,) if is_identifier(directory):
                end = Module(directory)
            case _:
                return None

    untreated = path.parent
    if name is None and section is None:
        untreated = untreated.parent
    return start_and_middle(untreated, end, krate)


def start_and_middle(untreated: DocPath, end: End, krate: str) -> LinkParts | None:
    """Resolve the leading scope marker and module segments before ``end``.

    Parameters
    ----------
    untreated : DocPath
        Path components left once ``end`` has been parsed.
    end : End
        Already-built end of the link.
    krate : str
        Name of the crate being converted.

    Returns
    -------
    LinkParts or None
        ``None`` when a component is neither a parent step, the crate name nor
        a valid identifier.
    """
    if not untreated:
        return LinkParts(start=EmptyStart(), end=end)

    supers = 0
    for part in untreated.parts:
        if part != PARENT_DIR:
            break
        supers += 1
    untreated = untreated.strip_first(supers)

    start: Start
    first = untreated.first
    if first is None:
        start = SupersStart(supers) if supers else EmptyStart()
    elif first == CUR_DIR:
        start = LocalStart()
        untreated = untreated.strip_first()
    elif first == ROOT_DIR:
        return None
    elif first == krate:
        start = CrateStart()
        untreated = untreated.strip_first()
    elif supers == 0:
        if not is_identifier(first):
            return None
        start = ModStart(first)
        untreated = untreated.strip_first()
    else:
        start = SupersStart(supers)

    if not all(is_identifier(part) for part in untreated.parts):
        return None
    return LinkParts(start=start, end=end, modules=untreated.parts)


__all__ = [
    "HTTP_SCHEMES",
    "MalformedCaptureError",
    "UnclassifiableLinkError",
    "associated_item_parts",
    "classify",
    "favored_parts",
    "item_parts",
    "module_parts",
    "section_parts",
    "start_and_middle",
    "start_middle_end",
]
