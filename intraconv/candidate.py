"""Find markdown links that may become intra-doc links and rewrite them.

Two link forms are recognized:

* long form, ``[name]: target``, which must make up the whole line (doc
  comment markers and indentation aside);
* short form, ``[name](target)``, which may appear several times inside a
  line of prose.

Only targets made of path characters qualify, so links that already are
intra-doc paths (``crate::Type``) or carry a disambiguator are never picked
up again. Targets rooted at ``/`` are refused: they cannot be expressed as an
intra-doc path.

Examples
--------
>>> from intraconv.candidate import rewrite_line
>>> from intraconv.config import ConversionOptions
>>> rewrite_line("/// [`Vec`]: struct.Vec.html\\n", ConversionOptions()).text
'/// [`Vec`]: Vec\\n'
>>> rewrite_line("See [a](fn.a.html).", ConversionOptions()).text
'See [a](a()).'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import re
import typing as typ

from .classifier import UnclassifiableLinkError, classify

if typ.TYPE_CHECKING:
    from .config.models import ConversionOptions

logger = logging.getLogger(__name__)

LINK_TARGET = r"(?:https?:)?[a-zA-Z0-9_#/\-\.]+"

LONG_LINK_RE = re.compile(
    r"^(?P<header>\s*(?://[!/]\s*)?\[(?P<name>.*?)\]:\s*)"
    rf"(?P<link>{LINK_TARGET})(?P<eol>\r?\n)?\Z"
)
# Link text may hold brackets nested one level deep.
SHORT_LINK_NAME = r"(?:[^\[\]\n]|\[[^\[\]\n]*\])*"
SHORT_LINK_RE = re.compile(
    rf"\[(?P<name>{SHORT_LINK_NAME})\]\((?P<link>{LINK_TARGET})\)"
)

IgnorePredicate = cabc.Callable[[str, str], bool]


@dc.dataclass(frozen=True, slots=True)
class Candidate:
    """A link found in a line, with the positions needed to rewrite it."""

    name: str
    target: str
    long_form: bool
    target_span: tuple[int, int]
    link_span: tuple[int, int]

    @property
    def display_name(self) -> str:
        """Link text without surrounding backticks."""
        return self.name.strip("`")

    def transform(
        self, options: ConversionOptions, current_type: str | None = None
    ) -> str | None:
        """Return the intra-doc form of the target, or ``None`` to keep it.

        Primitive pages have no path-based intra-doc equivalent, so they are
        kept as they are, like targets that cannot be classified.
        """
        try:
            parts = classify(self.target, options)
        except UnclassifiableLinkError:
            logger.debug("leaving unrecognized link target %r", self.target)
            return None
        if parts.is_primitive:
            return None
        return parts.render(current_type, disambiguate=options.disambiguate)

    def substitute(self, line: str, rendered: str) -> str:
        """Return ``line`` with this link pointing at ``rendered``."""
        if not self.long_form and rendered == self.display_name:
            start, end = self.link_span
            return f"{line[:start]}[{self.name}]{line[end:]}"
        start, end = self.target_span
        return f"{line[:start]}{rendered}{line[end:]}"


def _is_absolute(target: str) -> bool:
    return target.startswith("/")


def find_candidates(line: str) -> list[Candidate]:
    """Return the links of ``line`` that may be converted, in line order."""
    long_match = LONG_LINK_RE.match(line)
    if long_match is not None:
        target = long_match.group("link")
        if _is_absolute(target):
            return []
        return [
            Candidate(
                name=long_match.group("name"),
                target=target,
                long_form=True,
                target_span=long_match.span("link"),
                link_span=long_match.span(),
            )
        ]

    return [
        Candidate(
            name=short_match.group("name"),
            target=short_match.group("link"),
            long_form=False,
            target_span=short_match.span("link"),
            link_span=short_match.span(),
        )
        for short_match in SHORT_LINK_RE.finditer(line)
        if not _is_absolute(short_match.group("link"))
    ]


@dc.dataclass(frozen=True, slots=True)
class LineRewrite:
    """Outcome of :func:`rewrite_line`."""

    text: str
    long_form: bool = False
    converted: int = 0


def rewrite_line(
    line: str,
    options: ConversionOptions,
    current_type: str | None = None,
    ignored: IgnorePredicate | None = None,
) -> LineRewrite:
    """Rewrite every convertible link of ``line``.

    Parameters
    ----------
    line : str
        Source line, with or without its line terminator.
    options : ConversionOptions
        Crate name and rendering switches.
    current_type : str or None, optional
        Type whose block encloses the line; used for bare associated items.
    ignored : callable, optional
        ``ignored(name, target)`` returning True for links that must be kept.

    Returns
    -------
    LineRewrite
        The new text, whether the line held a long-form link and how many
        links were converted (a converted link may render unchanged).
    """
    candidates = find_candidates(line)
    text = line
    converted = 0
    # Right to left so earlier spans stay valid.
    for candidate in reversed(candidates):
        if ignored is not None and ignored(candidate.name, candidate.target):
            continue
        rendered = candidate.transform(options, current_type)
        if rendered is None:
            continue
        text = candidate.substitute(text, rendered)
        converted += 1
    long_form = bool(candidates) and candidates[0].long_form
    return LineRewrite(text=text, long_form=long_form, converted=converted)


__all__ = [
    "LONG_LINK_RE",
    "SHORT_LINK_RE",
    "Candidate",
    "IgnorePredicate",
    "LineRewrite",
    "find_candidates",
    "rewrite_line",
]
