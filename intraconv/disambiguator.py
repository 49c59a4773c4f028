"""Map rustdoc item kinds to intra-doc disambiguators.

Rustdoc accepts ``type@Foo``/``value@Foo`` style prefixes and ``foo()``/``foo!``
style suffixes to tell apart items that share a name. Which one applies is
decided purely by the item kind found in the HTML link (``struct`` in
``struct.Foo.html``, ``method`` in ``#method.bar``, ...).

Examples
--------
>>> from intraconv.disambiguator import disambiguator_for
>>> disambiguator_for("struct")
Disambiguator(kind='prefix', token='type@')
>>> disambiguator_for("macro").token
'!'
>>> disambiguator_for("variant").is_empty
True
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

DisambiguatorKind = typ.Literal["empty", "prefix", "suffix"]


@dc.dataclass(frozen=True, slots=True)
class Disambiguator:
    """Rendering rule attached to an item kind."""

    kind: DisambiguatorKind = "empty"
    token: str = ""

    @property
    def is_empty(self) -> bool:
        return self.kind == "empty"

    @property
    def is_prefix(self) -> bool:
        return self.kind == "prefix"

    @property
    def is_suffix(self) -> bool:
        return self.kind == "suffix"


EMPTY = Disambiguator()
TYPE_PREFIX = Disambiguator("prefix", "type@")
VALUE_PREFIX = Disambiguator("prefix", "value@")
MACRO_PREFIX = Disambiguator("prefix", "macro@")
MOD_PREFIX = Disambiguator("prefix", "mod@")
FN_SUFFIX = Disambiguator("suffix", "()")
MACRO_SUFFIX = Disambiguator("suffix", "!")

_TABLE: dict[str, Disambiguator] = {
    "struct": TYPE_PREFIX,
    "enum": TYPE_PREFIX,
    "trait": TYPE_PREFIX,
    "union": TYPE_PREFIX,
    "type": TYPE_PREFIX,
    "const": VALUE_PREFIX,
    "static": VALUE_PREFIX,
    "value": VALUE_PREFIX,
    "derive": MACRO_PREFIX,
    "attr": MACRO_PREFIX,
    "mod": MOD_PREFIX,
    "fn": FN_SUFFIX,
    "method": FN_SUFFIX,
    "macro": MACRO_SUFFIX,
}


def disambiguator_for(kind: str) -> Disambiguator:
    """Return the disambiguator for ``kind``.

    Parameters
    ----------
    kind : str
        Item kind keyword as it appears in rustdoc URLs (``struct``, ``fn``,
        ``mod`` ...).

    Returns
    -------
    Disambiguator
        The prefix or suffix rule for the kind. Unknown kinds, and
        ``primitive`` whose ``prim@`` prefix is not emitted, map to an empty
        rule.
    """
    return _TABLE.get(kind, EMPTY)


__all__ = [
    "EMPTY",
    "FN_SUFFIX",
    "MACRO_PREFIX",
    "MACRO_SUFFIX",
    "MOD_PREFIX",
    "TYPE_PREFIX",
    "VALUE_PREFIX",
    "Disambiguator",
    "DisambiguatorKind",
    "disambiguator_for",
]
