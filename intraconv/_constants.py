"""Common literal values used across intraconv.

These constants keep the rustdoc vocabulary and the regex fragments built from
it in one place so the classifier, the candidate extractor and tests can import
the same values without drifting.

Examples
--------
>>> from intraconv import _constants
>>> "struct" in _constants.ITEM_TYPES
True
>>> _constants.DEFAULT_KRATE
'my_krate'
"""

from __future__ import annotations

import re

VERSION = "0.1.0"

DEFAULT_KRATE = "my_krate"

# Every item kind rustdoc uses as a page or anchor prefix.
ITEM_TYPES: tuple[str, ...] = (
    "associatedconstant",
    "associatedtype",
    "attr",
    "constant",
    "derive",
    "enum",
    "externcrate",
    "fn",
    "foreigntype",
    "impl",
    "import",
    "keyword",
    "macro",
    "method",
    "mod",
    "opaque",
    "primitive",
    "static",
    "struct",
    "structfield",
    "trait",
    "traitalias",
    "tymethod",
    "type",
    "union",
    "variant",
)

ITEM_TYPES_PATTERN = "(?:" + "|".join(ITEM_TYPES) + ")"
RUST_IDENTIFIER = r"(?:[a-zA-Z_][a-zA-Z0-9_]*)"
HTML_SECTION = r"(?:#[a-zA-Z0-9_\-\.]+)"

RUST_IDENTIFIER_RE = re.compile(rf"^{RUST_IDENTIFIER}$")

DOCS_RS = "docs.rs"
DOC_RUST_LANG_ORG = "doc.rust-lang.org"

DOCS_RS_VERSION_RE = re.compile(r"(?:\d+\.\d+\.\d+|latest)")
RUST_LANG_VERSION_RE = re.compile(r"1\.\d+\.\d+")
RUST_LANG_CHANNELS: tuple[str, ...] = ("nightly", "beta", "stable")
RUST_LANG_CRATES: tuple[str, ...] = (
    "std",
    "alloc",
    "core",
    "test",
    "proc_macro",
    "nightly-rustc",
)

DELETED_LOCAL_LINK_REASON = "Deleted local link (of the form '[name]: name')"
