"""Rewrite rustdoc path and URL links in Rust sources as intra-doc links.

This package exposes the CLI entry points behind the ``intraconv`` console
script. The conversion engine lives in :mod:`intraconv.transform`; the other
modules classify link targets and render them as intra-doc paths.

Exports
-------
- ``app``: Cyclopts application converting files and printing the report.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from intraconv import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
