"""Conversion options and the ignore-file configuration.

The ignore file lets users pin links that must keep their current form, either
everywhere or for specific source files. :func:`load_ignore_config` parses it
into an :class:`IgnoreConfig` whose ``is_ignored`` query the transformer
consults before rewriting a link.

Examples
--------
>>> from intraconv.config import ConversionOptions
>>> ConversionOptions(krate="regex", disambiguate=True).favored_links
True
"""

from .loader import load_ignore_config
from .models import (
    ConversionOptions,
    IgnoreConfig,
    IgnoreConfigError,
    InvalidCrateNameError,
    is_identifier,
    normalize_crate_name,
    validate_crate_name,
)

__all__ = [
    "ConversionOptions",
    "IgnoreConfig",
    "IgnoreConfigError",
    "InvalidCrateNameError",
    "is_identifier",
    "load_ignore_config",
    "normalize_crate_name",
    "validate_crate_name",
]
