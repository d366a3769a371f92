"""
Core application logic for pyxgettext.

This module contains the shared types, configuration, the catalog
aggregator and the catalog template writer.
"""

from pyxgettext.core.exceptions import (
    ConfigurationError,
    ParseError,
    SourceFileError,
    UsageError,
    XgettextError,
)

__all__ = [
    "XgettextError",
    "ConfigurationError",
    "ParseError",
    "SourceFileError",
    "UsageError",
]
