"""
Type system for pyxgettext.

This module defines the value types shared by the extractor, the catalog
aggregator and the catalog writer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Literal, NamedTuple, Optional

# Zero-argument callable producing the POT-Creation-Date header value
TimeSource = Callable[[], str]

# Verbosity levels
VerbosityLevel = Literal[-2, -1, 0, 1, 2, 3]


class MarkerKind(Enum):
    """Argument layout of a recognised marker function call."""

    PLAIN = "plain"
    PLURAL = "plural"
    CONTEXTUAL = "contextual"

    @property
    def required_args(self) -> int:
        """Number of literal arguments the marker needs after skipped ones."""
        return 1 if self is MarkerKind.PLAIN else 2


class CatalogKey(NamedTuple):
    """Identity of a catalog entry: message context plus message id."""

    context: str
    id: str


@dataclass(frozen=True)
class Finding:
    """
    One matched call site.

    Values are stored in catalog-encoded form (newlines as the two
    characters backslash-n), see ``pyxgettext.extractor.literals``.
    """

    id: str
    file: str
    line: int
    context: Optional[str] = None
    plural_id: Optional[str] = None
    comment: str = ""
    format_hint: Optional[str] = None

    @property
    def key(self) -> CatalogKey:
        return CatalogKey(self.context or "", self.id)

    @property
    def location(self) -> str:
        return f"{self.file}:{self.line}"
