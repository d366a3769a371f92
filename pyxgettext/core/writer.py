"""
Catalog template writer for pyxgettext.

This module serializes a :class:`~pyxgettext.core.catalog.Catalog` into the
gettext POT format: a fixed header followed by one entry per catalog key.
Writing is a pure function of the catalog and the configuration, so writing
the same catalog twice produces identical text.
"""

import re
from typing import List, Optional, TextIO, Tuple

from ..utils.template import po_escape, render_header
from .catalog import Catalog
from .config import Config
from .types import CatalogKey

MSGCTXT = "msgctxt "
MSGID = "msgid   "
MSGID_PLURAL = "msgid_plural   "
MSGSTR = "msgstr  "
MSGSTR_PLURAL = ("msgstr[0]  ", "msgstr[1]  ")

# One escape sequence, a run of plain text, or a dangling backslash
_TOKEN = re.compile(r"\\.|[^\\]+|\\", re.DOTALL)


def split_lines(value: str) -> List[str]:
    """
    Split a catalog-encoded value after each escaped newline.

    An empty trailing piece is dropped, so ``foo\\n`` stays one segment.

    Args:
        value: Value with newlines encoded as backslash-n

    Returns:
        Segments, each but possibly the last ending in backslash-n
    """
    segments = []
    current = ""
    for token in _TOKEN.findall(value):
        current += token
        if token == "\\n":
            segments.append(current)
            current = ""
    if current or not segments:
        segments.append(current)
    return segments


def format_keyword(keyword: str, value: str) -> str:
    """
    Render ``keyword "value"`` with multi-line wrapping.

    Continuation segments are aligned under the opening quote of the
    first one.

    Args:
        keyword: Keyword including its trailing padding (e.g. ``msgid   ``)
        value: Catalog-encoded value

    Returns:
        One or more lines, newline terminated
    """
    indent = " " * len(keyword)
    lines = []
    for i, segment in enumerate(split_lines(value)):
        prefix = keyword if i == 0 else indent
        lines.append(f'{prefix}"{po_escape(segment)}"\n')
    return "".join(lines)


class CatalogWriter:
    """Renders catalogs as POT text using a fixed configuration."""

    def __init__(self, config: Config) -> None:
        self.config = config

    def header_metadata(self) -> List[Tuple[str, str]]:
        """Return the header msgstr fields in output order."""
        return [
            ("Project-Id-Version", self.config.package_name),
            ("Report-Msgid-Bugs-To", self.config.msgid_bugs_address),
            ("POT-Creation-Date", self.config.creation_date()),
            ("MIME-Version", "1.0"),
            ("Content-Type", "text/plain; charset=utf-8"),
            ("Content-Transfer-Encoding", "8bit"),
        ]

    def render_header(self) -> str:
        return render_header(self.header_metadata())

    def render_entry(self, catalog: Catalog, key: CatalogKey) -> str:
        """
        Render a single catalog entry, including its trailing blank line.

        Args:
            catalog: Catalog holding the entry
            key: Entry key

        Returns:
            Entry text
        """
        findings = catalog.occurrences(key)
        out = []

        for finding in findings:
            if finding.comment:
                out.append(finding.comment)

        if not self.config.no_location:
            locations = " ".join(f.location for f in findings)
            out.append(f"#: {locations}\n")

        format_hint = catalog.format_hint_for(key)
        if format_hint:
            out.append(f"#, {format_hint}\n")

        if key.context:
            out.append(format_keyword(MSGCTXT, key.context))
        out.append(format_keyword(MSGID, key.id))

        plural_id = catalog.plural_id_for(key)
        if plural_id is not None:
            out.append(format_keyword(MSGID_PLURAL, plural_id))
            for keyword in MSGSTR_PLURAL:
                out.append(f'{keyword}""\n')
        else:
            out.append(f'{MSGSTR}""\n')

        out.append("\n")
        return "".join(out)

    def render(self, catalog: Catalog) -> str:
        """Render header and all entries."""
        parts = [self.render_header(), "\n"]
        for key in catalog.keys(sort=self.config.sort_output):
            parts.append(self.render_entry(catalog, key))
        return "".join(parts)

    def write(self, catalog: Catalog, sink: TextIO) -> None:
        """
        Write the rendered catalog to ``sink``.

        Errors raised by the sink propagate to the caller.
        """
        sink.write(self.render(catalog))


def write_catalog(
    catalog: Catalog, sink: TextIO, config: Optional[Config] = None
) -> None:
    """
    Write ``catalog`` to ``sink`` as a POT template.

    Args:
        catalog: Catalog to serialize
        sink: Writable text stream
        config: Output settings (defaults apply when omitted)
    """
    CatalogWriter(config or Config()).write(catalog, sink)
