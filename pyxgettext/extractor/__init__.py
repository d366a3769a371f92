"""
Extraction of translatable strings from Python source files.

Files are processed one at a time, in the order given, and every finding
is recorded into a single :class:`~pyxgettext.core.catalog.Catalog`.
"""

import ast
import logging
import tokenize
from pathlib import Path
from typing import Iterable, Optional, Union

from ..core.catalog import Catalog
from ..core.config import Config
from ..core.exceptions import ParseError, SourceFileError, format_file_error
from .comments import collect_comments
from .matcher import CallMatcher

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class Extractor:
    """Runs the call matcher over source files, accumulating one catalog."""

    def __init__(self, config: Config, catalog: Optional[Catalog] = None) -> None:
        self.config = config
        self.catalog = catalog if catalog is not None else Catalog()

    def _read_source(self, path: str) -> str:
        try:
            # tokenize.open honours PEP 263 encoding declarations
            with tokenize.open(path) as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise SourceFileError(
                format_file_error("read", path, str(e)),
                file_path=path,
                previous_exception=e,
            )
        except SyntaxError as e:
            # Raised by encoding detection for undecodable or bad cookies
            raise SourceFileError(
                format_file_error("decode", path, e.msg),
                file_path=path,
                previous_exception=e,
            )

    def process_source(self, source: str, filename: str) -> int:
        """
        Extract findings from source text.

        Args:
            source: Python source code
            filename: Name recorded in the location of each finding

        Returns:
            Number of findings recorded

        Raises:
            ParseError: If the source is not valid Python or nests too deeply
        """
        try:
            tree = ast.parse(source, filename=filename)
            comments = collect_comments(source)
            matcher = CallMatcher(self.config, filename, self.catalog, comments)
            matcher.visit(tree)
        except SyntaxError as e:
            raise ParseError(
                e.msg,
                file_path=filename,
                line_number=e.lineno,
                previous_exception=e,
            )
        except tokenize.TokenError as e:
            raise ParseError(
                str(e.args[0]),
                file_path=filename,
                line_number=e.args[1][0] if len(e.args) > 1 else None,
                previous_exception=e,
            )
        except RecursionError as e:
            raise ParseError(
                "expression nested too deeply", file_path=filename, previous_exception=e
            )

        return matcher.found

    def process_file(self, path: PathLike) -> int:
        """
        Extract findings from one file.

        Args:
            path: Source file path, recorded as given

        Returns:
            Number of findings recorded

        Raises:
            SourceFileError: If the file cannot be read
            ParseError: If the file is not valid Python
        """
        filename = str(path)
        logger.debug("Processing %s", filename)
        found = self.process_source(self._read_source(filename), filename)
        logger.info("Extracted %d strings from %s", found, filename)
        return found

    def process_files(self, paths: Iterable[PathLike]) -> Catalog:
        """
        Extract findings from every file, in order.

        Processing stops at the first file that fails; findings from the
        files before it remain in the catalog.

        Args:
            paths: Source files

        Returns:
            The extractor's catalog
        """
        count = 0
        for path in paths:
            self.process_file(path)
            count += 1

        logger.info(
            "Scanned %d files, catalog holds %d messages", count, len(self.catalog)
        )
        return self.catalog


def process_files(
    paths: Iterable[PathLike],
    config: Optional[Config] = None,
    catalog: Optional[Catalog] = None,
) -> Catalog:
    """
    Extract translatable strings from ``paths`` into a catalog.

    Args:
        paths: Source files, processed in the given order
        config: Extraction settings (defaults apply when omitted)
        catalog: Catalog to add to; a new one is created when omitted

    Returns:
        Catalog holding every finding

    Raises:
        ParseError: On the first file that is not valid Python
        SourceFileError: On the first file that cannot be read
    """
    return Extractor(config or Config(), catalog).process_files(paths)


__all__ = ["Extractor", "process_files"]
