"""
pyxgettext - extract translatable strings from Python source into a POT file.

The extractor walks the syntax tree of each source file, records calls to
configured marker functions (plain, plural and contextual) whose arguments
are string literals, and the writer renders the merged catalog as a gettext
catalog template.
"""

__version__ = "1.0.0"

from pyxgettext.core.catalog import Catalog
from pyxgettext.core.config import Config
from pyxgettext.core.types import CatalogKey, Finding, MarkerKind
from pyxgettext.core.writer import write_catalog
from pyxgettext.extractor import Extractor, process_files

__all__ = [
    "__version__",
    "Catalog",
    "CatalogKey",
    "Config",
    "Extractor",
    "Finding",
    "MarkerKind",
    "process_files",
    "write_catalog",
]
