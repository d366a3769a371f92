"""Shared test fixtures and configuration for pyxgettext tests."""

import logging
from pathlib import Path
from typing import Callable

import pytest

from pyxgettext.core.catalog import Catalog
from pyxgettext.core.config import Config

FIXED_TIME = "2015-06-30 14:48+0200"

HEADER = """# SOME DESCRIPTIVE TITLE.
# Copyright (C) YEAR THE PACKAGE'S COPYRIGHT HOLDER
# This file is distributed under the same license as the PACKAGE package.
# FIRST AUTHOR <EMAIL@ADDRESS>, YEAR.
#
#, fuzzy
msgid   ""
msgstr  "Project-Id-Version: snappy\\n"
        "Report-Msgid-Bugs-To: snappy-devel@lists.ubuntu.com\\n"
        "POT-Creation-Date: 2015-06-30 14:48+0200\\n"
        "MIME-Version: 1.0\\n"
        "Content-Type: text/plain; charset=utf-8\\n"
        "Content-Transfer-Encoding: 8bit\\n"
"""


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo CLI logging setup so caplog sees pyxgettext records."""
    yield
    logger = logging.getLogger("pyxgettext")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def config() -> Config:
    """Test defaults: i18n.* keywords, sorted output, fixed header time."""
    return Config(
        comments_tag="TRANSLATORS:",
        keyword="i18n.G",
        keyword_plural="i18n.NG",
        keyword_contextual="i18n.CG",
        sort_output=True,
        no_location=False,
        package_name="snappy",
        msgid_bugs_address="snappy-devel@lists.ubuntu.com",
        time_source=lambda: FIXED_TIME,
    )


@pytest.fixture
def header() -> str:
    """Header rendered for the ``config`` fixture."""
    return HEADER


@pytest.fixture
def catalog() -> Catalog:
    return Catalog()


@pytest.fixture
def make_source_file(tmp_path: Path) -> Callable[[str], str]:
    """Return a helper writing Python source to ``foo.py`` in a temp dir."""

    def _make(content: str, name: str = "foo.py") -> str:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _make
