"""
Unit tests for extraction of marker calls from Python source files.
"""

import io
import logging
from dataclasses import replace
from unittest.mock import patch

import pytest

from pyxgettext.core.catalog import Catalog
from pyxgettext.core.exceptions import ParseError, SourceFileError
from pyxgettext.core.types import CatalogKey, Finding
from pyxgettext.core.writer import write_catalog
from pyxgettext.extractor import Extractor, process_files


def entries(catalog: Catalog) -> dict:
    return dict(catalog.items())


class TestProcessFiles:
    """Test process_files against small source files."""

    def test_process_files_simple(self, config, make_source_file):
        fname = make_source_file(
            """import i18n

def main():
    # TRANSLATORS: foo comment
    i18n.G("foo")
"""
        )
        catalog = process_files([fname], config)

        assert entries(catalog) == {
            CatalogKey("", "foo"): [
                Finding(
                    id="foo",
                    file=fname,
                    line=5,
                    comment="#. TRANSLATORS: foo comment\n",
                )
            ]
        }

    def test_process_files_multiple(self, config, make_source_file):
        """Test two calls with the same id merge into one entry."""
        fname = make_source_file(
            """import i18n

def main():
    # TRANSLATORS: foo comment
    i18n.G("foo")

    # TRANSLATORS: bar comment
    i18n.G("foo")
"""
        )
        catalog = process_files([fname], config)

        assert entries(catalog) == {
            CatalogKey("", "foo"): [
                Finding(
                    id="foo",
                    file=fname,
                    line=5,
                    comment="#. TRANSLATORS: foo comment\n",
                ),
                Finding(
                    id="foo",
                    file=fname,
                    line=8,
                    comment="#. TRANSLATORS: bar comment\n",
                ),
            ]
        }

    def test_process_files_concat(self, config, make_source_file):
        fname = make_source_file(
            """import i18n

def main():
    # TRANSLATORS: foo comment
    i18n.G("foo\\n" + "bar\\n" + "baz")
"""
        )
        catalog = process_files([fname], config)

        assert entries(catalog) == {
            CatalogKey("", "foo\\nbar\\nbaz"): [
                Finding(
                    id="foo\\nbar\\nbaz",
                    file=fname,
                    line=5,
                    comment="#. TRANSLATORS: foo comment\n",
                )
            ]
        }

    def test_process_files_across_files(self, config, make_source_file):
        """Test occurrences follow the order the files were given in."""
        second = make_source_file('i18n.G("foo")\n', name="b.py")
        first = make_source_file('\n\ni18n.G("foo")\n', name="a.py")

        catalog = process_files([second, first], config)

        locations = [f.location for f in catalog.occurrences(CatalogKey("", "foo"))]
        assert locations == [f"{second}:1", f"{first}:3"]

    def test_process_files_into_existing_catalog(self, config, make_source_file):
        fname = make_source_file('i18n.G("foo")\n')
        catalog = Catalog()

        result = process_files([fname], config, catalog)

        assert result is catalog
        assert CatalogKey("", "foo") in catalog

    def test_process_files_with_quote(self, config, header, make_source_file):
        fname = make_source_file(
            """import i18n

def main():
    i18n.G(' foo "bar"')
"""
        )
        catalog = process_files([fname], config)
        out = io.StringIO()
        write_catalog(catalog, out, config)

        assert out.getvalue() == header + (
            "\n"
            f"#: {fname}:4\n"
            'msgid   " foo \\"bar\\""\n'
            'msgstr  ""\n'
            "\n"
        )

    def test_process_files_with_double_quote(self, config, header, make_source_file):
        fname = make_source_file(
            """import i18n

def main():
    i18n.G("foo \\"bar\\"")
"""
        )
        catalog = process_files([fname], config)
        out = io.StringIO()
        write_catalog(catalog, out, config)

        assert out.getvalue() == header + (
            "\n"
            f"#: {fname}:4\n"
            'msgid   "foo \\"bar\\""\n'
            'msgstr  ""\n'
            "\n"
        )

    def test_skip_args(self, config, header, make_source_file):
        fname = make_source_file(
            """import i18n

def main():
    i18n.G("arg-to-skip", "foo")
"""
        )
        catalog = process_files([fname], replace(config, skip_args=1))
        out = io.StringIO()
        write_catalog(catalog, out, config)

        assert out.getvalue() == header + (
            "\n"
            f"#: {fname}:4\n"
            'msgid   "foo"\n'
            'msgstr  ""\n'
            "\n"
        )

    def test_msgctxt(self, config, header, make_source_file):
        fname = make_source_file(
            """import i18n

def main():
    i18n.CG("ctx1", "foo")
"""
        )
        catalog = process_files([fname], config)
        out = io.StringIO()
        write_catalog(catalog, out, config)

        assert out.getvalue() == header + (
            "\n"
            f"#: {fname}:4\n"
            'msgctxt "ctx1"\n'
            'msgid   "foo"\n'
            'msgstr  ""\n'
            "\n"
        )

    def test_plural(self, config, make_source_file):
        fname = make_source_file(
            """import i18n

# TRANSLATORS: plural
i18n.NG("singular", "plural", 99)
"""
        )
        catalog = process_files([fname], config)

        assert entries(catalog) == {
            CatalogKey("", "singular"): [
                Finding(
                    id="singular",
                    file=fname,
                    line=4,
                    plural_id="plural",
                    comment="#. TRANSLATORS: plural\n",
                )
            ]
        }


class TestCallMatching:
    """Test which calls are matched and how arguments are read."""

    def extract(self, config, make_source_file, source):
        return process_files([make_source_file(source)], config)

    def test_comment_without_tag_ignored(self, config, make_source_file):
        catalog = self.extract(
            config,
            make_source_file,
            """# this comment has no translators tag
i18n.G("abc")
""",
        )
        assert catalog.occurrences(CatalogKey("", "abc"))[0].comment == ""

    def test_multiline_comment_block(self, config, make_source_file):
        catalog = self.extract(
            config,
            make_source_file,
            """# TRANSLATORS: foo comment
#              with multiple lines
i18n.G("foo")
""",
        )
        assert catalog.occurrences(CatalogKey("", "foo"))[0].comment == (
            "#. TRANSLATORS: foo comment\n#. with multiple lines\n"
        )

    def test_comment_separated_by_blank_line(self, config, make_source_file):
        catalog = self.extract(
            config,
            make_source_file,
            """# TRANSLATORS: too far away

i18n.G("foo")
""",
        )
        assert catalog.occurrences(CatalogKey("", "foo"))[0].comment == ""

    def test_comment_attaches_to_statement(self, config, make_source_file):
        """Test a call on a continuation line still gets the comment."""
        catalog = self.extract(
            config,
            make_source_file,
            """# TRANSLATORS: greeting
print(
    i18n.G("hello"))
""",
        )
        finding = catalog.occurrences(CatalogKey("", "hello"))[0]
        assert finding.comment == "#. TRANSLATORS: greeting\n"
        assert finding.line == 3

    def test_nested_calls_found(self, config, make_source_file):
        catalog = self.extract(
            config,
            make_source_file,
            """class Greeter:
    def greet(self):
        return log(i18n.G("one"), [i18n.G("two")])
""",
        )
        assert [k.id for k in catalog.keys()] == ["one", "two"]

    def test_non_literal_arguments_skipped(self, config, make_source_file):
        catalog = self.extract(
            config,
            make_source_file,
            """i18n.G(name)
i18n.G("prefix" + name)
i18n.G(f"{name}")
i18n.NG("one", plural_name, 2)
i18n.CG(ctx, "foo")
i18n.G("valid")
""",
        )
        assert [k.id for k in catalog.keys()] == ["valid"]

    def test_missing_arguments_skipped(self, config, make_source_file):
        catalog = self.extract(
            config,
            make_source_file,
            """i18n.G()
i18n.NG("only one")
i18n.CG("ctx")
""",
        )
        assert len(catalog) == 0

    def test_skip_args_leaves_too_few(self, config, make_source_file):
        catalog = process_files(
            [make_source_file('i18n.G("only")\n')], replace(config, skip_args=1)
        )
        assert len(catalog) == 0

    def test_empty_msgid_ignored(self, config, make_source_file, caplog):
        with caplog.at_level(logging.WARNING, logger="pyxgettext"):
            catalog = self.extract(config, make_source_file, 'i18n.G("")\n')

        assert len(catalog) == 0
        assert "not recording empty msgid" in caplog.text
        assert "collide with the catalog header" in caplog.text

    def test_skipped_call_logged_at_debug(self, config, make_source_file, caplog):
        with caplog.at_level(logging.DEBUG, logger="pyxgettext"):
            self.extract(config, make_source_file, "i18n.G(name)\n")

        assert "not a string literal" in caplog.text

    def test_other_callees_ignored(self, config, make_source_file):
        catalog = self.extract(
            config,
            make_source_file,
            """G("plain name")
other.G("other module")
i18n.G.extra("longer chain")
get()("call result")
""",
        )
        assert len(catalog) == 0

    def test_plain_name_keyword(self, config, make_source_file):
        catalog = process_files(
            [make_source_file('_("hello")\n')], replace(config, keyword="_")
        )
        assert [k.id for k in catalog.keys()] == ["hello"]

    def test_format_hint(self, config, make_source_file):
        catalog = self.extract(
            config,
            make_source_file,
            """i18n.G("zz %s")
i18n.NG("one file", "%d files", n)
i18n.G("100%%")
""",
        )
        assert catalog.format_hint_for(CatalogKey("", "zz %s")) == "python-format"
        assert catalog.format_hint_for(CatalogKey("", "one file")) == "python-format"
        assert catalog.format_hint_for(CatalogKey("", "100%%")) is None

    def test_keyword_arguments_not_used(self, config, make_source_file):
        catalog = self.extract(config, make_source_file, 'i18n.G(msg="foo")\n')
        assert len(catalog) == 0

    def test_percent_before_word_is_not_a_format(self, config, make_source_file):
        catalog = self.extract(config, make_source_file, 'i18n.G("50% discount")\n')
        assert catalog.format_hint_for(CatalogKey("", "50% discount")) is None

    def test_long_concatenation(self, config, make_source_file):
        source = "i18n.G(" + " + ".join(['"a"'] * 600) + ")\n"
        catalog = self.extract(config, make_source_file, source)
        assert [k.id for k in catalog.keys()] == ["a" * 600]

    def test_call_inside_long_expression(self, config, make_source_file):
        source = "x = " + " + ".join(["y"] * 600) + ' + i18n.G("tail")\n'
        catalog = self.extract(config, make_source_file, source)
        assert [k.id for k in catalog.keys()] == ["tail"]

    def test_comment_above_decorator(self, config, make_source_file):
        fname = make_source_file(
            """import click


# TRANSLATORS: help for --name
@click.option("--name", help=i18n.G("Your name"))
def cmd(name):
    pass
"""
        )
        catalog = process_files([fname], config)

        [finding] = catalog.occurrences(CatalogKey("", "Your name"))
        assert finding.comment == "#. TRANSLATORS: help for --name\n"
        assert finding.line == 5

    def test_comment_above_second_decorator(self, config, make_source_file):
        fname = make_source_file(
            """# TRANSLATORS: command help
@click.command(help=i18n.G("Greet"))
# TRANSLATORS: option help
@click.option("--name", help=i18n.G("Your name"))
class Cmd:
    pass
"""
        )
        catalog = process_files([fname], config)

        assert catalog.occurrences(CatalogKey("", "Greet"))[0].comment == (
            "#. TRANSLATORS: command help\n"
        )
        assert catalog.occurrences(CatalogKey("", "Your name"))[0].comment == (
            "#. TRANSLATORS: option help\n"
        )

    def test_default_argument_of_decorated_function(self, config, make_source_file):
        fname = make_source_file(
            """# TRANSLATORS: greeting
@decorator
def greet(text=i18n.G("Hello")):
    pass
"""
        )
        catalog = process_files([fname], config)

        assert catalog.occurrences(CatalogKey("", "Hello"))[0].comment == (
            "#. TRANSLATORS: greeting\n"
        )


class TestExtractorErrors:
    """Test fatal errors while processing files."""

    def test_syntax_error_is_fatal(self, config, make_source_file):
        good = make_source_file('i18n.G("good")\n', name="good.py")
        bad = make_source_file("def broken(\n", name="bad.py")
        after = make_source_file('i18n.G("after")\n', name="after.py")
        extractor = Extractor(config)

        with pytest.raises(ParseError) as exc_info:
            extractor.process_files([good, bad, after])

        assert exc_info.value.file_path == bad
        assert exc_info.value.exitval == 2
        # Earlier findings stay, later files are never read
        assert [k.id for k in extractor.catalog.keys()] == ["good"]

    def test_parse_error_message(self, config, make_source_file):
        bad = make_source_file("x = (\n", name="bad.py")

        with pytest.raises(ParseError) as exc_info:
            process_files([bad], config)

        error = exc_info.value
        assert str(error) == f"{error.message} at {bad}:{error.line_number}"
        assert str(error).count(bad) == 1

    def test_missing_file(self, config, tmp_path):
        missing = tmp_path / "missing.py"

        with pytest.raises(SourceFileError) as exc_info:
            process_files([missing], config)

        assert exc_info.value.file_path == str(missing)

    def test_undecodable_file(self, config, tmp_path):
        path = tmp_path / "latin.py"
        path.write_bytes(b'i18n.G("caf\xe9")\n')

        with pytest.raises(SourceFileError):
            process_files([path], config)

    def test_encoding_declaration_honoured(self, config, tmp_path):
        path = tmp_path / "latin.py"
        path.write_bytes(b'# -*- coding: latin-1 -*-\ni18n.G("caf\xe9")\n')

        catalog = process_files([path], config)

        assert [k.id for k in catalog.keys()] == ["café"]

    def test_process_source_directly(self, config):
        extractor = Extractor(config)

        found = extractor.process_source('i18n.G("a")\ni18n.G("b")\n', "<string>")

        assert found == 2
        assert extractor.catalog.occurrences(CatalogKey("", "a"))[0].file == "<string>"

    def test_recursion_reported_as_parse_error(self, config):
        extractor = Extractor(config)

        with patch(
            "pyxgettext.extractor.CallMatcher.visit", side_effect=RecursionError
        ):
            with pytest.raises(ParseError) as exc_info:
                extractor.process_source('i18n.G("a")\n', "deep.py")

        assert str(exc_info.value) == "expression nested too deeply in deep.py"
