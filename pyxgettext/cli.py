"""
Main CLI entry point for pyxgettext.

This module provides the Click-based command-line interface: it turns
options into a :class:`~pyxgettext.core.config.Config`, runs the extractor
over the given files and writes the catalog template.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import click

from . import __version__
from .core.catalog import Catalog
from .core.config import Config
from .core.exceptions import UsageError, XgettextError, handle_exception
from .core.writer import CatalogWriter
from .extractor import Extractor
from .utils.logging import configure_logging

DEFAULT_OUTPUT = "messages.pot"

logger = logging.getLogger(__name__)


def read_files_from(path: Path) -> List[str]:
    """
    Read input file names from a list file, one per line.

    Blank lines and lines starting with ``#`` are ignored.
    """
    names = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#"):
                names.append(line)
    return names


def build_config(config_file: Optional[Path], **options) -> Config:
    """
    Build the run configuration.

    Options left as None fall back to the configuration file, then to the
    built-in defaults.
    """
    overrides = {k: v for k, v in options.items() if v is not None}
    if config_file is not None:
        return Config.from_file(config_file, **overrides)
    return Config(**overrides)


def resolve_output(output: Optional[str], output_dir: Optional[Path]) -> str:
    """Return the output path, or ``-`` for standard output."""
    output = output or DEFAULT_OUTPUT
    if output == "-" or output_dir is None:
        return output
    return str(output_dir / output)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("files", nargs=-1)
@click.option("--output", "-o", help=f"Write output to this file ('-' for stdout, default {DEFAULT_OUTPUT})")
@click.option(
    "--output-dir", "-p",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory the output file is placed in",
)
@click.option(
    "--files-from", "-f",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Get list of input files from this file",
)
@click.option(
    "--config", "-c", "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Configuration file with an [xgettext] section",
)
@click.option("--add-comments-tag", "comments_tag", help="Place comment blocks starting with TAG in the output")
@click.option("--keyword", "-k", help="Name of the translation function")
@click.option("--keyword-plural", help="Name of the plural translation function")
@click.option("--keyword-contextual", help="Name of the contextual translation function")
@click.option("--skip-args", type=int, help="Number of leading arguments to skip in marker calls")
@click.option("--sort-output", "-s", is_flag=True, default=None, help="Generate sorted output")
@click.option("--no-location", is_flag=True, default=None, help="Do not write '#: filename:line' lines")
@click.option("--package-name", help="Set package name in output")
@click.option("--msgid-bugs-address", help="Set report address for msgid bugs")
@click.option("--verbose", "-v", count=True, help="Increase verbosity (can be used multiple times)")
@click.option("--quiet", "-q", count=True, help="Decrease verbosity (can be used multiple times)")
@click.version_option(version=__version__, prog_name="pyxgettext")
def cli(
    files: Tuple[str, ...],
    output: Optional[str],
    output_dir: Optional[Path],
    files_from: Optional[Path],
    config_file: Optional[Path],
    verbose: int,
    quiet: int,
    **options,
) -> None:
    """
    Extract translatable strings from Python source files.

    Calls to the configured marker functions whose arguments are string
    literals are collected into a gettext catalog template.
    """
    configure_logging(verbose - quiet)

    inputs = list(files)
    if files_from is not None:
        inputs.extend(read_files_from(files_from))
    if not inputs:
        raise UsageError("no input files given")

    config = build_config(config_file, **options)

    extractor = Extractor(config, Catalog())
    catalog = extractor.process_files(inputs)

    target = resolve_output(output, output_dir)
    with click.open_file(target, "w", encoding="utf-8") as sink:
        CatalogWriter(config).write(catalog, sink)

    logger.info("Wrote %d messages to %s", len(catalog), target)


def handle_keyboard_interrupt() -> int:
    """Handle KeyboardInterrupt."""
    click.echo("\npyxgettext: Operation cancelled by user", err=True)
    return 130


# Main entry point
def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    try:
        cli.main(args=args, standalone_mode=False)
        return 0

    except click.exceptions.Abort:
        return handle_keyboard_interrupt()
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except XgettextError as e:
        return handle_exception(e)
    except KeyboardInterrupt:
        return handle_keyboard_interrupt()
    except OSError as e:
        click.echo(f"pyxgettext: {e}", err=True)
        return 2
    except Exception as e:
        return handle_exception(e)


if __name__ == "__main__":
    sys.exit(main())
