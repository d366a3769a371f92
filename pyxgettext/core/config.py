"""
Configuration management for pyxgettext.

This module provides the read-only configuration consumed by the extractor
and the catalog writer, plus loading of INI-style configuration files so
that a project can keep its keywords and header metadata next to its code.
"""

import configparser
from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .exceptions import ConfigurationError
from .types import MarkerKind, TimeSource

CONFIG_SECTION = "xgettext"

# INI key -> Config attribute
CONFIG_KEYS: Dict[str, str] = {
    "add-comments-tag": "comments_tag",
    "keyword": "keyword",
    "keyword-plural": "keyword_plural",
    "keyword-contextual": "keyword_contextual",
    "skip-args": "skip_args",
    "sort-output": "sort_output",
    "no-location": "no_location",
    "package-name": "package_name",
    "msgid-bugs-address": "msgid_bugs_address",
}

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off", "")


def default_time_source() -> str:
    """Return the current local time in POT-Creation-Date format."""
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M%z")


@dataclass(frozen=True)
class Config:
    """
    Extraction and output settings.

    Instances are immutable; use ``dataclasses.replace`` or
    :meth:`with_fixed_time` to derive a modified copy.
    """

    comments_tag: str = "TRANSLATORS:"
    keyword: str = "_"
    keyword_plural: str = "ngettext"
    keyword_contextual: str = "pgettext"
    skip_args: int = 0
    sort_output: bool = False
    no_location: bool = False
    package_name: str = "PACKAGE"
    msgid_bugs_address: str = ""
    time_source: Optional[TimeSource] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.skip_args < 0:
            raise ConfigurationError(
                f"skip-args must not be negative, got {self.skip_args}",
                config_key="skip-args",
            )

    def marker_kind(self, name: Optional[str]) -> Optional[MarkerKind]:
        """
        Map a callee name to the marker kind it is configured for.

        Args:
            name: Dotted callee name (e.g. ``_`` or ``i18n.G``)

        Returns:
            Matching marker kind, or None if the name is not a marker
        """
        if not name:
            return None
        if name == self.keyword:
            return MarkerKind.PLAIN
        if name == self.keyword_plural:
            return MarkerKind.PLURAL
        if name == self.keyword_contextual:
            return MarkerKind.CONTEXTUAL
        return None

    def creation_date(self) -> str:
        """Return the POT-Creation-Date value from the configured time source."""
        if self.time_source is not None:
            return self.time_source()
        return default_time_source()

    def with_fixed_time(self, timestamp: str) -> "Config":
        """Return a copy whose header timestamp is always ``timestamp``."""
        return replace(self, time_source=lambda: timestamp)

    @classmethod
    def from_file(
        cls, config_path: Union[str, Path], **overrides: Any
    ) -> "Config":
        """
        Build configuration from an INI file.

        Values come from the ``[xgettext]`` section. Keyword arguments that
        are not None override values read from the file.

        Args:
            config_path: Path to configuration file
            **overrides: Config attribute values taking precedence

        Returns:
            Configuration instance

        Raises:
            ConfigurationError: If the file cannot be read or holds bad values
        """
        values = load_config_file(Path(config_path))
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def load_config_file(config_path: Path) -> Dict[str, Any]:
    """
    Load and coerce the ``[xgettext]`` section of a configuration file.

    Args:
        config_path: Path to configuration file

    Returns:
        Mapping of Config attribute names to coerced values

    Raises:
        ConfigurationError: If file cannot be parsed or a value is invalid
    """
    parser = configparser.ConfigParser(
        interpolation=None,
        delimiters=("=",),
        comment_prefixes=("#", ";"),
    )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            parser.read_file(f, source=str(config_path))
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read configuration file: {e}", config_file=str(config_path)
        )
    except configparser.Error as e:
        raise ConfigurationError(
            f"Invalid configuration syntax: {e}", config_file=str(config_path)
        )

    if not parser.has_section(CONFIG_SECTION):
        return {}

    types = {f.name: f.type for f in fields(Config)}
    values: Dict[str, Any] = {}
    for key, raw in parser.items(CONFIG_SECTION):
        attr = CONFIG_KEYS.get(key)
        if attr is None:
            raise ConfigurationError(
                f"Unknown configuration key: {CONFIG_SECTION}.{key}",
                config_file=str(config_path),
                config_key=key,
            )
        values[attr] = _coerce(raw, types[attr], key, config_path)

    return values


def _coerce(value: str, expected: Any, key: str, config_path: Path) -> Any:
    # Dataclass field types are plain classes here (no postponed annotations)
    if expected is bool:
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ConfigurationError(
            f"Cannot convert '{value}' to bool for key '{key}'",
            config_file=str(config_path),
            config_key=key,
        )
    if expected is int:
        try:
            return int(value)
        except ValueError as e:
            raise ConfigurationError(
                f"Cannot convert '{value}' to int for key '{key}': {e}",
                config_file=str(config_path),
                config_key=key,
            )
    return value
