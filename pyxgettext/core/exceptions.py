"""
Custom exception hierarchy for pyxgettext.

This module defines the exceptions raised while extracting translatable
strings and writing catalog templates, providing clear error categorization
and consistent exit codes for the command-line front end.
"""

import sys
from typing import Any, Optional


class XgettextError(Exception):
    """
    Base exception for all pyxgettext errors.

    This is the root exception class that all other pyxgettext-specific
    exceptions inherit from. It provides consistent error formatting
    and the exit value used when the error terminates the program.
    """

    def __init__(
        self, message: str, ident: str = "xgettext", exitval: int = 2, **kwargs: Any
    ) -> None:
        """
        Initialize pyxgettext error.

        Args:
            message: Human-readable error message
            ident: Error identifier (category of the failure)
            exitval: Exit value to use when this error causes program termination
            **kwargs: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.ident = ident
        self.exitval = exitval
        self.context = kwargs
        self.previous_exception = kwargs.get("previous_exception")

    def __str__(self) -> str:
        """Format error message for display."""
        return self.message


class ConfigurationError(XgettextError):
    """
    Configuration-related errors.

    Raised when a configuration file cannot be parsed, holds unknown keys
    or carries values of the wrong type.
    """

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        config_key: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize configuration error.

        Args:
            message: Error description
            config_file: Path to problematic config file
            config_key: Specific configuration key that caused the error
            **kwargs: Additional context
        """
        super().__init__(message, ident="config", exitval=2, **kwargs)
        self.config_file = config_file
        self.config_key = config_key


class ParseError(XgettextError):
    """
    Source parsing errors.

    Raised when a source file is not valid Python. A parse error aborts the
    whole run; findings recorded before it stay in the catalog.
    """

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        line_number: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize parse error.

        Args:
            message: Error description
            file_path: Path to the file that failed to parse
            line_number: Line number where parsing failed
            **kwargs: Additional context
        """
        super().__init__(message, ident="parse", exitval=2, **kwargs)
        self.file_path = file_path
        self.line_number = line_number

    def __str__(self) -> str:
        """Format parse error with file and line information."""
        base_msg = self.message
        if self.file_path and self.line_number:
            return f"{base_msg} at {self.file_path}:{self.line_number}"
        elif self.file_path:
            return f"{base_msg} in {self.file_path}"
        return base_msg


class SourceFileError(XgettextError):
    """
    Input/output errors on source files.

    Raised when a source file cannot be opened or decoded.
    """

    def __init__(
        self, message: str, file_path: Optional[str] = None, **kwargs: Any
    ) -> None:
        """
        Initialize source file error.

        Args:
            message: Error description
            file_path: Path to problematic file
            **kwargs: Additional context
        """
        super().__init__(message, ident="io", exitval=2, **kwargs)
        self.file_path = file_path


class UsageError(XgettextError):
    """
    Command usage errors.

    Raised when the tool is invoked with invalid or missing arguments.
    """

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, ident="usage", exitval=1, **kwargs)


def format_file_error(operation: str, file_path: str, error: str) -> str:
    """
    Format file operation error messages.

    Args:
        operation: Operation that failed (e.g., "read", "parse")
        file_path: Path to the file
        error: Error description

    Returns:
        Formatted file error message
    """
    return f"Cannot {operation} {file_path}: {error}"


def handle_exception(exc: Exception) -> int:
    """
    Handle exceptions and return appropriate exit codes.

    Tool errors are reported with their message; anything else is
    reported as unexpected.

    Args:
        exc: Exception to handle

    Returns:
        Exit code for the application
    """
    if isinstance(exc, XgettextError):
        print(f"pyxgettext: {exc}", file=sys.stderr)
        return exc.exitval

    print(f"pyxgettext: unexpected error: {exc}", file=sys.stderr)
    return 2
