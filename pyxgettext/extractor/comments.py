"""
Translator comment handling.

Python's ``ast`` module discards comments, so they are collected from the
token stream and looked up by line number when a marker call is found.
"""

import io
import tokenize
from typing import Dict, Optional

COMMENT_MARKER = "#."


def format_comment(text: Optional[str]) -> str:
    """
    Normalize a raw comment block into catalog comment lines.

    Comment delimiters and surrounding whitespace are stripped, blank lines
    are dropped and every remaining line is emitted as ``#. <line>``.

    Args:
        text: Raw comment text, one comment per line, delimiters included

    Returns:
        Formatted comment lines, each newline terminated, or an empty string
    """
    if not text:
        return ""

    out = []
    for raw_line in text.splitlines():
        line = raw_line.strip().lstrip("#").strip()
        if line:
            out.append(f"{COMMENT_MARKER} {line}\n")
    return "".join(out)


def has_translator_tag(formatted: str, tag: str) -> bool:
    """Return True if a formatted comment starts with the translator tag."""
    if not formatted:
        return False
    return formatted.startswith(f"{COMMENT_MARKER} {tag}")


def collect_comments(source: str) -> Dict[int, str]:
    """
    Map line numbers to the comment found on that line.

    Args:
        source: Python source text

    Returns:
        Dictionary of 1-based line number to raw comment text

    Raises:
        tokenize.TokenError: If the source cannot be tokenized
        SyntaxError: On invalid indentation
    """
    comments: Dict[int, str] = {}
    readline = io.StringIO(source).readline
    for token in tokenize.generate_tokens(readline):
        if token.type == tokenize.COMMENT:
            comments[token.start[0]] = token.string
    return comments


def find_comment_block(comments: Dict[int, str], line: int) -> str:
    """
    Return the contiguous comment block ending on the line above ``line``.

    Lines are gathered upwards while each one holds a comment; a line
    without a comment (blank or code) ends the block.

    Args:
        comments: Output of :func:`collect_comments`
        line: First line of the statement the block must precede

    Returns:
        Raw comment lines joined by newlines, top to bottom
    """
    block = []
    current = line - 1
    while current in comments:
        block.append(comments[current])
        current -= 1
    return "\n".join(reversed(block))
