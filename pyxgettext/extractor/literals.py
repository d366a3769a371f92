"""
Compile-time string literal resolution.

Only text known without running the program can go into a catalog, so an
argument is accepted if it is a string constant or a ``+`` concatenation of
such constants. Everything else resolves to None and the call is skipped.
"""

import ast
import re
from typing import Optional

PYTHON_FORMAT = "python-format"

# printf-style conversion: %s, %5.2f, %(name)s, %-10d ... but not %% or "50% off"
_PRINTF_SPEC = re.compile(
    r"%(?:\([^)]*\))?[#0+-]*(?:\*|\d+)?(?:\.(?:\*|\d+))?[hlL]?[diouxXeEfFgGcrsa]"
)

_ESCAPES = {
    "\\": "\\\\",
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
}


def encode_literal(value: str) -> str:
    """
    Encode a string value the way catalog values are stored.

    Backslashes and control characters become escape sequences, so an
    embedded newline is stored as the two characters backslash-n. Double
    quotes are left for the writer to escape.
    """
    return "".join(_ESCAPES.get(ch, ch) for ch in value)


def resolve_literal(node: ast.AST) -> Optional[str]:
    """
    Reduce an expression to a catalog-encoded string, if it is constant.

    Args:
        node: Argument expression

    Returns:
        Encoded string value, or None if the expression is not a literal
    """
    parts = []
    pending = [node]
    while pending:
        current = pending.pop()
        if isinstance(current, ast.BinOp) and isinstance(current.op, ast.Add):
            # Left operand is popped first
            pending.append(current.right)
            pending.append(current.left)
        elif isinstance(current, ast.Constant) and isinstance(current.value, str):
            parts.append(encode_literal(current.value))
        else:
            return None
    return "".join(parts)


def format_hint_for(*texts: Optional[str]) -> Optional[str]:
    """Return the format flag for texts containing printf-style specifiers."""
    for text in texts:
        if not text:
            continue
        # A literal "%%" never starts a conversion
        if _PRINTF_SPEC.search(text.replace("%%", "")):
            return PYTHON_FORMAT
    return None
