"""
AST visitor that finds marker function calls.

The visitor walks a whole module, recognises calls to the configured
marker functions and records one finding per call whose required
arguments are compile-time string literals.
"""

import ast
import logging
from typing import Dict, List, Optional

from ..core.catalog import Catalog
from ..core.config import Config
from ..core.types import Finding, MarkerKind
from .comments import find_comment_block, format_comment, has_translator_tag
from .literals import format_hint_for, resolve_literal

logger = logging.getLogger(__name__)


def callee_name(func: ast.AST) -> Optional[str]:
    """
    Return the dotted name of a call target.

    ``_`` gives ``"_"`` and ``i18n.G`` gives ``"i18n.G"``. Targets that are
    not a plain name or an attribute chain over one give None.
    """
    if isinstance(func, ast.Name):
        return func.id
    if isinstance(func, ast.Attribute):
        base = callee_name(func.value)
        if base is None:
            return None
        return f"{base}.{func.attr}"
    return None


def statement_start(stmt: ast.stmt, call: ast.Call) -> int:
    """
    Return the line a comment block for ``call`` must end above.

    A decorated ``def`` or ``class`` reports the ``def`` line as its
    ``lineno``. Calls inside a decorator anchor on that decorator, any other
    call in the header anchors on the first decorator.
    """
    decorators = getattr(stmt, "decorator_list", None)
    if not decorators:
        return stmt.lineno
    for decorator in decorators:
        if decorator.lineno <= call.lineno <= (decorator.end_lineno or decorator.lineno):
            return decorator.lineno
    return min(d.lineno for d in decorators)


class CallMatcher(ast.NodeVisitor):
    """AST visitor recording marker function calls into a catalog."""

    def __init__(
        self,
        config: Config,
        filename: str,
        catalog: Catalog,
        comments: Optional[Dict[int, str]] = None,
    ) -> None:
        """
        Initialize the matcher.

        Args:
            config: Keywords, skip count and comment tag
            filename: File name recorded in each finding
            catalog: Catalog receiving the findings
            comments: Line number to comment text map for the file
        """
        self.config = config
        self.filename = filename
        self.catalog = catalog
        self.comments = comments or {}
        self.found = 0
        self._statements: List[ast.stmt] = []

    def visit(self, node: ast.AST) -> None:
        if isinstance(node, ast.stmt):
            self._statements.append(node)
            try:
                super().visit(node)
            finally:
                self._statements.pop()
        else:
            super().visit(node)

    def visit_Call(self, node: ast.Call) -> None:
        """Visit function calls to find marker functions."""
        kind = self.config.marker_kind(callee_name(node.func))
        if kind is not None:
            finding = self._match(node, kind)
            if finding is not None:
                self.catalog.record(finding)
                self.found += 1
                logger.debug("Found %r at %s", finding.id, finding.location)

        self.generic_visit(node)

    def visit_BinOp(self, node: ast.BinOp) -> None:
        # Long "a" + "b" + ... chains nest on the left; walk them iteratively
        operands = []
        while isinstance(node, ast.BinOp):
            operands.append(node.right)
            node = node.left
        operands.append(node)
        for operand in reversed(operands):
            self.visit(operand)

    def _match(self, node: ast.Call, kind: MarkerKind) -> Optional[Finding]:
        args = node.args[self.config.skip_args:]
        if len(args) < kind.required_args:
            logger.debug(
                "Skipping call at %s:%d: expected %d argument(s) after %d skipped",
                self.filename,
                node.lineno,
                kind.required_args,
                self.config.skip_args,
            )
            return None

        values = []
        for arg in args[: kind.required_args]:
            value = resolve_literal(arg)
            if value is None:
                logger.debug(
                    "Skipping call at %s:%d: argument is not a string literal",
                    self.filename,
                    node.lineno,
                )
                return None
            values.append(value)

        context = plural_id = None
        if kind is MarkerKind.PLAIN:
            msgid = values[0]
        elif kind is MarkerKind.PLURAL:
            msgid, plural_id = values
        else:
            context, msgid = values

        if not msgid:
            logger.warning(
                "%s:%d: not recording empty msgid, "
                "it would collide with the catalog header",
                self.filename,
                node.lineno,
            )
            return None

        return Finding(
            id=msgid,
            file=self.filename,
            line=node.lineno,
            context=context,
            plural_id=plural_id,
            comment=self._comment_for(node),
            format_hint=format_hint_for(msgid, plural_id),
        )

    def _comment_for(self, node: ast.Call) -> str:
        # Comments attach to the statement holding the call
        if self._statements:
            line = statement_start(self._statements[-1], node)
        else:
            line = node.lineno
        comment = format_comment(find_comment_block(self.comments, line))
        if not has_translator_tag(comment, self.config.comments_tag):
            return ""
        return comment
