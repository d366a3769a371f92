"""
Template processing utilities for pyxgettext.

This module renders the catalog header with Jinja2 from a built-in
template.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple

from jinja2 import BaseLoader, Environment, TemplateNotFound

from ..core.exceptions import XgettextError

HEADER_TEMPLATE = "header.pot.tmpl"


class TemplateError(XgettextError):
    """Template processing error."""

    def __init__(self, message: str, template_name: Optional[str] = None) -> None:
        super().__init__(message, ident="template", exitval=2)
        self.template_name = template_name


class BuiltinTemplateLoader(BaseLoader):
    """Loader for built-in templates."""

    def __init__(self) -> None:
        self.templates = self._load_builtin_templates()

    def _load_builtin_templates(self) -> Dict[str, str]:
        """Load built-in template content."""
        return {
            HEADER_TEMPLATE: '''# SOME DESCRIPTIVE TITLE.
# Copyright (C) YEAR THE PACKAGE'S COPYRIGHT HOLDER
# This file is distributed under the same license as the PACKAGE package.
# FIRST AUTHOR <EMAIL@ADDRESS>, YEAR.
#
#, fuzzy
msgid   ""
{% for name, value in metadata %}
{{ "msgstr  " if loop.first else "        " }}"{{ name }}: {{ value | po_escape }}\\n"
{% endfor %}
''',
        }

    def get_source(
        self, environment: Environment, template: str
    ) -> Tuple[str, Optional[str], Callable[[], bool]]:
        """Get template source."""
        if template not in self.templates:
            raise TemplateNotFound(template)

        source = self.templates[template]
        return source, None, lambda: True


def po_escape(value: Any) -> str:
    """Escape double quotes for use inside a quoted catalog string."""
    return str(value).replace('"', '\\"')


class TemplateEngine:
    """Jinja2 environment over the built-in templates."""

    def __init__(self) -> None:
        self.env = Environment(
            loader=BuiltinTemplateLoader(),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["po_escape"] = po_escape

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render template with context.

        Args:
            template_name: Template name (e.g., 'header.pot.tmpl')
            context: Template variables

        Returns:
            Rendered template content

        Raises:
            TemplateError: If template cannot be rendered
        """
        try:
            template = self.env.get_template(template_name)
            return template.render(context)
        except Exception as e:
            raise TemplateError(
                f"Failed to render template {template_name}: {e}",
                template_name=template_name,
            )


def render_header(metadata: List[Tuple[str, str]]) -> str:
    """
    Render the catalog header.

    Args:
        metadata: Ordered ``(name, value)`` pairs for the header msgstr

    Returns:
        Rendered header, ending with a newline
    """
    return TemplateEngine().render_template(HEADER_TEMPLATE, {"metadata": metadata})
