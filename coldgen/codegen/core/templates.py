"""
Template engine wrapper for code generation.

Each target ships its Jinja2 templates in a ``templates`` directory next to
its generator; the engine renders them with the whitespace rules all the
class templates rely on.
"""

from typing import Dict, Any
from pathlib import Path

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    TemplateSyntaxError,
    UndefinedError,
)

from .errors import GeneratorError


class TemplateError(GeneratorError):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for a file-backed Jinja2 environment."""

    def __init__(self, template_dir: Path):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files

        Raises:
            TemplateError: If the directory does not exist
        """
        if not template_dir.is_dir():
            raise TemplateError(f"Template directory not found: {template_dir}")
        self.template_dir = template_dir
        # Generated sources are not markup, nothing is escaped.
        self._env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except (TemplateNotFound, TemplateSyntaxError, UndefinedError) as e:
            raise TemplateError(
                f"Failed to render template {template_name}: {str(e)}"
            ) from e


def create_template_engine(template_dir: Path) -> TemplateEngine:
    """Create a template engine for ``template_dir``."""
    return TemplateEngine(template_dir)
