"""
Templating Registries

Loads and caches the Jinja2 templates used to render report documents.
"""

import os
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

from tagbook.contexts.templating.latex_escape import escape_latex, latex_path

load_dotenv()
TEMPLATES_PATH = Path(os.getenv("REPORT_TEMPLATES_PATH", Path(__file__).parent / "template"))


def format_one_decimal(value: float) -> str:
    """Format a number with exactly one decimal place (e.g. 40 -> "40.0")."""
    return f"{value:.1f}"


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 templates for LaTeX generation.

    Templates are stored as {template_name}.tex.jinja under the templates directory
    and use custom delimiters to avoid conflicts with LaTeX syntax:
    - Variable: <<< var >>>
    - Block: <%% block %%>
    - Comment: <# comment #>

    Filters available to templates:
    - latex_escape: escape LaTeX reserved characters (apply exactly once per value)
    - latex_path: wrap a relative file path for \\includegraphics
    - one_decimal: format a number with one decimal place
    """

    def __init__(self, templates_path: Path = None):
        """
        Initialize the template registry.

        Args:
            templates_path: Directory holding *.tex.jinja files. Defaults to
                            REPORT_TEMPLATES_PATH from environment
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = Path(templates_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            # Custom delimiters to avoid LaTeX brace conflicts
            variable_start_string="<<<",
            variable_end_string=">>>",
            block_start_string="<%%",
            block_end_string="%%>",
            comment_start_string="<#",
            comment_end_string="#>",
            # Block tags sit on their own lines; drop those lines from the output
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["latex_escape"] = escape_latex
        self.env.filters["latex_path"] = latex_path
        self.env.filters["one_decimal"] = format_one_decimal

    def get_template(self, template_name: str) -> Template:
        """
        Get a template by name, loading and caching it if necessary.

        Args:
            template_name: Name of the template (e.g., 'report')

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        if template_name in self._cache:
            return self._cache[template_name]

        template_file = f"{template_name}.tex.jinja"

        try:
            template = self.env.get_template(template_file)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template '{template_name}' not found at {self.templates_path / template_file}"
            ) from e

        self._cache[template_name] = template
        return template

    def get_template_path(self, template_name: str) -> Path:
        """Get the file path for a template."""
        return self.templates_path / f"{template_name}.tex.jinja"

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, template_name: str) -> bool:
        """Check if a template is in the cache."""
        return template_name in self._cache
