"""Custom exceptions for templating context with template references."""

from pathlib import Path
from typing import Any, Dict, Optional

from tagbook.utils.errors import ReportError


class TemplateRenderError(ReportError):
    """
    Exception raised when template rendering fails.

    Attributes:
        message: Error description
        template_name: Name of the template being rendered
        template_path: Path to the template file
        original_error: The original Jinja2 error
    """

    kind = "template_render_error"

    def __init__(
        self,
        message: str,
        template_name: Optional[str] = None,
        template_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.template_name = template_name
        self.template_path = template_path
        self.original_error = original_error

        # Build enhanced error message
        parts = [message]

        if template_name and template_path:
            parts.append(f"\nTemplate: {template_path}")
            parts.append(f"Name: {template_name}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))

    def details(self) -> Dict[str, Any]:
        return {
            "template_name": self.template_name,
            "template_path": str(self.template_path) if self.template_path else None,
        }
