"""
Templating Context

Responsibilities:
- Renders ReportData into the fixed LaTeX report layout
- Escapes every user-supplied or data-derived string
- Manages the report template and its presentation profile (template/)

Owns: LaTeX document text, escaping rules
Never: Runs the compiler or touches the workspace
"""

from tagbook.contexts.templating.exceptions import TemplateRenderError
from tagbook.contexts.templating.latex_escape import escape_latex, latex_path
from tagbook.contexts.templating.registries import TemplateRegistry
from tagbook.contexts.templating.report_generator import (
    ReportDocumentGenerator,
    load_report_profile,
    render_document,
)

__all__ = [
    "render_document",
    "escape_latex",
    "latex_path",
    "ReportDocumentGenerator",
    "load_report_profile",
    "TemplateRegistry",
    "TemplateRenderError",
]
