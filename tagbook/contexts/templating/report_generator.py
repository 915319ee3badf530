"""
Report Document Generator

Renders ReportData into a complete LaTeX document.
"""

import os
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv
from jinja2 import TemplateError
from omegaconf import OmegaConf

from tagbook.contexts.aggregation.report_data import ReportData
from tagbook.contexts.templating.exceptions import TemplateRenderError
from tagbook.contexts.templating.logger import _log_debug, _log_error, _log_info
from tagbook.contexts.templating.registries import TEMPLATES_PATH, TemplateRegistry

load_dotenv()
REPORT_PROFILE_PATH = Path(os.getenv("REPORT_PROFILE_PATH", TEMPLATES_PATH / "report_profile.yaml"))
REPORT_ASSET_SUBDIR = os.getenv("REPORT_ASSET_SUBDIR", "Uploads")

REPORT_TEMPLATE = "report"


def load_report_profile(profile_path: Path = None) -> Dict[str, Any]:
    """
    Load report presentation settings (author, abstract, packages, figure size, ...).

    Args:
        profile_path: Path to a report profile YAML (default: REPORT_PROFILE_PATH)

    Returns:
        Profile as a plain dict
    """
    if profile_path is None:
        profile_path = REPORT_PROFILE_PATH
    _log_debug(f"Loading report profile: {profile_path}")
    return OmegaConf.to_container(OmegaConf.load(profile_path), resolve=True)


class ReportDocumentGenerator:
    """Renders ReportData to LaTeX using the report template and profile."""

    def __init__(
        self,
        template_registry: TemplateRegistry = None,
        profile_path: Path = None,
        asset_subdir: str = REPORT_ASSET_SUBDIR,
    ):
        self.template_registry = template_registry or TemplateRegistry()
        self.profile = load_report_profile(profile_path)
        self.asset_subdir = asset_subdir

    def generate_document(self, report_data: ReportData) -> str:
        """
        Generate the complete LaTeX document for a report.

        Document layout: preamble and title block, abstract, summary statistics,
        category table, then one subsection of sample figures per category with
        samples. Sample figures are only emitted when
        report_data.samples_per_category > 0.

        Args:
            report_data: Aggregated report data

        Returns:
            LaTeX document text

        Raises:
            TemplateRenderError: If the report template fails to render
        """
        template = self.template_registry.get_template(REPORT_TEMPLATE)
        report_date = report_data.report_date.strftime(self.profile["date_format"])

        try:
            document = template.render(
                report=report_data,
                profile=self.profile,
                report_date=report_date,
                asset_subdir=self.asset_subdir,
            )
        except TemplateError as e:
            _log_error(f"Failed to render report template: {e}")
            raise TemplateRenderError(
                "Failed to render report document",
                template_name=REPORT_TEMPLATE,
                template_path=self.template_registry.get_template_path(REPORT_TEMPLATE),
                original_error=e,
            ) from e

        _log_info(
            f"Rendered report document ({len(document)} chars, "
            f"{len(report_data.category_stats)} categories)"
        )
        return document


def render_document(report_data: ReportData, generator: ReportDocumentGenerator = None) -> str:
    """
    Render ReportData to LaTeX text.

    Args:
        report_data: Aggregated report data
        generator: Generator to use (default: a new ReportDocumentGenerator)

    Returns:
        LaTeX document text
    """
    generator = generator or ReportDocumentGenerator()
    return generator.generate_document(report_data)
