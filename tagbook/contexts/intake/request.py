"""
Report request validation.

Boundary checks applied before the report pipeline runs. The pipeline itself
never re-validates; it trusts that every ReportRequest came through here.
"""

from typing import Optional

from tagbook.contexts.intake.exceptions import ValidationError
from tagbook.contexts.intake.label_data_structures import ReportRequest

DEFAULT_TITLE = "Image Classification Report"
DEFAULT_SAMPLES_PER_CATEGORY = 3
MAX_SAMPLES_PER_CATEGORY = 25


def validate_report_request(
    title: Optional[str] = None,
    samples_per_category: Optional[int] = None,
) -> ReportRequest:
    """
    Build a ReportRequest from raw caller input.

    Args:
        title: Report title; blank or missing titles fall back to DEFAULT_TITLE
        samples_per_category: Sample images per category, 0-25 (default: 3)

    Returns:
        Validated ReportRequest

    Raises:
        ValidationError: If samples_per_category is not an integer in [0, 25]
    """
    if samples_per_category is None:
        samples_per_category = DEFAULT_SAMPLES_PER_CATEGORY

    if isinstance(samples_per_category, bool) or not isinstance(samples_per_category, int):
        raise ValidationError(
            "Samples per category must be an integer.",
            field="samples_per_category",
            value=samples_per_category,
        )

    if not 0 <= samples_per_category <= MAX_SAMPLES_PER_CATEGORY:
        raise ValidationError(
            f"Samples per category must be between 0 and {MAX_SAMPLES_PER_CATEGORY}.",
            field="samples_per_category",
            value=samples_per_category,
        )

    if title is None or not title.strip():
        title = DEFAULT_TITLE

    return ReportRequest(title=title, samples_per_category=samples_per_category)
