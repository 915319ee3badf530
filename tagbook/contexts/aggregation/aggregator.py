"""
Report Aggregator

Joins categories, classifications and the uploaded-file inventory into ReportData.
Pure function over its inputs: the caller reads the stores.
"""

from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from tagbook.contexts.aggregation.logger import _log_info, _log_warning
from tagbook.contexts.aggregation.report_data import CategoryStatistic, ReportData
from tagbook.contexts.intake.label_data_structures import (
    Category,
    ClassificationRecord,
    ReportRequest,
)
from tagbook.utils.timestamp import now_utc

MIN_SAMPLES_PER_CATEGORY = 1
MAX_SAMPLES_PER_CATEGORY = 25


def clamp_samples(samples_per_category: int) -> int:
    """Clamp a requested sample count to [1, 25]."""
    return max(MIN_SAMPLES_PER_CATEGORY, min(samples_per_category, MAX_SAMPLES_PER_CATEGORY))


def _distinct(values: Iterable[str]) -> List[str]:
    """Drop repeats, keeping first-seen order."""
    return list(dict.fromkeys(values))


def prepare_report_data(
    request: ReportRequest,
    categories: Sequence[Category],
    classifications: Sequence[ClassificationRecord],
    uploaded_filenames: Sequence[str],
    report_date: Optional[datetime] = None,
) -> ReportData:
    """
    Summarize the label stores for one report.

    Sample lists are always computed with a cap of clamp(samples_per_category, 1, 25),
    even when the request asked for 0 samples. ReportData keeps the unclamped request
    value, and the templating context gates sample output on that value.

    Args:
        request: Validated report request
        categories: Categories in display order
        classifications: All classification records, in store order
        uploaded_filenames: Names of all uploaded image files
        report_date: Timestamp to stamp on the report (default: now, UTC)

    Returns:
        Immutable ReportData

    Example:
        10 uploads, "Cats" with 4 classified images, "Dogs" with 3, 2 samples requested:
        total_images=10, classified_images=7, unclassified_images=3,
        Cats -> count 4, 40.0%, 2 samples; Dogs -> count 3, 30.0%, 2 samples
    """
    classifications = list(classifications)

    total_images = len(uploaded_filenames)
    classified_images = len({c.image_identifier for c in classifications})
    unclassified_images = total_images - classified_images

    # Classifications can outlive their files on disk
    if unclassified_images < 0:
        _log_warning(
            f"Classification store references {-unclassified_images} more images "
            f"than are uploaded ({classified_images} classified, {total_images} on disk)"
        )

    sample_cap = clamp_samples(request.samples_per_category)

    category_stats = []
    for category in categories:
        in_category = [c for c in classifications if c.category_id == category.id]
        count = len(in_category)
        percentage = (count / total_images) * 100 if total_images > 0 else 0.0
        samples = _distinct(c.image_identifier for c in in_category)[:sample_cap]

        category_stats.append(
            CategoryStatistic(
                category_name=category.name,
                count=count,
                percentage=percentage,
                sample_image_identifiers=tuple(samples),
            )
        )

    known_ids = {category.id for category in categories}
    orphaned = sum(1 for c in classifications if c.category_id not in known_ids)
    if orphaned:
        _log_warning(f"{orphaned} classifications reference unknown categories")

    _log_info(
        f"Aggregated {len(category_stats)} categories: {total_images} images, "
        f"{classified_images} classified, {unclassified_images} unclassified"
    )

    return ReportData(
        report_date=report_date or now_utc(),
        title=request.title,
        samples_per_category=request.samples_per_category,
        total_images=total_images,
        classified_images=classified_images,
        unclassified_images=unclassified_images,
        category_stats=tuple(category_stats),
    )


def required_asset_filenames(report_data: ReportData) -> List[str]:
    """
    List the uploaded images the rendered document will embed.

    Args:
        report_data: Aggregated report data

    Returns:
        Distinct sample filenames across all categories (first-seen order),
        or an empty list when sample output is disabled
    """
    if report_data.samples_per_category <= 0:
        return []

    return _distinct(
        filename
        for stat in report_data.category_stats
        for filename in stat.sample_image_identifiers
    )
