"""
Report data structures for the Aggregation context.

ReportData is built fresh for every report request, never mutated, and consumed
once by the templating context.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Tuple


@dataclass(frozen=True)
class CategoryStatistic:
    """
    Aggregate figures for one category.

    Attributes:
        category_name: Raw (unescaped) category name
        count: Number of classifications in this category
        percentage: Share of all uploaded images, 0-100 (0 when there are no uploads)
        sample_image_identifiers: Distinct sample filenames in store order
    """

    category_name: str
    count: int
    percentage: float
    sample_image_identifiers: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ReportData:
    """
    Summary of the label stores at report time.

    Attributes:
        report_date: When the summary was taken (UTC)
        title: Report title (raw, unescaped)
        samples_per_category: Requested sample count, unclamped; 0 disables sample output
        total_images: Number of uploaded files
        classified_images: Number of distinct classified image identifiers
        unclassified_images: total_images - classified_images
        category_stats: One entry per category, in category list order
    """

    report_date: datetime
    title: str
    samples_per_category: int
    total_images: int
    classified_images: int
    unclassified_images: int
    category_stats: Tuple[CategoryStatistic, ...] = ()
