"""
Aggregation Context

Responsibilities:
- Counts total, classified and unclassified images
- Computes per-category counts, percentages and bounded sample lists
- Lists the image assets a report will embed

Owns: ReportData and CategoryStatistic
Never: Reads from disk or formats output
"""

from tagbook.contexts.aggregation.aggregator import (
    clamp_samples,
    prepare_report_data,
    required_asset_filenames,
)
from tagbook.contexts.aggregation.report_data import CategoryStatistic, ReportData

__all__ = [
    "prepare_report_data",
    "required_asset_filenames",
    "clamp_samples",
    "ReportData",
    "CategoryStatistic",
]
