"""
Label data structures for the Intake context.

Plain records handed over by the category and classification stores, plus the
validated report request. These are the only inputs the aggregation context sees.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Category:
    """
    A named label images can be classified under.

    Attributes:
        id: Opaque unique identifier (string form of the store's GUID)
        name: Display name (case-insensitive uniqueness is the store's concern)
    """

    id: str
    name: str


@dataclass(frozen=True)
class ClassificationRecord:
    """
    Assignment of one category to one uploaded image.

    Attributes:
        image_identifier: Uploaded filename (unique key, one record per image)
        category_id: Identifier of the assigned Category
        classified_at: When the assignment was last made (None if the store omits it)
    """

    image_identifier: str
    category_id: str
    classified_at: Optional[datetime] = None


@dataclass(frozen=True)
class ReportRequest:
    """
    Validated input for one report run.

    Build instances with validate_report_request() so defaults and the
    0-25 sample range are applied at the boundary.
    """

    title: str
    samples_per_category: int
