"""
Intake Context

Responsibilities:
- Validates report requests at the boundary (defaults, 0-25 sample range)
- Reads categories, classifications and the uploaded-file inventory

Owns: Request validation, read access to the label stores
Never: Writes to the label stores or computes statistics
"""

from tagbook.contexts.intake.exceptions import ValidationError
from tagbook.contexts.intake.label_data_structures import (
    Category,
    ClassificationRecord,
    ReportRequest,
)
from tagbook.contexts.intake.label_stores import CategoryStore, ClassificationStore, UploadStore
from tagbook.contexts.intake.request import validate_report_request

__all__ = [
    # Data structures
    "Category",
    "ClassificationRecord",
    "ReportRequest",
    # Boundary validation
    "validate_report_request",
    "ValidationError",
    # Stores
    "CategoryStore",
    "ClassificationStore",
    "UploadStore",
]
