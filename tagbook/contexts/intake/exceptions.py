"""Custom exceptions for the intake context."""

from typing import Any, Dict, Optional

from tagbook.utils.errors import ReportError


class ValidationError(ReportError, ValueError):
    """
    Exception raised when a report request is malformed.

    Raised by the intake boundary before any aggregation runs; the core
    pipeline assumes requests are already valid.

    Attributes:
        message: Error description
        field: Name of the offending request field
        value: The rejected value
    """

    kind = "validation_error"

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        self.field = field
        self.value = value
        super().__init__(message)

    def details(self) -> Dict[str, Any]:
        return {"field": self.field, "value": self.value}
