"""Base exception shared by every context of the report pipeline."""

from typing import Any, Dict


class ReportError(Exception):
    """
    Fatal error raised while producing a report.

    Every fatal error reaches the caller as one structured object: a stable
    ``kind``, a human-readable ``message`` and an optional diagnostic payload.

    Attributes:
        kind: Short machine-readable error category
        message: Error description
    """

    kind = "report_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def details(self) -> Dict[str, Any]:
        """Diagnostic payload; subclasses add their own fields."""
        return {}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize as {kind, message, details} for callers and event logs."""
        return {"kind": self.kind, "message": self.message, "details": self.details()}
