"""
Shared utilities for TAGBOOK.

Common functionality used across contexts:
- Logger setup and pipeline event logging
- Timestamps
- PDF inspection
- Error base class
"""

from tagbook.utils.errors import ReportError
from tagbook.utils.timestamp import now, now_exact, now_utc

__all__ = ["ReportError", "now", "now_exact", "now_utc"]
