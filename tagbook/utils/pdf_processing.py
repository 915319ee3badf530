"""
Inspection helpers for compiled report artifacts.

Accept either a path to a PDF or the PDF bytes themselves, so delivered
artifacts can be checked without writing them back to disk.
"""

import io
from pathlib import Path
from typing import Optional, Union

from PyPDF2 import PdfReader

PdfSource = Union[Path, str, bytes]


def _reader(source: PdfSource) -> PdfReader:
    if isinstance(source, bytes):
        return PdfReader(io.BytesIO(source))
    return PdfReader(str(source))


def page_count(source: PdfSource) -> Optional[int]:
    """Get page count from a PDF, or None if it cannot be parsed."""
    try:
        return len(_reader(source).pages)
    except Exception:
        return None


def document_title(source: PdfSource) -> Optional[str]:
    """Get the /Title entry of the PDF document info (set from pdftitle), or None."""
    try:
        metadata = _reader(source).metadata
    except Exception:
        return None
    return metadata.title if metadata else None
