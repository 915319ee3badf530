"""Timestamp formatting utilities."""

from datetime import datetime, timezone


def now() -> str:
    """Local time as a compact, path-safe stamp (e.g. 20251114_123456)."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def now_exact() -> str:
    """Local time as an ISO 8601 string with microseconds."""
    return datetime.now().isoformat()


def now_utc() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def artifact_stamp(moment: datetime = None) -> str:
    """
    Format a moment as YYYYMMDDHHMMSS for artifact filenames.

    Args:
        moment: Time to format (default: current UTC time)

    Returns:
        14-digit timestamp string

    Example:
        artifact_stamp(datetime(2025, 11, 14, 9, 5, 3))
        # "20251114090503"
    """
    if moment is None:
        moment = now_utc()
    return moment.strftime("%Y%m%d%H%M%S")
