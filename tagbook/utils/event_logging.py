"""
Pipeline event logging utilities for TAGBOOK (Tier 2 logging).

Appends one JSON object per line to report_events.log so report runs can be
audited and filtered after the fact. For detailed within-context logging
(Tier 1), use tagbook.utils.logger instead.

Usage:
    from tagbook.utils.event_logging import log_pipeline_event

    log_pipeline_event(
        event_type="report_completed",
        report_id="3f2a9c1be4d0",
        source="pipeline",
        size_bytes=48213,
    )
"""

import json
import os
from collections import deque
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from tagbook.utils.timestamp import now_exact

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
REPORT_EVENTS_FILE = Path(os.getenv("REPORT_EVENTS_FILE", LOGS_PATH / "report_events.log"))


def log_pipeline_event(event_type: str, report_id: str, source: str, **extra_fields) -> None:
    """
    Log an event to the report event log.

    Args:
        event_type: Type of event (e.g., "report_started", "report_failed")
        report_id: Identifier of the report run
        source: Event source (e.g., "pipeline", "cli")
        **extra_fields: Additional event-specific fields (must be JSON serializable)
    """
    REPORT_EVENTS_FILE.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "report_id": report_id,
        "source": source,
        **extra_fields,
    }

    with open(REPORT_EVENTS_FILE, "a", encoding="utf-8") as f:
        f.write(json.dumps(event) + "\n")


def _matches(event: dict, report_id: Optional[str], event_type: Optional[str]) -> bool:
    if report_id and event.get("report_id") != report_id:
        return False
    return not event_type or event.get("event_type") == event_type


def get_recent_events(
    n: int = 10, report_id: Optional[str] = None, event_type: Optional[str] = None
) -> list[dict]:
    """
    Get the last n events from the report event log, optionally filtered.

    Malformed lines are skipped.

    Example:
        # Last 5 failures
        events = get_recent_events(5, event_type="report_failed")
    """
    if not REPORT_EVENTS_FILE.exists():
        return []

    recent = deque(maxlen=max(n, 0))
    with open(REPORT_EVENTS_FILE, "r", encoding="utf-8") as f:
        for line in f:
            try:
                event = json.loads(line)
            except json.JSONDecodeError:
                continue
            if _matches(event, report_id, event_type):
                recent.append(event)

    return list(recent)
