"""Unit tests for pipeline event logging (Tier 2)."""

import json

import pytest

from tagbook.utils.event_logging import get_recent_events, log_pipeline_event


@pytest.mark.unit
def test_events_are_appended_as_json_lines(isolated_event_log):
    log_pipeline_event("report_started", "abc123", "pipeline", title="Weekly")
    log_pipeline_event("report_completed", "abc123", "pipeline", size_bytes=1024)

    lines = isolated_event_log.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2

    first = json.loads(lines[0])
    assert first["event_type"] == "report_started"
    assert first["report_id"] == "abc123"
    assert first["source"] == "pipeline"
    assert first["title"] == "Weekly"
    assert "timestamp" in first


@pytest.mark.unit
def test_get_recent_events_filters():
    log_pipeline_event("report_started", "r1", "pipeline")
    log_pipeline_event("report_failed", "r1", "pipeline", error_kind="compilation_error")
    log_pipeline_event("report_started", "r2", "pipeline")
    log_pipeline_event("report_completed", "r2", "pipeline")

    assert [e["event_type"] for e in get_recent_events(report_id="r1")] == ["report_started", "report_failed"]
    assert [e["report_id"] for e in get_recent_events(event_type="report_started")] == ["r1", "r2"]
    assert [e["event_type"] for e in get_recent_events(n=2)] == ["report_started", "report_completed"]


@pytest.mark.unit
def test_get_recent_events_without_log():
    assert get_recent_events() == []


@pytest.mark.unit
def test_malformed_lines_are_skipped(isolated_event_log):
    log_pipeline_event("report_started", "r1", "pipeline")
    with open(isolated_event_log, "a", encoding="utf-8") as f:
        f.write("{not json\n")
    log_pipeline_event("report_completed", "r1", "pipeline")

    assert [e["event_type"] for e in get_recent_events()] == ["report_started", "report_completed"]
