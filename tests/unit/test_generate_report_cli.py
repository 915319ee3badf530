"""Unit tests for the generate_report CLI."""

import pytest
from typer.testing import CliRunner

from scripts.generate_report import app
from tagbook.utils.event_logging import log_pipeline_event

runner = CliRunner()


@pytest.mark.unit
def test_stats(upload_dir, data_dir):
    result = runner.invoke(app, ["stats", "--samples", "2", "--uploads", str(upload_dir), "--data", str(data_dir)])

    assert result.exit_code == 0, result.output
    assert "Total images:        10" in result.output
    assert "Classified images:   7" in result.output
    assert "Unclassified images: 3" in result.output
    assert "40.0%" in result.output
    assert "samples: img01.jpg, img02.jpg" in result.output


@pytest.mark.unit
def test_tex_to_file(upload_dir, data_dir, tmp_path):
    output = tmp_path / "out" / "report.tex"

    result = runner.invoke(
        app,
        ["tex", "--title", "CLI report", "--samples", "0", "--uploads", str(upload_dir), "--data", str(data_dir), "--output", str(output)],
    )

    assert result.exit_code == 0, result.output
    document = output.read_text(encoding="utf-8")
    assert "\\title{CLI report}" in document
    assert "\\includegraphics" not in document


@pytest.mark.unit
def test_tex_to_stdout(upload_dir, data_dir):
    result = runner.invoke(app, ["tex", "--uploads", str(upload_dir), "--data", str(data_dir)])

    assert result.exit_code == 0, result.output
    assert "\\title{Image Classification Report}" in result.output


@pytest.mark.unit
@pytest.mark.parametrize("command", ["stats", "tex", "pdf"])
def test_samples_out_of_range(command, upload_dir, data_dir):
    result = runner.invoke(app, [command, "--samples", "26", "--uploads", str(upload_dir), "--data", str(data_dir)])

    assert result.exit_code == 1
    assert "Samples per category must be between 0 and 25." in result.output


@pytest.mark.unit
def test_events():
    log_pipeline_event("report_started", "r1", "pipeline")
    log_pipeline_event("report_failed", "r1", "pipeline", error_kind="compilation_error")

    result = runner.invoke(app, ["events", "--type", "report_failed"])

    assert result.exit_code == 0, result.output
    assert "report_failed" in result.output
    assert "report_started" not in result.output


@pytest.mark.unit
def test_events_empty():
    result = runner.invoke(app, ["events"])

    assert result.exit_code == 0
    assert "No events found." in result.output
