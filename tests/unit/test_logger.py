"""Unit tests for loguru session setup."""

import pytest
from loguru import logger

from tagbook.utils.logger import report_context, setup_logger


@pytest.fixture
def session_log(tmp_path):
    log_file = setup_logger("report", tmp_path / "logs", extra_provenance={"LaTeX compiler": "pdflatex"})
    yield log_file
    logger.remove()


@pytest.mark.unit
def test_provenance_header(session_log):
    logger.remove()
    text = session_log.read_text(encoding="utf-8")

    assert session_log.name == "report.log"
    assert "tagbook " in text
    assert "Working directory:" in text
    assert "LaTeX compiler: pdflatex" in text


@pytest.mark.unit
def test_report_context_tags_lines(session_log):
    logger.debug("outside")
    with report_context("3f2a9c1be4d0"):
        logger.debug("inside")
    logger.remove()

    lines = session_log.read_text(encoding="utf-8").splitlines()
    inside = next(line for line in lines if line.endswith("| inside"))
    outside = next(line for line in lines if line.endswith("| outside"))
    assert "| 3f2a9c1be4d0 |" in inside
    assert "| -            |" in outside
