"""
Loguru setup for report runs (Tier 1, detailed logging).

Every line carries the id of the report run that emitted it, so concurrent runs
writing to the same sinks can be told apart. Context-specific prefixed wrappers
live in contexts/{context}/logger.py.
"""

import sys
from contextlib import contextmanager
from pathlib import Path

from loguru import logger

import tagbook

# Shown in the report-id column for lines logged outside any report run
NO_REPORT = "-"

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {extra[report_id]: <12} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

logger.configure(extra={"report_id": NO_REPORT})


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: dict = None,
    console_level: str = "INFO",
    level_colors: dict = None,
) -> Path:
    """
    Route loguru output to a session log file and the console.

    Replaces any existing sinks: a DEBUG file sink at <log_dir>/<context_name>.log
    (with the report-id column) and a colorized console sink. Writes a provenance
    header first.

    Args:
        context_name: Name of the log file stem (e.g., "report")
        log_dir: Directory for this logging session (created if missing)
        extra_provenance: Additional key-value pairs for the provenance header
        console_level: Minimum level shown on the console (default: INFO)
        level_colors: Override default level colors (e.g., {"INFO": "<cyan>"})

    Returns:
        Path to log file

    Example:
        log_file = setup_logger(
            context_name="report",
            log_dir=Path("outs/logs/report_20251114_123456"),
            extra_provenance={"LaTeX compiler": "pdflatex"},
        )
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()

    for level_name, color in {**LEVEL_COLORS, **(level_colors or {})}.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(extra_provenance)

    return log_file


@contextmanager
def report_context(report_id: str):
    """
    Tag every log line emitted inside the block with a report id.

    Context-local, so concurrent report tasks each keep their own id.

    Example:
        with report_context("3f2a9c1be4d0"):
            await compile_document(...)
    """
    with logger.contextualize(report_id=report_id):
        yield


def log_provenance(extra_context: dict = None) -> None:
    """Write a header recording how and where this session was started."""
    logger.info("=" * 80)
    logger.info(f"tagbook {tagbook.__version__}")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")

    for key, value in (extra_context or {}).items():
        logger.info(f"{key}: {value}")

    logger.info("=" * 80)
