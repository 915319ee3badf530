"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[render]"


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_compilation_start(workspace_root: Path, asset_count: int, skipped_count: int) -> None:
    """Log start of compilation with context."""
    _log_info(f"Compiling report in {workspace_root}")
    _log_debug(f"  Assets copied: {asset_count}")
    if skipped_count:
        _log_warning(f"  Assets skipped: {skipped_count}")


def log_pass_result(pass_number: int, run, elapsed_time: float) -> None:
    """
    Log the outcome of one compiler pass.

    Args:
        pass_number: 1-based pass index
        run: CompilerRun from the compiler
        elapsed_time: Time taken by the pass
    """
    _log_info(f"Pass {pass_number} finished with exit code {run.returncode} ({elapsed_time:.2f}s)")


def log_compilation_result(
    result,  # CompilationResult
    elapsed_time: float,
    verbose: bool = False,
) -> None:
    """
    Log a successful compilation with diagnostics.

    Args:
        result: CompilationResult from compile_document()
        elapsed_time: Time taken to compile
        verbose: Show detailed warnings and compiler output (default: False)
    """
    _log_success(f"Compilation succeeded: {len(result.warnings)} warnings ({elapsed_time:.2f}s)")
    _log_debug(f"  PDF: {result.pdf_path}")
    if result.page_count is not None:
        _log_debug(f"  Pages: {result.page_count}")

    if result.warnings:
        warning_limit = 10 if verbose else 3
        for i, warn in enumerate(result.warnings[:warning_limit], 1):
            _log_debug(f"  Warning {i}: {warn}")
        if len(result.warnings) > warning_limit:
            _log_debug(f"  ... and {len(result.warnings) - warning_limit} more warnings")

    if verbose:
        log_compiler_output(result.stdout, result.stderr)


def log_compilation_failure(error) -> None:
    """
    Log a failed compilation with diagnostics.

    Args:
        error: CompilationError raised by compile_document()
    """
    _log_error(f"Compilation failed ({error.reason}): {error.message}")
    if error.exit_code is not None:
        _log_error(f"  Exit code: {error.exit_code}")
    for i, err in enumerate(error.errors[:5], 1):
        _log_error(f"  Error {i}: {err}")
    if len(error.errors) > 5:
        _log_error(f"  ... and {len(error.errors) - 5} more errors")

    log_compiler_output(error.stdout, error.stderr)
    if error.log_text:
        logger.opt(raw=True).debug(
            f"\n{'=' * 80}\nCOMPILER LOG:\n{'=' * 80}\n{error.log_text}\n"
        )


def log_compiler_output(stdout: str, stderr: str) -> None:
    """Dump raw compiler streams at debug level."""
    # raw=True keeps multi-line output free of per-line timestamps
    if stdout:
        logger.opt(raw=True).debug(f"\n{'=' * 80}\nCOMPILER STDOUT:\n{'=' * 80}\n{stdout}\n")
    if stderr:
        logger.opt(raw=True).debug(f"\n{'=' * 80}\nCOMPILER STDERR:\n{'=' * 80}\n{stderr}\n")
