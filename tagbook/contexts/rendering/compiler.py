"""
LaTeX Compilation Module

Compiles report documents to PDF inside isolated workspaces using pdflatex
(or any DocumentCompiler), with two passes for cross-references.
"""

import asyncio
import os
import re
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Protocol

import aiofiles
import aiofiles.os
from dotenv import load_dotenv

from tagbook.contexts.intake.label_stores import UploadStore
from tagbook.contexts.rendering.assets import AssetCopyResult, Skipped, copy_assets
from tagbook.contexts.rendering.exceptions import CompilationError, ProcessLaunchError
from tagbook.contexts.rendering.logger import (
    _log_debug,
    _log_info,
    _log_warning,
    log_compilation_failure,
    log_compilation_result,
    log_compilation_start,
    log_pass_result,
)
from tagbook.contexts.rendering.workspace import (
    CompilationWorkspace,
    create_workspace,
    remove_workspace,
)
from tagbook.utils.pdf_processing import page_count

load_dotenv()

LATEX_COMPILER = os.getenv("LATEX_COMPILER", "pdflatex")
COMPILE_TIMEOUT_S = float(os.getenv("REPORT_COMPILE_TIMEOUT_S", "60"))
KEEP_FAILED_WORKSPACES = os.getenv("KEEP_FAILED_WORKSPACES", "false").lower() == "true"

# First pass writes .aux state, second resolves cross-references and longtable widths
NUM_PASSES = 2


@dataclass
class CompilerRun:
    """
    Outcome of one compiler invocation.

    Attributes:
        returncode: Process exit status
        stdout: Captured standard output
        stderr: Captured standard error
    """

    returncode: int
    stdout: str = ""
    stderr: str = ""


class DocumentCompiler(Protocol):
    """Anything that can turn workspace.source_file into workspace.output_file."""

    async def compile(self, workspace: CompilationWorkspace) -> CompilerRun:
        ...


@dataclass
class CompilationResult:
    """
    Result of a successful compilation.

    Attributes:
        pdf_path: Path to the generated PDF (inside the workspace)
        workspace: Workspace the PDF lives in; delete it after reading the PDF
        stdout: Standard output from all passes
        stderr: Standard error from all passes
        warnings: List of parsed LaTeX warnings
        assets: Per-asset staging results
        page_count: Number of pages in the PDF (None if not available)
    """

    pdf_path: Path
    workspace: CompilationWorkspace
    stdout: str = ""
    stderr: str = ""
    warnings: List[str] = field(default_factory=list)
    assets: List[AssetCopyResult] = field(default_factory=list)
    page_count: Optional[int] = None

    @property
    def skipped_assets(self) -> List[Skipped]:
        return [asset for asset in self.assets if isinstance(asset, Skipped)]


def _decode(output: Optional[bytes]) -> str:
    # Replace invalid UTF-8 bytes instead of crashing
    return output.decode("utf-8", errors="replace") if output else ""


async def _terminate(process: asyncio.subprocess.Process) -> None:
    """Kill a child process (if still running) and reap it."""
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            pass
    await process.wait()


class PdfLatexCompiler:
    """
    Runs a pdflatex-compatible binary as a child process.

    Args:
        executable: Compiler binary (default: LATEX_COMPILER env, "pdflatex")
        timeout_s: Wall-clock limit per pass in seconds; None disables it
    """

    def __init__(self, executable: str = None, timeout_s: Optional[float] = COMPILE_TIMEOUT_S):
        self.executable = executable or LATEX_COMPILER
        self.timeout_s = timeout_s

    def command(self, workspace: CompilationWorkspace) -> List[str]:
        return [
            self.executable,
            "-interaction=nonstopmode",
            "-file-line-error",
            f"-output-directory={workspace.root}",
            workspace.source_file.name,
        ]

    async def compile(self, workspace: CompilationWorkspace) -> CompilerRun:
        """
        Run one compiler pass in the workspace.

        Stdout and stderr are drained concurrently with the exit wait, so a
        chatty compiler cannot block on a full pipe.

        Raises:
            ProcessLaunchError: If the executable cannot be started
            CompilationError: If the pass exceeds the timeout (reason="timeout")
        """
        cmd = self.command(workspace)
        _log_debug(f"Running: {' '.join(cmd)} (cwd={workspace.root})")

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                cwd=workspace.root,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ProcessLaunchError(self.executable, e) from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout_s)
        except asyncio.TimeoutError:
            await _terminate(process)
            raise CompilationError(
                f"{self.executable} did not finish within {self.timeout_s:g}s and was killed",
                reason="timeout",
                workspace=workspace.root,
            )
        except asyncio.CancelledError:
            await _terminate(process)
            raise

        return CompilerRun(returncode=process.returncode, stdout=_decode(stdout), stderr=_decode(stderr))


def _parse_latex_log(log_content: str) -> tuple[List[str], List[str]]:
    """
    Parse LaTeX log file for errors and warnings.

    Args:
        log_content: Content of the .log file

    Returns:
        Tuple of (errors, warnings)
    """
    errors = []
    warnings = []

    # "! Error message" and, with -file-line-error, "./report.tex:12: Error message"
    error_patterns = [
        re.compile(r"^! (.+)$", re.MULTILINE),
        re.compile(r"^\S+\.tex:\d+: (.+)$", re.MULTILINE),
    ]
    for pattern in error_patterns:
        for match in pattern.finditer(log_content):
            error = match.group(1).strip()
            if error not in errors:
                errors.append(error)

    warning_patterns = [
        r"LaTeX Warning: (.+)",
        r"Package \w+ Warning: (.+)",
        r"Overfull \\hbox \((.+)\)",
        r"Underfull \\hbox \((.+)\)",
    ]
    for pattern in warning_patterns:
        for match in re.finditer(pattern, log_content, re.MULTILINE):
            warnings.append(match.group(1).strip())

    return errors, warnings


async def _read_log(workspace: CompilationWorkspace) -> Optional[str]:
    """Read the compiler log if present; never raises."""
    try:
        # pdflatex writes log files in latin-1 (font metadata contains non-UTF-8)
        async with aiofiles.open(workspace.log_file, "r", encoding="latin-1") as f:
            return await f.read()
    except OSError:
        return None


async def _run_pass(
    compiler: DocumentCompiler, workspace: CompilationWorkspace, pass_number: int
) -> CompilerRun:
    start_time = time.time()
    run = await compiler.compile(workspace)
    log_pass_result(pass_number, run, time.time() - start_time)
    return run


async def _fail(workspace: CompilationWorkspace, error: CompilationError) -> CompilationError:
    """Log a failure and reclaim the workspace unless failed workspaces are kept."""
    log_compilation_failure(error)
    if KEEP_FAILED_WORKSPACES:
        _log_info(f"Keeping failed workspace for debugging: {workspace.root}")
    else:
        await remove_workspace(workspace.root)
    return error


async def compile_document(
    document_text: str,
    required_assets: Iterable[str],
    *,
    upload_store: UploadStore,
    compiler: DocumentCompiler = None,
    workspace_root: Path = None,
    verbose: bool = False,
) -> CompilationResult:
    """
    Compile a LaTeX document to PDF in a fresh, isolated workspace.

    Protocol:
        1. Create a uniquely named workspace
        2. Write the document to report.tex
        3. Copy required images into the asset directory (missing ones are skipped)
        4. Run the compiler; a non-zero exit fails with the log attached
        5. Run the compiler again for cross-references; its exit code is only logged
        6. Fail if report.pdf does not exist

    The workspace is NOT deleted on success: the PDF lives inside it. Pass
    result.workspace.root to deliver_artifact() (or remove_workspace()) once the
    PDF has been read.

    Args:
        document_text: Complete LaTeX document
        required_assets: Uploaded filenames referenced by the document
        upload_store: Shared upload store to copy images from
        compiler: DocumentCompiler to run (default: PdfLatexCompiler())
        workspace_root: Parent directory for workspaces (default: REPORT_WORKSPACE_ROOT)
        verbose: Log warnings and compiler output in detail (default: False)

    Returns:
        CompilationResult with the PDF path and diagnostics

    Raises:
        CompilationError: Compiler failed, timed out, or produced no PDF
        ProcessLaunchError: Compiler executable could not be started
    """
    compiler = compiler or PdfLatexCompiler()
    workspace = await create_workspace(workspace_root)

    try:
        async with aiofiles.open(workspace.source_file, "w", encoding="utf-8") as f:
            await f.write(document_text)
        _log_debug(f"LaTeX file written to: {workspace.source_file}")

        assets = await copy_assets(required_assets, upload_store, workspace)
        skipped = [asset for asset in assets if isinstance(asset, Skipped)]
        log_compilation_start(workspace.root, len(assets) - len(skipped), len(skipped))

        start_time = time.time()

        try:
            first = await _run_pass(compiler, workspace, 1)
        except CompilationError as e:
            e.log_text = await _read_log(workspace)
            raise await _fail(workspace, e)

        if first.returncode != 0:
            log_text = await _read_log(workspace)
            errors, _ = _parse_latex_log(log_text or "")
            raise await _fail(
                workspace,
                CompilationError(
                    f"Document compiler failed with exit code {first.returncode}",
                    reason="exit_code",
                    exit_code=first.returncode,
                    stdout=first.stdout,
                    stderr=first.stderr,
                    log_text=log_text,
                    errors=errors,
                    workspace=workspace.root,
                ),
            )

        try:
            second = await _run_pass(compiler, workspace, 2)
        except CompilationError as e:
            e.log_text = await _read_log(workspace)
            raise await _fail(workspace, e)

        if second.returncode != 0:
            _log_warning(f"Second pass exited with code {second.returncode}; checking for PDF anyway")

        stdout = "\n".join([first.stdout, second.stdout])
        stderr = "\n".join([first.stderr, second.stderr])
        log_text = await _read_log(workspace)
        errors, warnings = _parse_latex_log(log_text or "")

        if not await aiofiles.os.path.isfile(workspace.output_file):
            raise await _fail(
                workspace,
                CompilationError(
                    "PDF artifact not produced despite success exit code",
                    reason="missing_artifact",
                    exit_code=second.returncode,
                    stdout=stdout,
                    stderr=stderr,
                    log_text=log_text,
                    errors=errors,
                    workspace=workspace.root,
                ),
            )

        result = CompilationResult(
            pdf_path=workspace.output_file,
            workspace=workspace,
            stdout=stdout,
            stderr=stderr,
            warnings=warnings,
            assets=assets,
            page_count=await asyncio.to_thread(page_count, workspace.output_file),
        )
        log_compilation_result(result, time.time() - start_time, verbose=verbose)
        return result

    except CompilationError:
        # Workspace already handled by _fail
        raise
    except BaseException:
        # Nothing to diagnose; reclaim the workspace before propagating
        await remove_workspace(workspace.root)
        raise
