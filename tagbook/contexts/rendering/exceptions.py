"""Custom exceptions for the rendering context."""

from pathlib import Path
from typing import Any, Dict, List, Optional

from tagbook.utils.errors import ReportError

# Maximum characters of compiler output quoted in exception messages
MESSAGE_SNIPPET_CHARS = 500


def _tail(text: str, limit: int = MESSAGE_SNIPPET_CHARS) -> str:
    text = text.strip()
    return "..." + text[-limit:] if len(text) > limit else text


class CompilationError(ReportError):
    """
    Exception raised when the document compiler fails to produce an artifact.

    Attributes:
        message: Error description
        reason: "exit_code", "missing_artifact" or "timeout"
        exit_code: Compiler exit status (None on timeout)
        stdout: Captured compiler standard output
        stderr: Captured compiler standard error
        log_text: Contents of the compiler's .log file (None if unreadable)
        errors: Error lines parsed from the log
        workspace: Workspace directory the compilation ran in
    """

    kind = "compilation_error"

    def __init__(
        self,
        message: str,
        reason: str,
        exit_code: Optional[int] = None,
        stdout: str = "",
        stderr: str = "",
        log_text: Optional[str] = None,
        errors: Optional[List[str]] = None,
        workspace: Optional[Path] = None,
    ):
        self.reason = reason
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        self.log_text = log_text
        self.errors = errors or []
        self.workspace = workspace

        # Build enhanced error message
        parts = [message]

        if exit_code is not None:
            parts.append(f"Exit code: {exit_code}")

        if self.errors:
            parts.append("Errors:")
            parts.extend(f"  {error}" for error in self.errors[:5])

        if stderr.strip():
            parts.append(f"Error stream: {_tail(stderr)}")

        super().__init__("\n".join(parts))
        # Keep the short description as the headline
        self.message = message

    def details(self) -> Dict[str, Any]:
        return {
            "reason": self.reason,
            "exit_code": self.exit_code,
            "errors": self.errors,
            "stdout": self.stdout,
            "stderr": self.stderr,
            "log_text": self.log_text,
            "workspace": str(self.workspace) if self.workspace else None,
        }


class ProcessLaunchError(ReportError):
    """
    Exception raised when the document compiler binary cannot be started.

    Attributes:
        executable: Compiler executable that failed to launch
        original_error: The OSError raised by the launch attempt
    """

    kind = "process_launch_error"

    def __init__(self, executable: str, original_error: Optional[Exception] = None):
        self.executable = executable
        self.original_error = original_error

        message = (
            f"Failed to start document compiler '{executable}'. "
            "Ensure the document compiler is installed and reachable on PATH "
            "(or set LATEX_COMPILER)."
        )
        if original_error:
            message += f"\nOriginal error: {original_error}"

        super().__init__(message)

    def details(self) -> Dict[str, Any]:
        return {"executable": self.executable}
