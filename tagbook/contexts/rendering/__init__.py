"""
Rendering Context

Responsibilities:
- Stages the LaTeX document and its images in an isolated workspace
- Runs the document compiler (two passes) with timeout and cancellation handling
- Surfaces compiler failures with exit code, streams and log
- Delivers the compiled PDF in memory and reclaims the workspace

Owns: Workspaces, compiler invocation, PDF delivery
Never: Modifies document content
"""

from tagbook.contexts.rendering.assets import Copied, Skipped, copy_assets
from tagbook.contexts.rendering.compiler import (
    CompilationResult,
    CompilerRun,
    DocumentCompiler,
    PdfLatexCompiler,
    compile_document,
)
from tagbook.contexts.rendering.delivery import DeliveredArtifact, deliver_artifact
from tagbook.contexts.rendering.exceptions import CompilationError, ProcessLaunchError
from tagbook.contexts.rendering.workspace import (
    CompilationWorkspace,
    create_workspace,
    remove_workspace,
)

__all__ = [
    # Compilation
    "compile_document",
    "CompilationResult",
    "CompilerRun",
    "DocumentCompiler",
    "PdfLatexCompiler",
    # Workspaces and assets
    "CompilationWorkspace",
    "create_workspace",
    "remove_workspace",
    "copy_assets",
    "Copied",
    "Skipped",
    # Delivery
    "deliver_artifact",
    "DeliveredArtifact",
    # Errors
    "CompilationError",
    "ProcessLaunchError",
]
