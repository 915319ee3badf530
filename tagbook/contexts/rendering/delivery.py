"""
Artifact delivery.

Reads a compiled PDF into memory and reclaims its workspace.
"""

from dataclasses import dataclass
from pathlib import Path

import aiofiles

from tagbook.contexts.rendering.logger import _log_info
from tagbook.contexts.rendering.workspace import remove_workspace
from tagbook.utils.timestamp import artifact_stamp

PDF_MEDIA_TYPE = "application/pdf"


@dataclass(frozen=True)
class DeliveredArtifact:
    """
    A compiled report held in memory.

    Attributes:
        content: PDF bytes
        filename: Suggested download name (Report_<YYYYMMDDHHMMSS>.pdf)
        media_type: MIME type of content
        workspace_removed: False if the workspace could not be deleted
    """

    content: bytes
    filename: str
    media_type: str = PDF_MEDIA_TYPE
    workspace_removed: bool = True


def suggested_filename() -> str:
    """Download name for a report compiled now (UTC)."""
    return f"Report_{artifact_stamp()}.pdf"


async def deliver_artifact(artifact_path: Path, workspace_root: Path = None) -> DeliveredArtifact:
    """
    Buffer a compiled artifact and delete its workspace.

    The artifact is fully read before the workspace is touched, so a failed
    cleanup never loses the report; it is only logged.

    Args:
        artifact_path: Path to the compiled PDF
        workspace_root: Workspace to delete (default: the artifact's directory)

    Returns:
        DeliveredArtifact with the PDF bytes and a suggested filename
    """
    artifact_path = Path(artifact_path)

    # Read-only open; concurrent writers to the workspace are not blocked
    async with aiofiles.open(artifact_path, "rb") as f:
        content = await f.read()
    _log_info(f"Read {len(content)} bytes from {artifact_path}")

    root = Path(workspace_root) if workspace_root is not None else artifact_path.parent
    removed = await remove_workspace(root)

    return DeliveredArtifact(
        content=content,
        filename=suggested_filename(),
        workspace_removed=removed,
    )
