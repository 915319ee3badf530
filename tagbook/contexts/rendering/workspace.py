"""
Compilation workspaces.

Each compilation runs in its own uniquely named directory so concurrent report
runs never see each other's files. A workspace lives until its artifact has been
read into memory, then the whole tree is removed.
"""

import asyncio
import os
import shutil
import tempfile
import uuid
from dataclasses import dataclass
from pathlib import Path

import aiofiles.os
from dotenv import load_dotenv

from tagbook.contexts.rendering.logger import _log_debug, _log_warning

load_dotenv()
WORKSPACE_ROOT = Path(
    os.getenv("REPORT_WORKSPACE_ROOT", Path(tempfile.gettempdir()) / "tagbook_reports")
)
REPORT_ASSET_SUBDIR = os.getenv("REPORT_ASSET_SUBDIR", "Uploads")

DOCUMENT_STEM = "report"


@dataclass(frozen=True)
class CompilationWorkspace:
    """
    Isolated directory tree for one compilation.

    Attributes:
        root: Workspace directory (unique per compilation)
        asset_subdir: Name of the image directory, relative to root
    """

    root: Path
    asset_subdir: str = REPORT_ASSET_SUBDIR

    @property
    def source_file(self) -> Path:
        return self.root / f"{DOCUMENT_STEM}.tex"

    @property
    def output_file(self) -> Path:
        return self.root / f"{DOCUMENT_STEM}.pdf"

    @property
    def log_file(self) -> Path:
        return self.root / f"{DOCUMENT_STEM}.log"

    @property
    def asset_dir(self) -> Path:
        return self.root / self.asset_subdir


async def create_workspace(
    base_dir: Path = None, asset_subdir: str = REPORT_ASSET_SUBDIR
) -> CompilationWorkspace:
    """
    Create a fresh, uniquely named workspace with its asset directory.

    Args:
        base_dir: Parent directory for workspaces (default: REPORT_WORKSPACE_ROOT)
        asset_subdir: Name of the image directory inside the workspace

    Returns:
        CompilationWorkspace whose directories exist
    """
    base_dir = Path(base_dir) if base_dir is not None else WORKSPACE_ROOT
    await aiofiles.os.makedirs(base_dir, exist_ok=True)

    workspace = CompilationWorkspace(root=base_dir / uuid.uuid4().hex, asset_subdir=asset_subdir)
    # exist_ok=False: a name collision must never share a directory
    await aiofiles.os.makedirs(workspace.root, exist_ok=False)
    await aiofiles.os.makedirs(workspace.asset_dir, exist_ok=True)

    _log_debug(f"Created workspace: {workspace.root}")
    return workspace


async def remove_workspace(root: Path) -> bool:
    """
    Recursively delete a workspace directory.

    Failure is logged as a warning and reported through the return value,
    never raised.

    Args:
        root: Workspace directory to delete

    Returns:
        True if the directory is gone, False if deletion failed
    """
    root = Path(root)
    if not root.exists():
        return True

    try:
        await asyncio.to_thread(shutil.rmtree, root)
    except OSError as e:
        _log_warning(f"Could not delete workspace {root}; it may need manual cleanup: {e}")
        return False

    _log_debug(f"Deleted workspace: {root}")
    return True
