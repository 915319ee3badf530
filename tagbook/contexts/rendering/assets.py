"""
Asset staging for compilation workspaces.

Copies the uploaded images a report embeds into the workspace asset directory.
An image that is missing, unreadable or badly named never stops compilation;
it is recorded as Skipped and the document keeps its (now dangling) reference.
"""

import asyncio
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Union

from tagbook.contexts.intake.label_stores import UploadStore
from tagbook.contexts.rendering.logger import _log_warning
from tagbook.contexts.rendering.workspace import CompilationWorkspace


@dataclass(frozen=True)
class Copied:
    """An asset copied into the workspace."""

    filename: str
    destination: Path


@dataclass(frozen=True)
class Skipped:
    """An asset that could not be staged, with the reason."""

    filename: str
    reason: str


AssetCopyResult = Union[Copied, Skipped]


async def copy_assets(
    filenames: Iterable[str],
    upload_store: UploadStore,
    workspace: CompilationWorkspace,
) -> List[AssetCopyResult]:
    """
    Copy required images from the upload store into a workspace.

    Args:
        filenames: Uploaded filenames referenced by the document (duplicates ignored)
        upload_store: Shared, read-only upload store
        workspace: Destination workspace (asset directory must exist)

    Returns:
        One Copied or Skipped result per distinct filename, in input order
    """
    results: List[AssetCopyResult] = []

    for filename in dict.fromkeys(filenames):
        try:
            source = upload_store.path_for(filename)
        except (ValueError, TypeError, OSError) as e:
            _log_warning(f"Rejected asset name for report: {filename!r} ({e})")
            results.append(Skipped(filename, str(e)))
            continue

        destination = workspace.asset_dir / filename
        try:
            await asyncio.to_thread(shutil.copyfile, source, destination)
        except FileNotFoundError:
            _log_warning(f"Required image not found for report: {source}")
            results.append(Skipped(filename, "not found in upload store"))
            continue
        except IsADirectoryError:
            _log_warning(f"Required image is a directory, not a file: {source}")
            results.append(Skipped(filename, "not a regular file"))
            continue
        except OSError as e:
            _log_warning(f"Could not copy image into workspace: {source} ({e})")
            results.append(Skipped(filename, str(e)))
            continue

        results.append(Copied(filename, destination))

    return results
