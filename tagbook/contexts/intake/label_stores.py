"""
Read-side adapters for the label stores.

The image-labeling application keeps categories and classifications as flat JSON
arrays under Data/ and uploaded images as plain files under Uploads/. Creating,
updating and deleting those records belongs to the application; these adapters
only read them for reporting.

File formats (as written by the application):
    categories.json       [{"Id": "<guid>", "Name": "Cats"}, ...]
    classifications.json  [{"ImageIdentifier": "a.jpg", "CategoryId": "<guid>",
                            "ClassifiedAt": "2025-05-01T12:34:56.1234567Z"}, ...]
"""

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import aiofiles
import aiofiles.os
from dotenv import load_dotenv

from tagbook.contexts.intake.label_data_structures import Category, ClassificationRecord
from tagbook.contexts.intake.logger import _log_debug, _log_warning

load_dotenv()
DATA_PATH = Path(os.getenv("DATA_PATH", "Data"))
UPLOADS_PATH = Path(os.getenv("UPLOADS_PATH", "Uploads"))


def _field(record: Dict[str, Any], name: str) -> Any:
    """Look up a PascalCase field, accepting the camelCase spelling too."""
    if name in record:
        return record[name]
    return record.get(name[0].lower() + name[1:])


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        _log_warning(f"Unparseable classification timestamp: {value!r}")
        return None


async def _read_json_array(path: Path) -> List[Dict[str, Any]]:
    """Read a JSON array file; a missing file reads as an empty store."""
    if not await aiofiles.os.path.exists(path):
        _log_debug(f"Store file not found, treating as empty: {path}")
        return []

    async with aiofiles.open(path, "r", encoding="utf-8-sig") as f:
        content = await f.read()

    data = json.loads(content) if content.strip() else []
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array in {path}, got {type(data).__name__}")
    return data


class CategoryStore:
    """Read access to categories.json."""

    def __init__(self, path: Path = None):
        self.path = Path(path) if path is not None else DATA_PATH / "categories.json"

    async def get_categories(self) -> List[Category]:
        """Return all categories in stored order."""
        records = await _read_json_array(self.path)
        return [Category(id=str(_field(r, "Id")), name=_field(r, "Name") or "") for r in records]


class ClassificationStore:
    """Read access to classifications.json."""

    def __init__(self, path: Path = None):
        self.path = Path(path) if path is not None else DATA_PATH / "classifications.json"

    async def get_all_classifications(self) -> List[ClassificationRecord]:
        """Return all classification records in stored order."""
        records = await _read_json_array(self.path)
        return [
            ClassificationRecord(
                image_identifier=_field(r, "ImageIdentifier"),
                category_id=str(_field(r, "CategoryId")),
                classified_at=_parse_timestamp(_field(r, "ClassifiedAt")),
            )
            for r in records
        ]


class UploadStore:
    """
    Read access to the shared directory of uploaded images.

    The store is shared by every concurrent report run and is never written
    to by the reporting pipeline.
    """

    def __init__(self, root: Path = None):
        self.root = Path(root) if root is not None else UPLOADS_PATH

    async def list_filenames(self) -> List[str]:
        """Return the names of regular files directly under the store root, sorted."""
        if not await aiofiles.os.path.isdir(self.root):
            _log_debug(f"Upload directory not found, treating as empty: {self.root}")
            return []

        names = await aiofiles.os.listdir(self.root)
        filenames = []
        for name in names:
            if await aiofiles.os.path.isfile(self.root / name):
                filenames.append(name)
        return sorted(filenames)

    def path_for(self, filename: str) -> Path:
        """
        Resolve an uploaded filename to its path inside the store.

        Raises:
            ValueError: If the filename would resolve outside the store root
        """
        root = self.root.resolve()
        path = (root / filename).resolve()
        try:
            path.relative_to(root)
        except ValueError as e:
            raise ValueError(f"Path traversal detected: {filename!r} escapes {self.root}") from e
        if path == root:
            raise ValueError(f"Not a file name: {filename!r}")
        return path

    async def exists(self, filename: str) -> bool:
        """Check whether an uploaded file is present."""
        try:
            path = self.path_for(filename)
        except ValueError:
            return False
        return bool(await aiofiles.os.path.isfile(path))

    async def read_bytes(self, filename: str) -> bytes:
        """Read an uploaded file fully."""
        async with aiofiles.open(self.path_for(filename), "rb") as f:
            return await f.read()
