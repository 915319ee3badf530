"""Shared fixtures: label stores on disk, a scripted document compiler, isolated event log."""

import asyncio
import json
from pathlib import Path

import pytest

from tagbook.contexts.intake import CategoryStore, ClassificationStore, UploadStore
from tagbook.contexts.rendering import CompilerRun
from tagbook.pipeline import ReportPipeline

CATS_ID = "5d0f1a3e-0c52-4f0e-9a57-2b8f2c7d9e11"
DOGS_ID = "a1b2c3d4-e5f6-4a7b-8c9d-0e1f2a3b4c5d"

FAKE_PDF_BYTES = b"%PDF-1.4\n% scripted compiler output\n%%EOF\n"


class FakeCompiler:
    """
    DocumentCompiler double that follows a script instead of running LaTeX.

    Args:
        exit_codes: Exit code per pass (the last one repeats)
        produce_pdf: Write report.pdf on a zero exit code
        log_text: Contents written to report.log on every pass
        delay: Seconds to sleep inside each pass
    """

    def __init__(self, exit_codes=(0, 0), produce_pdf=True, log_text="This is a scripted compiler.\n", delay=0.0):
        self.exit_codes = list(exit_codes)
        self.produce_pdf = produce_pdf
        self.log_text = log_text
        self.delay = delay
        self.calls = []
        self.sources = []
        self.staged_assets = []

    async def compile(self, workspace):
        pass_index = len(self.calls)
        self.calls.append(workspace)
        self.sources.append(workspace.source_file.read_text(encoding="utf-8"))
        self.staged_assets.append(sorted(p.name for p in workspace.asset_dir.iterdir()))

        if self.delay:
            await asyncio.sleep(self.delay)

        returncode = self.exit_codes[min(pass_index, len(self.exit_codes) - 1)]
        if self.log_text is not None:
            workspace.log_file.write_text(self.log_text, encoding="latin-1")
        if returncode == 0 and self.produce_pdf:
            workspace.output_file.write_bytes(FAKE_PDF_BYTES)

        return CompilerRun(returncode=returncode, stdout=f"pass {pass_index + 1}\n", stderr="")


@pytest.fixture(autouse=True)
def isolated_event_log(tmp_path, monkeypatch):
    """Send pipeline events to a per-test file."""
    events_file = tmp_path / "logs" / "report_events.log"
    monkeypatch.setattr("tagbook.utils.event_logging.REPORT_EVENTS_FILE", events_file)
    return events_file


@pytest.fixture
def upload_dir(tmp_path) -> Path:
    """Upload store with ten images (img01.jpg ... img10.jpg)."""
    uploads = tmp_path / "Uploads"
    uploads.mkdir()
    for i in range(1, 11):
        (uploads / f"img{i:02d}.jpg").write_bytes(f"image {i}".encode())
    return uploads


@pytest.fixture
def data_dir(tmp_path) -> Path:
    """Category and classification stores: Cats has img01-img04, Dogs has img05-img07."""
    data = tmp_path / "Data"
    data.mkdir()

    categories = [{"Id": CATS_ID, "Name": "Cats"}, {"Id": DOGS_ID, "Name": "Dogs"}]
    classifications = [
        {"ImageIdentifier": f"img{i:02d}.jpg", "CategoryId": CATS_ID, "ClassifiedAt": "2025-05-01T12:00:00Z"}
        for i in range(1, 5)
    ] + [
        {"ImageIdentifier": f"img{i:02d}.jpg", "CategoryId": DOGS_ID, "ClassifiedAt": "2025-05-02T08:30:00Z"}
        for i in range(5, 8)
    ]

    (data / "categories.json").write_text(json.dumps(categories), encoding="utf-8")
    (data / "classifications.json").write_text(json.dumps(classifications), encoding="utf-8")
    return data


@pytest.fixture
def workspace_root(tmp_path) -> Path:
    return tmp_path / "workspaces"


@pytest.fixture
def fake_compiler():
    return FakeCompiler()


@pytest.fixture
def make_fake_compiler():
    """Factory for FakeCompiler instances with custom scripts."""
    return FakeCompiler


@pytest.fixture
def pipeline_factory(upload_dir, data_dir, workspace_root):
    """Build a ReportPipeline over the fixture stores with a given compiler."""

    def build(compiler=None):
        return ReportPipeline(
            category_store=CategoryStore(data_dir / "categories.json"),
            classification_store=ClassificationStore(data_dir / "classifications.json"),
            upload_store=UploadStore(upload_dir),
            compiler=compiler,
            workspace_root=workspace_root,
        )

    return build
