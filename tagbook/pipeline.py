"""
Report Pipeline

Orchestrates one report request across the contexts:
intake (stores) -> aggregation -> templating -> rendering (compile, deliver).

Two export paths:
    generate_document(request)  LaTeX text only, never runs the compiler
    generate_artifact(request)  compiled PDF held in memory

Usage:
    pipeline = ReportPipeline()
    request = validate_report_request(title="Q3 labels", samples_per_category=2)
    artifact = await pipeline.generate_artifact(request)
    Path(artifact.filename).write_bytes(artifact.content)
"""

import asyncio
import time
import uuid
from pathlib import Path

from tagbook.contexts.aggregation import ReportData, prepare_report_data, required_asset_filenames
from tagbook.contexts.intake import (
    CategoryStore,
    ClassificationStore,
    ReportRequest,
    UploadStore,
)
from tagbook.contexts.rendering import (
    DeliveredArtifact,
    DocumentCompiler,
    compile_document,
    deliver_artifact,
)
from tagbook.contexts.templating import ReportDocumentGenerator
from tagbook.utils.event_logging import log_pipeline_event
from tagbook.utils.logger import report_context

EVENT_SOURCE = "pipeline"


class ReportPipeline:
    """
    Report generation over the label stores.

    Holds no per-request state: concurrent calls each get their own report data
    and compilation workspace.

    Args:
        category_store: Source of categories (default: CategoryStore())
        classification_store: Source of classifications (default: ClassificationStore())
        upload_store: Shared upload store (default: UploadStore())
        compiler: Document compiler (default: PdfLatexCompiler, chosen by compile_document)
        workspace_root: Parent directory for compilation workspaces
        generator: LaTeX document generator (default: ReportDocumentGenerator())
    """

    def __init__(
        self,
        category_store: CategoryStore = None,
        classification_store: ClassificationStore = None,
        upload_store: UploadStore = None,
        compiler: DocumentCompiler = None,
        workspace_root: Path = None,
        generator: ReportDocumentGenerator = None,
    ):
        self.category_store = category_store or CategoryStore()
        self.classification_store = classification_store or ClassificationStore()
        self.upload_store = upload_store or UploadStore()
        self.compiler = compiler
        self.workspace_root = workspace_root
        self.generator = generator or ReportDocumentGenerator()

    async def prepare(self, request: ReportRequest) -> ReportData:
        """Read the stores concurrently and aggregate them into ReportData."""
        categories, classifications, filenames = await asyncio.gather(
            self.category_store.get_categories(),
            self.classification_store.get_all_classifications(),
            self.upload_store.list_filenames(),
        )
        return prepare_report_data(request, categories, classifications, filenames)

    async def generate_document(self, request: ReportRequest) -> str:
        """
        Produce the LaTeX document for a request (text-only export).

        Args:
            request: Validated report request

        Returns:
            LaTeX document text
        """
        report_data = await self.prepare(request)
        return self.generator.generate_document(report_data)

    async def generate_artifact(self, request: ReportRequest, verbose: bool = False) -> DeliveredArtifact:
        """
        Produce the compiled PDF for a request.

        Args:
            request: Validated report request
            verbose: Log compiler warnings and output in detail (default: False)

        Returns:
            DeliveredArtifact with PDF bytes and a suggested filename

        Raises:
            CompilationError: Compiler failed, timed out, or produced no PDF
            ProcessLaunchError: Compiler executable could not be started
            TemplateRenderError: Report template failed to render
        """
        report_id = uuid.uuid4().hex[:12]
        log_pipeline_event(
            event_type="report_started",
            report_id=report_id,
            source=EVENT_SOURCE,
            title=request.title,
            samples_per_category=request.samples_per_category,
        )
        start_time = time.time()

        try:
            with report_context(report_id):
                report_data = await self.prepare(request)
                document_text = self.generator.generate_document(report_data)
                result = await compile_document(
                    document_text,
                    required_asset_filenames(report_data),
                    upload_store=self.upload_store,
                    compiler=self.compiler,
                    workspace_root=self.workspace_root,
                    verbose=verbose,
                )
                artifact = await deliver_artifact(result.pdf_path, result.workspace.root)
        except (Exception, asyncio.CancelledError) as e:
            # Every started run ends with exactly one terminal event
            log_pipeline_event(
                event_type="report_failed",
                report_id=report_id,
                source=EVENT_SOURCE,
                error_kind=getattr(e, "kind", type(e).__name__),
                error_message=getattr(e, "message", str(e)),
                elapsed_s=round(time.time() - start_time, 2),
            )
            raise

        log_pipeline_event(
            event_type="report_completed",
            report_id=report_id,
            source=EVENT_SOURCE,
            filename=artifact.filename,
            size_bytes=len(artifact.content),
            page_count=result.page_count,
            skipped_assets=[asset.filename for asset in result.skipped_assets],
            workspace_removed=artifact.workspace_removed,
            elapsed_s=round(time.time() - start_time, 2),
        )
        return artifact
