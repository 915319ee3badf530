#!/usr/bin/env python3
"""
Image Classification Report CLI

Builds classification reports from the label stores using the report pipeline.

Commands:
    stats   - Print summary statistics and per-category counts
    tex     - Write the LaTeX report source (no compiler needed)
    pdf     - Compile the report and write Report_<timestamp>.pdf
    events  - Show recent report pipeline events

Examples:\n

    generate_report.py stats                                   # Summary table

    generate_report.py tex --samples 0 --output report.tex     # LaTeX without images

    generate_report.py pdf --title "May labels" --samples 5    # Compiled PDF

    generate_report.py pdf --uploads /srv/Uploads --data /srv/Data --output outs/reports
"""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from tagbook.contexts.intake import (
    CategoryStore,
    ClassificationStore,
    UploadStore,
    ValidationError,
    validate_report_request,
)
from tagbook.contexts.intake.label_stores import DATA_PATH, UPLOADS_PATH
from tagbook.contexts.intake.request import DEFAULT_SAMPLES_PER_CATEGORY, MAX_SAMPLES_PER_CATEGORY
from tagbook.contexts.rendering.compiler import LATEX_COMPILER
from tagbook.pipeline import ReportPipeline
from tagbook.utils.errors import ReportError
from tagbook.utils.event_logging import LOGS_PATH, get_recent_events
from tagbook.utils.logger import setup_logger
from tagbook.utils.timestamp import now

app = typer.Typer(
    help="Generate image classification reports (statistics, LaTeX source, or PDF)",
    add_completion=False,
    invoke_without_command=True,
)

TitleOption = Annotated[
    Optional[str],
    typer.Option("--title", "-t", help="Report title (default: 'Image Classification Report')"),
]
SamplesOption = Annotated[
    int,
    typer.Option(
        "--samples",
        "-s",
        help=f"Sample images per category, 0 disables the image section (0-{MAX_SAMPLES_PER_CATEGORY})",
    ),
]
UploadsOption = Annotated[
    Path,
    typer.Option("--uploads", help="Directory of uploaded images"),
]
DataOption = Annotated[
    Path,
    typer.Option("--data", help="Directory holding categories.json and classifications.json"),
]


def build_pipeline(uploads: Path, data: Path) -> ReportPipeline:
    """Pipeline over the stores in the given directories."""
    return ReportPipeline(
        category_store=CategoryStore(data / "categories.json"),
        classification_store=ClassificationStore(data / "classifications.json"),
        upload_store=UploadStore(uploads),
    )


def validate_or_exit(title: Optional[str], samples: int):
    try:
        return validate_report_request(title=title, samples_per_category=samples)
    except ValidationError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("stats")
def stats_command(
    samples: SamplesOption = DEFAULT_SAMPLES_PER_CATEGORY,
    uploads: UploadsOption = UPLOADS_PATH,
    data: DataOption = DATA_PATH,
):
    """
    Print summary statistics and the per-category table.

    Examples:\n

        $ generate_report.py stats                        # Default stores

        $ generate_report.py stats --samples 5            # Show up to 5 samples each
    """
    request = validate_or_exit(None, samples)
    report = asyncio.run(build_pipeline(uploads, data).prepare(request))

    typer.secho("\nSummary Statistics", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"  Total images:        {report.total_images}")
    typer.echo(f"  Classified images:   {report.classified_images}")
    typer.echo(f"  Unclassified images: {report.unclassified_images}")

    typer.secho("\nCategory Details", fg=typer.colors.BLUE, bold=True)
    if not report.category_stats:
        typer.echo("  (no categories)")
    name_width = max([len(stat.category_name) for stat in report.category_stats] + [8])
    for stat in report.category_stats:
        typer.echo(f"  {stat.category_name:<{name_width}}  {stat.count:>6}  {stat.percentage:>5.1f}%")
        if request.samples_per_category > 0 and stat.sample_image_identifiers:
            typer.echo(f"  {'':<{name_width}}  samples: {', '.join(stat.sample_image_identifiers)}")
    typer.echo("")


@app.command("tex")
def tex_command(
    title: TitleOption = None,
    samples: SamplesOption = DEFAULT_SAMPLES_PER_CATEGORY,
    uploads: UploadsOption = UPLOADS_PATH,
    data: DataOption = DATA_PATH,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write LaTeX to this file (default: stdout)"),
    ] = None,
):
    """
    Write the LaTeX source of the report.

    Never runs the document compiler.

    Examples:\n

        $ generate_report.py tex > report.tex                    # To stdout

        $ generate_report.py tex --output outs/report.tex        # To file
    """
    request = validate_or_exit(title, samples)

    try:
        document = asyncio.run(build_pipeline(uploads, data).generate_document(request))
    except ReportError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if output is None:
        typer.echo(document, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(document, encoding="utf-8")
    typer.secho(f"✓ LaTeX written to {output}", fg=typer.colors.GREEN, bold=True, err=True)


@app.command("pdf")
def pdf_command(
    title: TitleOption = None,
    samples: SamplesOption = DEFAULT_SAMPLES_PER_CATEGORY,
    uploads: UploadsOption = UPLOADS_PATH,
    data: DataOption = DATA_PATH,
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Directory to write the PDF into"),
    ] = Path("."),
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detailed compiler warnings and output"),
    ] = False,
):
    """
    Compile the report to PDF.

    Requires the document compiler (pdflatex by default, LATEX_COMPILER env).

    Examples:\n

        $ generate_report.py pdf                                  # Default settings

        $ generate_report.py pdf --samples 0 --output outs/reports
    """
    request = validate_or_exit(title, samples)

    log_file = setup_logger(
        context_name="report",
        log_dir=LOGS_PATH / f"report_{now()}",
        extra_provenance={
            "LaTeX compiler": LATEX_COMPILER,
            "Uploads": uploads,
            "Data": data,
        },
    )

    typer.secho(f"\nGenerating: {request.title}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Samples per category: {request.samples_per_category}")
    typer.echo("")

    try:
        artifact = asyncio.run(build_pipeline(uploads, data).generate_artifact(request, verbose=verbose))
    except ReportError as e:
        typer.secho(f"\n✗ Report generation failed: {e.message}", fg=typer.colors.RED, bold=True, err=True)
        typer.echo(f"  Log: {log_file}", err=True)
        raise typer.Exit(code=1)

    output.mkdir(parents=True, exist_ok=True)
    pdf_path = output / artifact.filename
    pdf_path.write_bytes(artifact.content)

    typer.echo("")
    typer.secho("✓ Report generated", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  PDF: {pdf_path} ({len(artifact.content)} bytes)")
    if not artifact.workspace_removed:
        typer.secho("  Compilation workspace could not be removed (see log)", fg=typer.colors.YELLOW)
    typer.echo(f"  Log: {log_file}")
    typer.echo("")


@app.command("events")
def events_command(
    count: Annotated[int, typer.Option("--count", "-n", help="Number of events to show")] = 10,
    report_id: Annotated[Optional[str], typer.Option("--report", help="Filter by report id")] = None,
    event_type: Annotated[Optional[str], typer.Option("--type", help="Filter by event type")] = None,
):
    """
    Show recent report pipeline events.

    Examples:\n

        $ generate_report.py events                        # Last 10 events

        $ generate_report.py events --type report_failed   # Recent failures
    """
    events = get_recent_events(n=count, report_id=report_id, event_type=event_type)
    if not events:
        typer.echo("No events found.")
        return

    for event in events:
        color = typer.colors.RED if event.get("event_type") == "report_failed" else None
        typer.secho(
            f"{event.get('timestamp', '')}  {event.get('report_id', ''):<12}  {event.get('event_type', '')}",
            fg=color,
        )


if __name__ == "__main__":
    app()
