"""vehicle-docs command line entry point."""

import logging
from pathlib import Path
from typing import Optional

import structlog
import typer
from pydantic import ValidationError
from rich.console import Console

from vehicle_docs.config import load_settings
from vehicle_docs.errors import DocumentError, DocumentValidationError
from vehicle_docs.models import DocumentKind, parse_bundle
from vehicle_docs.output import render_document
from vehicle_docs.samples import sample_bundle

app = typer.Typer(
    name="vehicle-docs",
    help="Generate dealership contracts and invoices as PDF",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
):
    """vehicle-docs CLI."""
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(level=level, format="%(message)s")
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(level))
    ctx.obj = {"debug": debug}


def _write(document, output):
    path = document.save(output)
    console.print(
        f"[bold green]Saved[/bold green] {path} "
        f"([cyan]{document.page_count}[/cyan] pages, {len(document.content)} bytes)"
    )


@app.command()
def render(
    bundle_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON document bundle"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file or directory"),
    strict: bool = typer.Option(False, "--strict", help="Reject incomplete legal data"),
):
    """Render a JSON bundle (its 'kind' selects the document type)."""
    try:
        bundle = parse_bundle(bundle_file.read_text(encoding="utf-8"))
    except ValidationError as exc:
        console.print(f"[bold red]Invalid bundle:[/bold red] {exc}")
        raise typer.Exit(code=2)

    settings = load_settings()
    try:
        document = render_document(bundle, style=settings.style(),
                                   company=settings.company_profile(), strict=strict)
    except DocumentValidationError as exc:
        for problem in exc.problems:
            console.print(f"[red]-[/red] {problem}")
        raise typer.Exit(code=1)
    except DocumentError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1)
    _write(document, output)


@app.command()
def sample(
    kind: DocumentKind = typer.Argument(..., help="compraventa, senal, factura or proforma"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file or directory"),
):
    """Render a demonstration document."""
    settings = load_settings()
    try:
        document = render_document(sample_bundle(kind, settings.default_tax_rate),
                                   style=settings.style(), company=settings.company_profile())
    except DocumentError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1)
    _write(document, output)


if __name__ == "__main__":
    app()
