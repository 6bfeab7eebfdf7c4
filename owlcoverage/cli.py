"""Command-line interface for OWL Coverage.

This module provides the main CLI entry point for OWL Coverage,
implementing commands for analyzing documents, exporting the bundled
sample, writing a config template and serving the web dashboard.
"""

import logging
import sys
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from owlcoverage import __version__
from owlcoverage.config import OutputFormat, Settings, load_settings
from owlcoverage.core.analyzer import CoverageAnalyzer
from owlcoverage.core.loader import OntologyLoader, load_sample
from owlcoverage.core.models import AnalysisResult, LoadFailure
from owlcoverage.output import ReportGenerator, TurtleExporter

console = Console()
error_console = Console(stderr=True)

# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_BELOW_THRESHOLD = 2

FORMAT_CHOICES = [f.value for f in OutputFormat]


def configure_logging(level: str) -> None:
    """Route log records through rich on stderr.

    Args:
        level: Logging level name, e.g. 'WARNING'.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=error_console, show_path=False)],
        force=True,
    )


def print_banner() -> None:
    """Print the OWL Coverage banner."""
    banner = Text()
    banner.append("OWL Coverage", style="bold cyan")
    banner.append(" v" + __version__, style="dim")
    banner.append("\n")
    banner.append("Definition coverage analysis for OWL/XML ontologies", style="italic")

    console.print(Panel(banner, border_style="cyan", padding=(0, 2)))


def render_report(result: AnalysisResult, format: str, settings: Settings) -> str:
    """Render a result in the requested format.

    Args:
        result: The analysis result.
        format: Output format name.
        settings: Loaded settings (report options).

    Returns:
        Report content.
    """
    output = settings.output
    if format == OutputFormat.TURTLE.value:
        return TurtleExporter(base_namespace=output.base_namespace).generate(result)

    report_gen = ReportGenerator(
        include_timestamps=output.include_timestamps,
        show_parents=output.show_parents,
    )
    if format == OutputFormat.TEXT.value:
        return report_gen.generate_text(result)
    if format == OutputFormat.MARKDOWN.value:
        return report_gen.generate_markdown(result)
    if format == OutputFormat.JSON.value:
        return report_gen.generate_json(result)
    if format == OutputFormat.HTML.value:
        return report_gen.generate_html(result)
    raise click.ClickException(f"Unknown format: {format}")


def output_content(content: str, output_path: str | None, quiet: bool = False) -> None:
    """Write content to a file, or to stdout when no path is given."""
    if output_path:
        Path(output_path).write_text(content, encoding="utf-8")
        if not quiet:
            console.print(f"[green]Output written to:[/green] {output_path}")
    else:
        click.echo(content)


def print_result_summary(result: AnalysisResult) -> None:
    """Print a summary table of the result.

    Args:
        result: The analysis result.
    """
    table = Table(title="Coverage Summary", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")

    if result.source:
        table.add_row("Source", result.source)
    table.add_row("Total Classes", str(result.total_classes))
    table.add_row("Defined", f"[green]{result.defined_count}[/green]")
    table.add_row("Missing", f"[yellow]{result.undefined_count}[/yellow]")
    table.add_row("Coverage", f"[bold]{result.coverage_percent}%[/bold]")

    console.print(table)


def print_failure(failure: LoadFailure) -> None:
    """Print the terminal error state for a malformed document."""
    error_console.print("[red]Error loading ontology[/red]")
    error_console.print(f"  {failure.message}", markup=False)


@click.group(invoke_without_command=True)
@click.option("--version", "-V", is_flag=True, help="Show version and exit.")
@click.pass_context
def main(ctx: click.Context, version: bool) -> None:
    """OWL Coverage: definition coverage analysis for OWL/XML ontologies.

    Reports which declared classes carry a subclass, equivalence or
    disjointness axiom, and the share of classes that do.

    \b
    Quick Start:
      owlcoverage analyze pizza.owx
      owlcoverage analyze --sample --format markdown
      owlcoverage analyze ontology.owx --min-coverage 80
      owlcoverage serve
    """
    if version:
        console.print(f"OWL Coverage version {__version__}")
        ctx.exit(0)

    if ctx.invoked_subcommand is None:
        print_banner()
        console.print()
        console.print(ctx.get_help())


@main.command()
@click.argument("input_file", required=False, type=click.Path(dir_okay=False))
@click.option(
    "--sample",
    is_flag=True,
    help="Analyze the bundled pizza ontology instead of a file",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(FORMAT_CHOICES),
    default=None,
    help="Report format (default from config: text)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    help="Output file path (default: stdout)",
)
@click.option(
    "--min-coverage",
    type=click.FloatRange(0, 100),
    default=None,
    help="Exit with status 2 if coverage is below this percentage",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Configuration file (default: ./owlcoverage.yaml, ~/.owlcoverage.yaml)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Show debug logging",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Suppress non-essential output",
)
def analyze(
    input_file: str | None,
    sample: bool,
    format: str | None,
    output: str | None,
    min_coverage: float | None,
    config_file: str | None,
    verbose: bool,
    quiet: bool,
) -> None:
    """Analyze definition coverage of an OWL/XML document.

    INPUT_FILE may be '-' to read the document from stdin.

    \b
    Example:
      owlcoverage analyze pizza.owx --format json -o coverage.json

    \b
    Exit codes:
      0 - Analysis completed (and coverage meets --min-coverage)
      1 - Document could not be loaded
      2 - Coverage is below --min-coverage
    """
    overrides: dict[str, Any] = {
        "output": {"format": format},
        "analysis": {"min_coverage": min_coverage},
    }
    if verbose:
        overrides["logging"] = {"level": "DEBUG"}

    try:
        settings = load_settings(config_file, overrides)
    except (ValueError, FileNotFoundError) as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e

    configure_logging(settings.logging.level)

    if sample == bool(input_file):
        raise click.UsageError("Provide exactly one of INPUT_FILE or --sample.")

    loader = OntologyLoader()
    if sample:
        loaded = loader.load_text(load_sample(), source="sample")
    elif input_file == "-":
        loaded = loader.load_text(click.get_text_stream("stdin").read(), "stdin")
    else:
        loaded = loader.load_file(input_file)

    if isinstance(loaded, LoadFailure):
        print_failure(loaded)
        if settings.analysis.fail_on_malformed:
            sys.exit(EXIT_FAILURE)
        sys.exit(EXIT_SUCCESS)

    result = CoverageAnalyzer(loader=loader).analyze(loaded)

    if not quiet:
        print_result_summary(result)
        console.print()

    content = render_report(result, settings.output.format.value, settings)
    output_content(content, output, quiet)

    threshold = settings.analysis.min_coverage
    if result.coverage_percent < threshold:
        if not quiet:
            error_console.print(
                f"[yellow]Coverage {result.coverage_percent}% is below "
                f"the required {threshold}%[/yellow]"
            )
        sys.exit(EXIT_BELOW_THRESHOLD)

    sys.exit(EXIT_SUCCESS)


@main.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="File to write the document to (default: stdout)",
)
def sample(output: str | None) -> None:
    """Write the bundled pizza ontology (OWL/XML) document."""
    output_content(load_sample(), output)


@main.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default=".",
    help="Directory to create files in",
)
@click.option(
    "--force",
    is_flag=True,
    help="Overwrite existing files",
)
def init(output: str, force: bool) -> None:
    """Initialize a project with a sample owlcoverage.yaml."""
    output_dir = Path(output)
    output_dir.mkdir(parents=True, exist_ok=True)

    config_content = """\
# OWL Coverage Configuration
# See documentation for all options

analysis:
  # Exit with status 2 when coverage falls below this percentage
  min_coverage: 0.0
  # Exit with status 1 when the document is not well-formed
  fail_on_malformed: true

output:
  # Report format: text, markdown, json, html, or turtle
  format: text
  # List named parents of defined classes
  show_parents: true
  # Include a generation timestamp in reports
  include_timestamps: true

logging:
  # DEBUG, INFO, WARNING, ERROR, or CRITICAL
  level: WARNING

web:
  host: 127.0.0.1
  port: 8765
"""

    config_path = output_dir / "owlcoverage.yaml"

    if config_path.exists() and not force:
        console.print(
            f"[yellow]Skipping {config_path} (already exists, use --force to overwrite)[/yellow]"
        )
        return

    config_path.write_text(config_content, encoding="utf-8")
    console.print("[green]Created files:[/green]")
    console.print(f"  {config_path}")
    console.print()
    console.print("[dim]Next steps:[/dim]")
    console.print("  1. Analyze the sample: owlcoverage analyze --sample")
    console.print("  2. Analyze your ontology: owlcoverage analyze my-ontology.owx")


@main.command()
@click.option("--host", default=None, help="Host to bind to (default from config)")
@click.option("--port", type=int, default=None, help="Port to listen on")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Serve the coverage dashboard over HTTP."""
    settings = load_settings(cli_overrides={"web": {"host": host, "port": port}})
    configure_logging(settings.logging.level)

    from owlcoverage.web.server import run_server

    run_server(
        host=settings.web.host,
        port=settings.web.port,
        reload=reload,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
