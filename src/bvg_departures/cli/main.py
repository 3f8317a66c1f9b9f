"""CLI main entry point for BVG departures."""

import logging
import sys

import click
from rich.console import Console
from rich.table import Table

from ..core import (
    DeparturePipeline,
    ExtractionError,
    FailurePolicy,
    NetworkError,
    ScraperConfig,
    StationCandidate,
    ValidationError,
)
from ..core.config import DEFAULT_CONCURRENCY
from .formatters import (
    format_choices,
    format_station_detail_json,
    format_station_detail_table,
)

console = Console()
error_console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def choose(prompt: str, choices: list[str]) -> int:
    """Let the user pick one of the choices, returns its index."""
    format_choices(choices)
    picked = click.prompt(prompt, type=click.IntRange(1, len(choices)))
    return picked - 1


@click.group()
@click.version_option(version="0.1.0")
def cli() -> None:
    """BVG Departures - The BVG realtime schedules in your terminal."""
    pass


@cli.command()
@click.option(
    "--fast",
    "-F",
    nargs=2,
    type=str,
    metavar="STATION LINE",
    default=None,
    help="Bypass the interactive mode: first matching station, given line",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@click.option(
    "--timeout", "-t", type=float, default=None, help="Request timeout in seconds"
)
@click.option(
    "--concurrency",
    "-c",
    type=click.IntRange(min=1),
    default=DEFAULT_CONCURRENCY,
    help="Detail pages fetched at the same time",
)
@click.option(
    "--partial",
    is_flag=True,
    help="Show departures that could be fetched even if others failed",
)
@click.option(
    "--completion-order",
    is_flag=True,
    help="List departures in the order their details arrived",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def departures(
    fast: tuple[str, str] | None,
    output_format: str,
    timeout: float | None,
    concurrency: int,
    partial: bool,
    completion_order: bool,
    verbose: bool,
) -> None:
    """Show the next departures of a line at a station.

    Examples:
        bvg-departures departures
        bvg-departures departures --fast Alexanderplatz M4
        bvg-departures departures -F "S Südkreuz" S2 --format json
    """
    configure_logging(verbose)
    scraper_config = ScraperConfig(
        timeout=timeout,
        concurrency=concurrency,
        failure_policy=FailurePolicy.PARTIAL if partial else FailurePolicy.FAIL_FAST,
        preserve_order=not completion_order,
    )
    pipeline = DeparturePipeline(scraper_config)

    try:
        if fast:
            query = fast[0]
        else:
            query = click.prompt("Which station are you interested in?")

        with console.status(f"[bold green]Searching stations for {query}..."):
            candidates = pipeline.search_stations(query)

        if not candidates:
            console.print(f"No stations found for `{query}`", highlight=False)
            return

        if fast:
            candidate = candidates[0]
        else:
            console.print(
                "Several stations are available, please select the exact location:"
            )
            candidate = candidates[choose("Station", [c.name for c in candidates])]

        with console.status(f"[bold green]Loading timetable of {candidate.name}..."):
            overview = pipeline.get_station_overview(candidate)

        lines = pipeline.available_lines(overview)
        if not lines:
            console.print("No lines available at this station")
            return

        if fast:
            line = pipeline.resolve_line(overview, fast[1])
        else:
            console.print("Several lines are available, please select the line to display:")
            line = lines[choose("Line", lines)]

        with console.status(f"[bold green]Fetching live status of line {line}..."):
            station_detail = pipeline.get_station_detail(overview, line)

        if output_format == "json":
            click.echo(format_station_detail_json(station_detail))
        else:
            format_station_detail_table(station_detail)

    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {e}", highlight=False)
        sys.exit(1)
    except NetworkError as e:
        error_console.print(f"[red]Network error:[/red] {e}", highlight=False)
        sys.exit(1)
    except ExtractionError as e:
        error_console.print(f"[red]Scraping error:[/red] {e}", highlight=False)
        sys.exit(1)
    except click.Abort:
        raise
    except Exception as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        if verbose:
            error_console.print_exception()
        sys.exit(1)


@cli.command()
@click.argument("query")
@click.option(
    "--timeout", "-t", type=float, default=None, help="Request timeout in seconds"
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def stations(query: str, timeout: float | None, verbose: bool) -> None:
    """List stations matching QUERY.

    Examples:
        bvg-departures stations Alexanderplatz
    """
    configure_logging(verbose)
    pipeline = DeparturePipeline(ScraperConfig(timeout=timeout))

    try:
        with console.status(f"[bold green]Searching stations for {query}..."):
            candidates: list[StationCandidate] = pipeline.search_stations(query)
    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {e}", highlight=False)
        sys.exit(1)
    except NetworkError as e:
        error_console.print(f"[red]Network error:[/red] {e}", highlight=False)
        sys.exit(1)
    except ExtractionError as e:
        error_console.print(f"[red]Scraping error:[/red] {e}", highlight=False)
        sys.exit(1)

    if not candidates:
        console.print(f"No stations found for `{query}`", highlight=False)
        return

    table = Table(title="Stations", show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Name", style="cyan")
    if verbose:
        table.add_column("Timetable", style="blue")

    for idx, candidate in enumerate(candidates, 1):
        row = [str(idx), candidate.name]
        if verbose:
            row.append(candidate.overview_link)
        table.add_row(*row)

    console.print(table)


@cli.group()
def config() -> None:
    """Configuration management."""
    pass


@config.command("show")
def show_config() -> None:
    """Show the default configuration."""
    console.print("[bold]Current Configuration:[/bold]")
    for key, value in ScraperConfig().describe().items():
        console.print(f"• {key}: {value}", highlight=False)


if __name__ == "__main__":
    cli()
