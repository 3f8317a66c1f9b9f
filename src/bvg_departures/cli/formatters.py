"""Output formatters for CLI display."""

import json

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..core.models import StationDetail

console = Console()


def format_choices(choices: list[str]) -> None:
    """Display a numbered list of choices."""
    width = len(str(len(choices)))
    for idx, choice in enumerate(choices, 1):
        console.print(f"\\[{idx:>{width}}] {escape(choice)}", highlight=False)


def format_disruptions(disruptions: list[str]) -> None:
    """Display service notices as a banner above the departure table."""
    if not disruptions:
        return

    text = "\n\n".join(f"- {escape(disruption)}" for disruption in disruptions)
    console.print(
        Panel(
            text,
            title="[bold red underline]Service disruption[/bold red underline]",
            border_style="red",
        )
    )


def format_station_detail_table(station_detail: StationDetail) -> None:
    """Display the departures of a station as a rich table."""
    format_disruptions(station_detail.disruptions)

    table = Table(
        title=f"Next departures from {escape(station_detail.name)}",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Line", style="yellow", no_wrap=True)
    table.add_column("Departure", style="cyan", no_wrap=True)
    table.add_column("Status")
    table.add_column("Direction", style="green")
    table.add_column("Platform", style="blue")

    for departure in station_detail.departures:
        status_style = "red" if departure.is_delayed else "green"
        table.add_row(
            escape(departure.line),
            escape(departure.time),
            f"[{status_style}]{escape(departure.status)}[/{status_style}]",
            escape(departure.direction),
            escape(departure.platform or ""),
        )

    console.print(table)

    if station_detail.failures:
        console.print(
            f"[yellow]Status unknown for {len(station_detail.failures)} "
            "departure(s):[/yellow]"
        )
        for failure in station_detail.failures:
            console.print(f"  • {escape(str(failure))}", highlight=False)


def format_station_detail_json(station_detail: StationDetail) -> str:
    """Format a station detail as JSON."""
    return json.dumps(station_detail.model_dump(), ensure_ascii=False, indent=2)
