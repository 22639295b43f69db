"""Output formatters for CLI display."""

import json
from datetime import datetime

from rich.console import Console
from rich.table import Table

from ..core.context import QueryConnectionsResult
from ..core.models import Location, NearbyStationsResult, QueryDeparturesResult

console = Console()


def _time(value: datetime | None) -> str:
    return value.strftime("%H:%M") if value else ""


def format_locations_table(locations: list[Location], title: str) -> None:
    """Display locations as a rich table."""
    if not locations:
        console.print("No locations found.")
        return

    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Type", style="blue")
    table.add_column("Name", style="green")
    table.add_column("Lat", style="dim")
    table.add_column("Lon", style="dim")

    for location in locations:
        table.add_row(
            str(location.id or ""),
            location.type.value,
            location.name,
            str(location.lat or ""),
            str(location.lon or ""),
        )
    console.print(table)


def format_nearby_table(result: NearbyStationsResult) -> None:
    format_locations_table(result.stations, "Nearby stations")


def format_departures_table(result: QueryDeparturesResult) -> None:
    """Display departure boards, one table per station."""
    if not result.station_departures:
        console.print(f"No departures ({result.status.value}).")
        return

    for board in result.station_departures:
        table = Table(
            title=f"Departures: {board.location.name or board.location.id}",
            show_header=True,
            header_style="bold blue",
        )
        table.add_column("Time", style="magenta")
        table.add_column("Expected", style="yellow")
        table.add_column("Line", style="cyan")
        table.add_column("Destination", style="green")
        table.add_column("Platform", style="blue")

        for departure in board.departures:
            expected = "cancelled" if departure.cancelled else _time(departure.predicted_time)
            table.add_row(
                _time(departure.planned_time),
                expected,
                f"{departure.line.label} ({departure.line.product.value})",
                departure.destination,
                departure.position or "",
            )
        console.print(table)


def format_connections_table(result: QueryConnectionsResult) -> None:
    """Display connections, each with its legs."""
    if not result.connections:
        console.print(f"No connections ({result.status.value}).")
        return

    for idx, connection in enumerate(result.connections, 1):
        table = Table(
            title=f"Connection {idx}: {connection}",
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column("From", style="cyan")
        table.add_column("Dep", style="magenta")
        table.add_column("To", style="cyan")
        table.add_column("Arr", style="magenta")
        table.add_column("Line", style="yellow")

        for leg in connection.legs:
            means = f"walk {leg.min} min" if leg.line is None else leg.line.label
            table.add_row(
                leg.departure.name,
                _time(leg.departure_time),
                leg.arrival.name,
                _time(leg.arrival_time),
                means,
            )
        console.print(table)


def format_json(result: object) -> str:
    """Format a result model (or list of models) as JSON."""
    if isinstance(result, list):
        data = [item.model_dump(mode="json") for item in result]
    else:
        data = result.model_dump(mode="json")
    return json.dumps(data, ensure_ascii=False, indent=2)
