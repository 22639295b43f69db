"""CLI main entry point for transit queries."""

import logging
import sys
from collections.abc import Callable
from datetime import datetime as dt_module

import click
from rich.console import Console

from .. import __version__
from ..config import Settings
from ..core import (
    ConfigurationError,
    HafasProvider,
    Location,
    LocationType,
    NetworkError,
    Option,
    ParseError,
    QueryConnectionsResult,
)
from ..providers import NETWORKS, get_provider
from ..transport import HttpTransport
from .formatters import (
    format_connections_table,
    format_departures_table,
    format_json,
    format_locations_table,
    format_nearby_table,
)

console = Console()
error_console = Console(stderr=True)

FORMAT_OPTION = click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)


def _parse_location(value: str) -> Location:
    """Turn '3000001' into a station and anything else into a name lookup."""
    if value.isdigit():
        return Location(type=LocationType.STATION, id=int(value))
    return Location(type=LocationType.ANY, name=value)


@click.group()
@click.version_option(version=__version__)
@click.option("--network", "-n", help="Network id (see 'networks')")
@click.option("--timeout", "-t", type=int, help="Request timeout in seconds")
@click.option("--verbose", "-v", is_flag=True, help="Log requests and skipped records")
@click.pass_context
def cli(ctx: click.Context, network: str | None, timeout: int | None, verbose: bool) -> None:
    """Transit Enabler - Query public transport backends without an API."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s"
        )

    settings = Settings()
    if timeout is not None:
        settings = settings.model_copy(update={"timeout": timeout})
    ctx.obj = {
        "settings": settings,
        "network": network or settings.default_network,
        "verbose": verbose,
    }


def _provider(ctx: click.Context) -> HafasProvider:
    return get_provider(ctx.obj["network"], HttpTransport(ctx.obj["settings"]))


def _run(ctx: click.Context, action: Callable[[], None]) -> None:
    try:
        action()
    except ConfigurationError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)
    except NetworkError as e:
        error_console.print(f"[red]Network error:[/red] {e}")
        sys.exit(1)
    except ParseError as e:
        error_console.print(f"[red]Parse error:[/red] {e}")
        if ctx.obj["verbose"]:
            error_console.print_exception()
        sys.exit(1)


def _more_pages(
    provider: HafasProvider, first: QueryConnectionsResult, count: int, later: bool
) -> list[QueryConnectionsResult]:
    """Follow the continuation context up to ``count`` pages in one direction."""
    pages: list[QueryConnectionsResult] = []
    current = first
    for _ in range(count):
        if current.context is None:
            break
        current = provider.query_more_connections(current.context, later=later)
        pages.append(current)
    return pages


@cli.command()
def networks() -> None:
    """List the configured networks."""
    for network_id, network in NETWORKS.items():
        console.print(f"[cyan]{network_id.value}[/cyan]  {network.name}")


@cli.command()
@click.option("--station", "-s", "station_id", type=int, help="Station id")
@click.option("--lat", type=int, help="Latitude in micro-degrees")
@click.option("--lon", type=int, help="Longitude in micro-degrees")
@click.option("--max-distance", default=0, help="Radius in meters, 0 for default")
@click.option("--max-stations", default=0, help="Maximum stations, 0 for all")
@FORMAT_OPTION
@click.pass_context
def nearby(
    ctx: click.Context,
    station_id: int | None,
    lat: int | None,
    lon: int | None,
    max_distance: int,
    max_stations: int,
    output_format: str,
) -> None:
    """Find stations near a station or a coordinate.

    Examples:
        transit-enabler nearby --station 8000105
        transit-enabler -n rmv nearby --lat 50108625 --lon 8669604
    """

    def action() -> None:
        if lat is not None and lon is not None:
            location = Location(type=LocationType.COORDINATE, lat=lat, lon=lon)
        elif station_id is not None:
            location = Location(type=LocationType.STATION, id=station_id)
        else:
            raise ConfigurationError("give --station or both --lat and --lon")

        result = _provider(ctx).query_nearby_stations(location, max_distance, max_stations)
        if output_format == "json":
            click.echo(format_json(result))
        else:
            format_nearby_table(result)

    _run(ctx, action)


@cli.command()
@click.argument("station_id", type=int)
@click.option("--max", "max_departures", default=0, help="Maximum departures, 0 for all")
@click.option("--equivs", is_flag=True, help="Include equivalent stations")
@FORMAT_OPTION
@click.pass_context
def departures(
    ctx: click.Context, station_id: int, max_departures: int, equivs: bool, output_format: str
) -> None:
    """Show the departure board of a station."""

    def action() -> None:
        result = _provider(ctx).query_departures(station_id, max_departures, equivs)
        if output_format == "json":
            click.echo(format_json(result))
        else:
            format_departures_table(result)

    _run(ctx, action)


@cli.command()
@click.argument("text")
@FORMAT_OPTION
@click.pass_context
def autocomplete(ctx: click.Context, text: str, output_format: str) -> None:
    """Complete a station name."""

    def action() -> None:
        locations = _provider(ctx).autocomplete_stations(text)
        if output_format == "json":
            click.echo(format_json(locations))
        else:
            format_locations_table(locations, f"Suggestions for {text}")

    _run(ctx, action)


@cli.command()
@click.argument("from_location")
@click.argument("to_location")
@click.option("--via", help="Intermediate stop")
@click.option(
    "--datetime",
    "-d",
    "datetime_str",
    help="Date and time (YYYY-MM-DD HH:MM format), now if omitted",
)
@click.option("--arrival", is_flag=True, help="Treat the time as arrival time")
@click.option("--products", "-p", help="Product letters, e.g. 'IRS'")
@click.option("--bike", is_flag=True, help="Only connections allowing bikes")
@click.option("--earlier", default=0, help="Also fetch this many pages of earlier connections")
@click.option("--later", default=0, help="Also fetch this many pages of later connections")
@FORMAT_OPTION
@click.pass_context
def connections(
    ctx: click.Context,
    from_location: str,
    to_location: str,
    via: str | None,
    datetime_str: str | None,
    arrival: bool,
    products: str | None,
    bike: bool,
    earlier: int,
    later: int,
    output_format: str,
) -> None:
    """Search connections between two stations (ids or names).

    Examples:
        transit-enabler connections 8000105 8000261
        transit-enabler -n rmv connections 3000001 3000912 --later 1
        transit-enabler -n rmv connections 3000001 3000912 --earlier 1 -f json
    """
    if datetime_str:
        try:
            when = dt_module.strptime(datetime_str, "%Y-%m-%d %H:%M")
        except ValueError:
            error_console.print("[red]Invalid datetime format. Use YYYY-MM-DD HH:MM[/red]")
            sys.exit(1)
    else:
        when = dt_module.now()

    def action() -> None:
        provider = _provider(ctx)
        result = provider.query_connections(
            _parse_location(from_location),
            _parse_location(via) if via else None,
            _parse_location(to_location),
            when,
            dep=not arrival,
            products=products,
            options=[Option.BIKE] if bike else [],
        )
        earlier_pages = _more_pages(provider, result, earlier, later=False)
        later_pages = _more_pages(provider, result, later, later=True)

        for page in [*reversed(earlier_pages), result, *later_pages]:
            if output_format == "json":
                click.echo(format_json(page))
            else:
                format_connections_table(page)

    _run(ctx, action)


if __name__ == "__main__":
    cli()
