"""Command-line interface for the OSRM client."""

import asyncio
import logging
import sys
from typing import Optional

import click

from osrm_client.config import get_settings
from osrm_client.data.types import Coordinate, Overview, TableAnnotation
from osrm_client.errors import OSRMClientError, ValidationError
from osrm_client.services.client import ClientConfig, OSRMClient, Request, Result
from osrm_client.services.nearest_service import NearestRequestBuilder
from osrm_client.services.route_service import RouteRequestBuilder
from osrm_client.services.table_service import TableRequestBuilder
from osrm_client.services.tile_service import TileRequestBuilder

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def parse_coordinate_args(ctx, param, values) -> list[Coordinate]:
    """Click callback turning 'lon,lat' arguments into coordinates."""
    try:
        return [Coordinate.parse(value) for value in values]
    except ValidationError as e:
        raise click.BadParameter(e.message) from e


def parse_coordinate_arg(ctx, param, value: str) -> Coordinate:
    return parse_coordinate_args(ctx, param, [value])[0]


def parse_indices(ctx, param, value: Optional[str]) -> Optional[list[int]]:
    """Click callback for ';' or ',' separated index lists."""
    if value is None:
        return None
    try:
        return [int(part) for part in value.replace(",", ";").split(";") if part]
    except ValueError as e:
        raise click.BadParameter(f"Expected indices like '0;1;2', got {value!r}") from e


def send(config: ClientConfig, request: Request) -> Result:
    """Send one request with a short-lived async client."""

    async def run():
        async with OSRMClient(config=config) as client:
            return await client.send(request)

    return asyncio.run(run())


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--base-url", default=None, help="OSRM base URL (default: OSRM_BASE_URL)")
@click.pass_context
def cli(ctx, verbose: bool, base_url: Optional[str]):
    """OSRM client - query an OSRM routing engine."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    settings = get_settings()
    ctx.obj = ClientConfig(
        base_url=base_url or settings.osrm_base_url,
        version=settings.osrm_api_version,
    )


@cli.command()
@click.argument("coordinates", nargs=-1, required=True, callback=parse_coordinate_args)
@click.option("--profile", "-p", default=None, help="Routing profile (e.g. 'driving')")
@click.option("--alternatives", "-a", default=None, type=int, help="Search up to N alternatives")
@click.option("--steps", is_flag=True, help="Return turn-by-turn steps")
@click.option(
    "--overview",
    type=click.Choice([o.value for o in Overview]),
    default=None,
    help="Overview geometry detail",
)
@click.option("--show-url", is_flag=True, help="Print the request URL and exit")
@click.pass_obj
def route(
    config: ClientConfig,
    coordinates: list[Coordinate],
    profile: Optional[str],
    alternatives: Optional[int],
    steps: bool,
    overview: Optional[str],
    show_url: bool,
):
    """Find the fastest route through COORDINATES ('lon,lat' each)."""
    try:
        builder = RouteRequestBuilder(coordinates, profile)
        if alternatives is not None:
            builder = builder.alternatives(alternatives)
        if steps:
            builder = builder.steps()
        if overview:
            builder = builder.overview(Overview(overview))
        request = builder.build()

        if show_url:
            click.echo(request.url(config.base_url, config.version))
            return

        response = send(config, request)
    except OSRMClientError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Found {len(response.routes)} route(s):")
    for i, found in enumerate(response.routes, 1):
        click.echo(
            f"  [{i}] {found.distance / 1000.0:.2f} km, "
            f"{found.duration / 60.0:.1f} min, {len(found.legs)} leg(s)"
        )
    for waypoint in response.waypoints or []:
        click.echo(f"  - {waypoint.name or '(unnamed)'} at {waypoint.coordinate}")


@cli.command()
@click.argument("coordinates", nargs=-1, required=True, callback=parse_coordinate_args)
@click.option("--profile", "-p", default=None, help="Routing profile (e.g. 'driving')")
@click.option("--sources", default=None, callback=parse_indices, help="Source indices, e.g. '0;1'")
@click.option(
    "--destinations", default=None, callback=parse_indices, help="Destination indices"
)
@click.option(
    "--annotations",
    type=click.Choice([a.value for a in TableAnnotation]),
    default=TableAnnotation.DURATION.value,
    help="Matrices to return (default: duration)",
)
@click.option("--fallback-speed", type=float, default=None, help="Crow-flies fallback speed (m/s)")
@click.pass_obj
def table(
    config: ClientConfig,
    coordinates: list[Coordinate],
    profile: Optional[str],
    sources: Optional[list[int]],
    destinations: Optional[list[int]],
    annotations: str,
    fallback_speed: Optional[float],
):
    """Compute the duration/distance matrix between COORDINATES."""
    try:
        builder = TableRequestBuilder(coordinates, profile).annotations(
            TableAnnotation(annotations)
        )
        if sources is not None:
            builder = builder.sources(sources)
        if destinations is not None:
            builder = builder.destinations(destinations)
        if fallback_speed is not None:
            builder = builder.fallback_speed(fallback_speed)
        response = send(config, builder.build())
    except OSRMClientError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for label, matrix, unit, scale in (
        ("Durations", response.durations, "min", 60.0),
        ("Distances", response.distances, "km", 1000.0),
    ):
        if matrix is None:
            continue
        click.echo(f"{label} ({unit}):")
        for row in matrix:
            click.echo(
                " ".join(
                    f"{'-':>10}" if cell is None else f"{cell / scale:>10.3f}" for cell in row
                )
            )


@cli.command()
@click.argument("coordinate", callback=parse_coordinate_arg)
@click.option("--profile", "-p", default=None, help="Routing profile (e.g. 'driving')")
@click.option("--number", "-n", default=1, help="Number of nearest segments (default: 1)")
@click.pass_obj
def nearest(config: ClientConfig, coordinate: Coordinate, profile: Optional[str], number: int):
    """Snap COORDINATE ('lon,lat') to the street network."""
    try:
        request = NearestRequestBuilder([coordinate], profile).number(number).build()
        response = send(config, request)
    except OSRMClientError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for waypoint in response.waypoints or []:
        distance = f"{waypoint.distance:.1f} m" if waypoint.distance is not None else "?"
        click.echo(f"  - {waypoint.name or '(unnamed)'} at {waypoint.coordinate} ({distance})")


@cli.command()
@click.argument("x", type=int)
@click.argument("y", type=int)
@click.argument("zoom", type=int)
@click.option("--profile", "-p", default=None, help="Routing profile (e.g. 'driving')")
@click.option(
    "--output", "-o", type=click.Path(dir_okay=False), default="tile.mvt", help="Output file"
)
@click.pass_obj
def tile(config: ClientConfig, x: int, y: int, zoom: int, profile: Optional[str], output: str):
    """Download the vector tile X Y ZOOM of the routing graph."""
    try:
        builder = TileRequestBuilder(x, y, zoom)
        if profile:
            builder = builder.profile(profile)
        request = builder.build()
        response = send(config, request)
    except OSRMClientError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    with open(output, "wb") as f:
        f.write(response.data)
    click.echo(f"Wrote {len(response)} bytes to {output}")
    click.echo(f"Debug map: {request.debug_map_url()}")


if __name__ == "__main__":
    cli()
