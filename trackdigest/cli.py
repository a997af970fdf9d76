"""
CLI interface for trackdigest.

Usage:
    trackdigest summarize ride.gpx
    trackdigest summarize ride.gpx --legacy-boundaries --indent 2
    trackdigest distance -- -37.951033 144.424868 -37.652821 143.926496
    python -m trackdigest summarize ride.gpx
"""

import logging
import sys

import click

from trackdigest.config import get_settings
from trackdigest.errors import TrackDigestError
from trackdigest.features.track import TrackSummaryService
from trackdigest.shared.constants import BoundaryMode
from trackdigest.shared.geo import vincenty_distance


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr),
        ]
    )


@click.group()
def cli():
    """Statistical summary of GPX tracks."""
    pass


@cli.command()
@click.argument("path", type=click.Path(dir_okay=False))
@click.option(
    "--legacy-boundaries",
    is_flag=True,
    help="Drop the trailing point from the scans, like the historical output"
)
@click.option(
    "--strict-geodesy",
    is_flag=True,
    help="Fail when the Vincenty formula does not converge instead of using 0 m"
)
@click.option("--canvas-size", default=None, type=click.IntRange(min=1), help="Profile canvas side")
@click.option("--indent", default=None, type=click.IntRange(min=0), help="Pretty-print the JSON")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def summarize(path, legacy_boundaries, strict_geodesy, canvas_size, indent, verbose):
    """
    Summarize the GPX track in PATH and print it as JSON.
    """
    base = get_settings()
    _setup_logging("DEBUG" if verbose else base.log_level)

    overrides = {}
    if legacy_boundaries:
        overrides["boundary_mode"] = BoundaryMode.LEGACY
    if strict_geodesy:
        overrides["strict_geodesy"] = True
    if canvas_size is not None:
        overrides["canvas_size"] = canvas_size
    settings = base.model_copy(update=overrides)

    try:
        summary = TrackSummaryService(settings).process_file(path)
    except TrackDigestError as e:
        raise click.ClickException(str(e))

    click.echo(summary.to_json(indent=indent))


@cli.command(context_settings={"ignore_unknown_options": True})
@click.argument("lat1", type=float)
@click.argument("lon1", type=float)
@click.argument("lat2", type=float)
@click.argument("lon2", type=float)
def distance(lat1, lon1, lat2, lon2):
    """Print the WGS84 distance in meters between two points."""
    settings = get_settings()
    try:
        meters = vincenty_distance(
            lat1, lon1, lat2, lon2,
            max_iterations=settings.geodesic_max_iterations,
            tolerance=settings.geodesic_tolerance,
            strict=settings.strict_geodesy
        )
    except TrackDigestError as e:
        raise click.ClickException(str(e))

    click.echo(f"{meters:.3f}")


def main():
    cli()
