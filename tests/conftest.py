"""
Shared fixtures.

GPX documents are built with gpxpy so fixtures look like what real
devices and apps export.
"""

from datetime import datetime, timedelta, timezone

import gpxpy
import gpxpy.gpx
import pytest

from trackdigest.config import Settings
from trackdigest.shared.track_types import TrackPoint


START_TIME = datetime(2024, 5, 1, 8, 0, 0, tzinfo=timezone.utc)

# 7 points going east along 45N, sawtooth elevation
SAWTOOTH_ELEVATIONS = [10.0, 12.0, 9.0, 14.0, 8.0, 13.0, 11.0]


def make_gpx(coords, step_seconds: int = 10) -> bytes:
    """Build a one-segment GPX document from (lat, lon, ele) tuples."""
    gpx = gpxpy.gpx.GPX()
    gpx_track = gpxpy.gpx.GPXTrack()
    gpx.tracks.append(gpx_track)
    gpx_segment = gpxpy.gpx.GPXTrackSegment()
    gpx_track.segments.append(gpx_segment)

    for i, (lat, lon, ele) in enumerate(coords):
        gpx_segment.points.append(gpxpy.gpx.GPXTrackPoint(
            latitude=lat,
            longitude=lon,
            elevation=ele,
            time=START_TIME + timedelta(seconds=i * step_seconds),
        ))

    return gpx.to_xml().encode("utf-8")


def eastward_coords(elevations, lat: float = 45.0, lon: float = 6.0, step: float = 0.001):
    return [(lat, lon + i * step, ele) for i, ele in enumerate(elevations)]


@pytest.fixture
def sawtooth_coords():
    return eastward_coords(SAWTOOTH_ELEVATIONS)


@pytest.fixture
def sawtooth_points(sawtooth_coords):
    return [TrackPoint(lat, lon, ele) for lat, lon, ele in sawtooth_coords]


@pytest.fixture
def sawtooth_gpx(sawtooth_coords):
    return make_gpx(sawtooth_coords)


@pytest.fixture
def settings():
    """Default settings, independent of the environment."""
    return Settings(_env_file=None)


@pytest.fixture
def legacy_settings():
    return Settings(_env_file=None, boundary_mode="legacy")


@pytest.fixture
def gpx_factory():
    """make_gpx(coords, step_seconds=10) -> GPX bytes."""
    return make_gpx


@pytest.fixture
def coords_factory():
    """eastward_coords(elevations, lat=45.0, lon=6.0, step=0.001) -> coords."""
    return eastward_coords
