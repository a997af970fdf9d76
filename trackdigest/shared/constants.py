"""
Shared constants for the track pipeline.

WGS84 ellipsoid parameters, solver limits and profile defaults live here
so every module uses the same values.
"""

from enum import Enum


# === WGS84 reference ellipsoid ===
WGS84_SEMI_MAJOR_AXIS_M = 6_378_137.0
WGS84_SEMI_MINOR_AXIS_M = 6_356_752.314245
WGS84_FLATTENING = 1 / 298.257223563

# === Vincenty inverse solver ===
VINCENTY_MAX_ITERATIONS = 100
VINCENTY_TOLERANCE = 1e-12  # radians, change of lambda between iterations

# === Elevation / profile ===
DEFAULT_SMOOTHING_WINDOW = 5
DEFAULT_CANVAS_SIZE = 2000


class BoundaryMode(str, Enum):
    """
    How the trailing point of a track is treated.

    FULL: every point contributes to smoothing, extremes, ascent/descent,
    distance and the profile.
    LEGACY: the last point is dropped from those scans, like the historical
    scans of the summary service. Distances still use the corrected Vincenty
    series and short tracks still take their extremes from the first point.
    """
    FULL = "full"
    LEGACY = "legacy"
