"""
Shared utilities (NOT business logic).

Usage:
    from trackdigest.shared import vincenty_distance, smooth_elevations
    from trackdigest.shared.constants import BoundaryMode
"""
from .constants import (
    BoundaryMode,
    WGS84_SEMI_MAJOR_AXIS_M,
    WGS84_SEMI_MINOR_AXIS_M,
    WGS84_FLATTENING,
    DEFAULT_CANVAS_SIZE,
    DEFAULT_SMOOTHING_WINDOW,
)
from .track_types import TrackPoint, RawTrack, SmoothingResult
from .geo import vincenty_distance, cumulative_distances
from .elevation import (
    smooth_elevations,
    calculate_elevation_changes,
    summarize_elevations,
)

__all__ = [
    # constants
    "BoundaryMode",
    "WGS84_SEMI_MAJOR_AXIS_M",
    "WGS84_SEMI_MINOR_AXIS_M",
    "WGS84_FLATTENING",
    "DEFAULT_CANVAS_SIZE",
    "DEFAULT_SMOOTHING_WINDOW",
    # types
    "TrackPoint",
    "RawTrack",
    "SmoothingResult",
    # geo
    "vincenty_distance",
    "cumulative_distances",
    # elevation
    "smooth_elevations",
    "calculate_elevation_changes",
    "summarize_elevations",
]
