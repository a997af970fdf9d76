"""
Elevation Profile Builder

Quantizes the elevation-vs-distance curve of a track onto a square canvas
and collapses consecutive points that land on the same canvas cell.
"""

import logging
import math
from typing import List, Sequence

from trackdigest.errors import DegenerateProfileScaleError
from trackdigest.features.track.schemas import Profile, ProfilePoint
from trackdigest.shared.constants import BoundaryMode, DEFAULT_CANVAS_SIZE

logger = logging.getLogger(__name__)


def round_half_away(value: float) -> int:
    """Round to the nearest int, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    magnitude = abs(value)
    whole = math.floor(magnitude)
    # Compare the fraction, adding 0.5 first can round up just below a half
    if magnitude - whole >= 0.5:
        whole += 1
    return int(math.copysign(whole, value))


def collapse_duplicates(points: Sequence[ProfilePoint]) -> List[ProfilePoint]:
    """Drop points equal to the one right before them."""
    collapsed: List[ProfilePoint] = []
    for point in points:
        if not collapsed or collapsed[-1] != point:
            collapsed.append(point)
    return collapsed


def build_profile(
    smoothed_elevations: Sequence[float],
    elevation_min: float,
    elevation_max: float,
    cumulative_distances: Sequence[float],
    distance_total: float,
    boundary_mode: BoundaryMode = BoundaryMode.FULL,
    canvas_size: int = DEFAULT_CANVAS_SIZE
) -> Profile:
    """
    Build the quantized elevation profile.

    x is the cumulative distance scaled so distance_total maps to
    canvas_size, y is the smoothed elevation above elevation_min scaled so
    the elevation range maps to canvas_size.

    Args:
        smoothed_elevations: Smoothed elevation series
        elevation_min, elevation_max: Extremes of the smoothed series
        cumulative_distances: Running distance, aligned with the elevations
        distance_total: Total track distance in meters
        boundary_mode: LEGACY skips the final smoothed elevation
        canvas_size: Side of the square canvas

    Returns:
        Profile with a single segment

    Raises:
        DegenerateProfileScaleError: If distance_total or the elevation
            range is zero
    """
    elevation_range = elevation_max - elevation_min
    if not (distance_total > 0 and math.isfinite(distance_total)) or \
            not (elevation_range > 0 and math.isfinite(elevation_range)):
        raise DegenerateProfileScaleError(distance_total, elevation_range)

    scale_x = canvas_size / distance_total
    scale_y = canvas_size / elevation_range

    count = min(len(smoothed_elevations), len(cumulative_distances))
    if boundary_mode == BoundaryMode.LEGACY:
        count = min(count, len(smoothed_elevations) - 1)

    points = [
        (
            round_half_away(cumulative_distances[i] * scale_x),
            round_half_away((smoothed_elevations[i] - elevation_min) * scale_y),
        )
        for i in range(count)
    ]
    segment = collapse_duplicates(points)

    logger.debug(f"Profile: {count} points quantized, {len(segment)} kept")

    return [segment]
