"""
Elevation processing utilities.

This is the SINGLE SOURCE OF TRUTH for elevation calculations.
"""

import logging
from typing import List, Sequence, Tuple

from trackdigest.errors import EmptyTrackError
from trackdigest.shared.constants import BoundaryMode, DEFAULT_SMOOTHING_WINDOW
from trackdigest.shared.track_types import SmoothingResult, TrackPoint

logger = logging.getLogger(__name__)


def smooth_elevations(
    elevations: Sequence[float],
    window_size: int = DEFAULT_SMOOTHING_WINDOW,
    boundary_mode: BoundaryMode = BoundaryMode.FULL
) -> List[float]:
    """
    Smooth elevation data using a centered moving average.

    The first and last window_size // 2 values are kept raw, every interior
    value is replaced by the unweighted mean of the window centered on it.
    Series no longer than the window are returned unsmoothed.

    Args:
        elevations: Raw elevation values in meters
        window_size: Size of smoothing window (odd)
        boundary_mode: LEGACY skips the last interior value and drops the
            final value of short series, so the result has one value less

    Returns:
        Smoothed elevation values

    Example:
        >>> smooth_elevations([10, 12, 9, 14, 8, 13, 11])
        [10, 12, 10.6, 11.2, 11.0, 13, 11]
    """
    count = len(elevations)
    legacy = boundary_mode == BoundaryMode.LEGACY

    if count <= window_size:
        return list(elevations[:-1]) if legacy else list(elevations)

    half_window = window_size // 2
    interior_end = count - half_window - 1 if legacy else count - half_window

    smoothed = list(elevations[:half_window])
    for i in range(half_window, interior_end):
        window = elevations[i - half_window:i + half_window + 1]
        smoothed.append(sum(window) / window_size)
    smoothed.extend(elevations[count - half_window:])

    return smoothed


def calculate_elevation_changes(
    elevations: Sequence[float]
) -> Tuple[float, float]:
    """
    Calculate total elevation gain and loss.

    Args:
        elevations: List of elevation values

    Returns:
        Tuple of (gain_m, loss_m)
    """
    gain = 0.0
    loss = 0.0

    for i in range(1, len(elevations)):
        diff = elevations[i] - elevations[i - 1]
        if diff > 0:
            gain += diff
        else:
            loss += abs(diff)

    return gain, loss


def summarize_elevations(
    points: Sequence[TrackPoint],
    window_size: int = DEFAULT_SMOOTHING_WINDOW,
    boundary_mode: BoundaryMode = BoundaryMode.FULL
) -> SmoothingResult:
    """
    Smooth the track elevations and compute extremes and ascent/descent.

    Args:
        points: Track points in file order
        window_size: Smoothing window
        boundary_mode: LEGACY ignores the final smoothed value when
            scanning for extremes and elevation changes

    Returns:
        SmoothingResult

    Raises:
        EmptyTrackError: If there are no points
    """
    if not points:
        raise EmptyTrackError()

    smoothed = smooth_elevations(
        [p.elevation for p in points], window_size, boundary_mode
    )
    scanned = smoothed[:-1] if boundary_mode == BoundaryMode.LEGACY else smoothed

    if scanned:
        elevation_min = min(scanned)
        elevation_max = max(scanned)
    else:
        # Legacy scan of a one or two point track covers nothing
        elevation_min = elevation_max = points[0].elevation

    ascent, descent = calculate_elevation_changes(scanned)

    logger.debug(
        f"Elevations: {len(points)} points, min={elevation_min:.1f} m, "
        f"max={elevation_max:.1f} m, +{ascent:.1f} m, -{descent:.1f} m"
    )

    return SmoothingResult(
        elevation_min=elevation_min,
        elevation_max=elevation_max,
        ascent_total=ascent,
        descent_total=descent,
        smoothed_elevations=smoothed
    )
