"""
Geographic utility functions.

Ellipsoidal (WGS84) distances via Vincenty's inverse formula, and the
cumulative distance series used by the elevation profile.

This is the SINGLE SOURCE OF TRUTH for distance calculations.
DO NOT duplicate these functions elsewhere.
"""

import logging
import math
from typing import List, Sequence

from trackdigest.errors import GeodesicNonConvergenceError
from trackdigest.shared.constants import (
    BoundaryMode,
    VINCENTY_MAX_ITERATIONS,
    VINCENTY_TOLERANCE,
    WGS84_FLATTENING,
    WGS84_SEMI_MAJOR_AXIS_M,
    WGS84_SEMI_MINOR_AXIS_M,
)
from trackdigest.shared.track_types import TrackPoint

logger = logging.getLogger(__name__)


def vincenty_distance(
    lat1: float, lon1: float,
    lat2: float, lon2: float,
    max_iterations: int = VINCENTY_MAX_ITERATIONS,
    tolerance: float = VINCENTY_TOLERANCE,
    strict: bool = False
) -> float:
    """
    Calculate the ellipsoidal distance between two points on WGS84.

    Solves the inverse geodesic problem with Vincenty's iterative formula.

    Args:
        lat1, lon1: First point coordinates (degrees)
        lat2, lon2: Second point coordinates (degrees)
        max_iterations: Iteration cap for the lambda refinement
        tolerance: Convergence threshold on lambda (radians)
        strict: Raise instead of returning 0 when the formula does not converge

    Returns:
        Distance in meters. 0.0 for coincident points, and for
        non-converging (nearly antipodal) pairs unless strict is set.

    Raises:
        GeodesicNonConvergenceError: If strict and the iteration cap is hit

    Example:
        >>> vincenty_distance(0.0, 0.0, 0.0, 1.0)  # one degree along the equator
        111319.49...
    """
    a = WGS84_SEMI_MAJOR_AXIS_M
    b = WGS84_SEMI_MINOR_AXIS_M
    f = WGS84_FLATTENING

    big_l = math.radians(lon2 - lon1)
    # Reduced latitudes
    u1 = math.atan((1 - f) * math.tan(math.radians(lat1)))
    u2 = math.atan((1 - f) * math.tan(math.radians(lat2)))
    sin_u1, cos_u1 = math.sin(u1), math.cos(u1)
    sin_u2, cos_u2 = math.sin(u2), math.cos(u2)

    lam = big_l
    for _ in range(max_iterations):
        sin_lam = math.sin(lam)
        cos_lam = math.cos(lam)
        sin_sigma = math.sqrt(
            (cos_u2 * sin_lam) ** 2 +
            (cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam) ** 2
        )
        if sin_sigma == 0:
            # Coincident points
            return 0.0
        cos_sigma = sin_u1 * sin_u2 + cos_u1 * cos_u2 * cos_lam
        sigma = math.atan2(sin_sigma, cos_sigma)
        sin_alpha = cos_u1 * cos_u2 * sin_lam / sin_sigma
        cos_sq_alpha = 1 - sin_alpha ** 2
        if cos_sq_alpha != 0:
            cos_2sigma_m = cos_sigma - 2 * sin_u1 * sin_u2 / cos_sq_alpha
        else:
            # Both points on the equator
            cos_2sigma_m = 0.0
        c = f / 16 * cos_sq_alpha * (4 + f * (4 - 3 * cos_sq_alpha))
        lam_prev = lam
        lam = big_l + (1 - c) * f * sin_alpha * (
            sigma + c * sin_sigma * (
                cos_2sigma_m + c * cos_sigma * (-1 + 2 * cos_2sigma_m ** 2)
            )
        )
        if abs(lam - lam_prev) < tolerance:
            break
    else:
        if strict:
            raise GeodesicNonConvergenceError(lat1, lon1, lat2, lon2, max_iterations)
        logger.warning(
            f"Vincenty did not converge after {max_iterations} iterations "
            f"for ({lat1}, {lon1}) -> ({lat2}, {lon2}), using 0 m"
        )
        return 0.0

    u_sq = cos_sq_alpha * (a ** 2 - b ** 2) / b ** 2
    big_a = 1 + u_sq / 16384 * (4096 + u_sq * (-768 + u_sq * (320 - 175 * u_sq)))
    big_b = u_sq / 1024 * (256 + u_sq * (-128 + u_sq * (74 - 47 * u_sq)))
    delta_sigma = big_b * sin_sigma * (
        cos_2sigma_m + big_b / 4 * (
            cos_sigma * (-1 + 2 * cos_2sigma_m ** 2) -
            big_b / 6 * cos_2sigma_m * (-3 + 4 * sin_sigma ** 2) *
            (-3 + 4 * cos_2sigma_m ** 2)
        )
    )

    return b * big_a * (sigma - delta_sigma)


def cumulative_distances(
    points: Sequence[TrackPoint],
    boundary_mode: BoundaryMode = BoundaryMode.FULL,
    max_iterations: int = VINCENTY_MAX_ITERATIONS,
    tolerance: float = VINCENTY_TOLERANCE,
    strict: bool = False
) -> List[float]:
    """
    Calculate the running distance along a track.

    Args:
        points: Raw (unsmoothed) track points
        boundary_mode: FULL gives one entry per point; LEGACY stops one
            point short of the end
        max_iterations, tolerance, strict: Passed to vincenty_distance

    Returns:
        Cumulative distances in meters, starting at 0.0, non-decreasing
    """
    if not points:
        return []

    end = len(points) if boundary_mode == BoundaryMode.FULL else len(points) - 1

    total = 0.0
    distances = [total]

    for i in range(1, end):
        prev, cur = points[i - 1], points[i]
        total += vincenty_distance(
            prev.latitude, prev.longitude,
            cur.latitude, cur.longitude,
            max_iterations=max_iterations,
            tolerance=tolerance,
            strict=strict
        )
        distances.append(total)

    return distances
