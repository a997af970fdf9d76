"""
Shared track types.

These types live here (not in features/track) to avoid circular imports:
shared.geo and shared.elevation consume them, features.track produces them.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class TrackPoint:
    """One recorded sample along the track."""
    latitude: float  # degrees
    longitude: float  # degrees
    elevation: float  # meters


@dataclass
class RawTrack:
    """Parser output: time bounds plus points in file order."""
    start_timestamp: str
    end_timestamp: str
    points: List[TrackPoint] = field(default_factory=list)

    @property
    def first_point(self) -> TrackPoint:
        return self.points[0]

    @property
    def last_point(self) -> TrackPoint:
        return self.points[-1]


@dataclass
class SmoothingResult:
    """Elevation statistics computed on the smoothed series."""
    elevation_min: float
    elevation_max: float
    ascent_total: float
    descent_total: float
    smoothed_elevations: List[float] = field(default_factory=list)
