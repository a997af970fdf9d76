"""
Track summary schemas.

Pydantic models for the pipeline output.
"""

from pydantic import BaseModel, Field
from typing import List, Tuple


# Quantized (x, y) position on the profile canvas
ProfilePoint = Tuple[int, int]

# One polyline per track segment
Profile = List[List[ProfilePoint]]


class TrackSummary(BaseModel):
    """Statistical summary of one GPX track."""

    # Time bounds (raw text of the first and last <time>)
    start_timestamp: str
    end_timestamp: str

    # Endpoints (decimal degrees)
    start_longitude: float
    start_latitude: float
    end_longitude: float
    end_latitude: float

    # Elevation (meters, computed on the smoothed series)
    elevation_min: float
    elevation_max: float
    ascent_total: float
    descent_total: float

    # Ground track distance (meters)
    distance_total: float

    profile: Profile = Field(default_factory=list)

    def to_json(self, indent: int | None = None) -> str:
        """Serialize with the field names above."""
        return self.model_dump_json(indent=indent)
