"""
Exceptions raised by the track pipeline.

Every failure reaching the caller is a TrackDigestError subclass, so
callers can catch the base class and report a single classification.
"""

from typing import Optional


class TrackDigestError(Exception):
    """Base track pipeline error."""
    pass


class SourceUnavailableError(TrackDigestError):
    """Input file cannot be opened or the stream cannot be read."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot read track source {source}: {reason}")


class MalformedMarkupError(TrackDigestError):
    """Syntax error or invalid element nesting in the GPX document."""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None
    ):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class MissingRequiredFieldError(TrackDigestError):
    """A track point lacks lat/lon/ele/time, or no timestamp was found."""

    def __init__(self, field: str, point_index: Optional[int] = None):
        self.field = field
        self.point_index = point_index
        if point_index is None:
            message = f"Track has no '{field}' value"
        else:
            message = f"Track point #{point_index} has no '{field}' value"
        super().__init__(message)


class EmptyTrackError(TrackDigestError):
    """No track points in the document."""

    def __init__(self):
        super().__init__("GPX document contains no track points")


class InvalidNumericLiteralError(TrackDigestError):
    """Attribute or element text is not a finite number."""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid numeric value for '{field}': {value!r}")


class DegenerateProfileScaleError(TrackDigestError):
    """Total distance or elevation range is zero, profile cannot be scaled."""

    def __init__(self, distance_total: float, elevation_range: float):
        self.distance_total = distance_total
        self.elevation_range = elevation_range
        super().__init__(
            f"Cannot scale profile: distance={distance_total} m, "
            f"elevation range={elevation_range} m"
        )


class GeodesicNonConvergenceError(TrackDigestError):
    """Vincenty inverse formula did not converge within the iteration cap."""

    def __init__(
        self,
        lat1: float, lon1: float,
        lat2: float, lon2: float,
        iterations: int
    ):
        self.coordinates = (lat1, lon1, lat2, lon2)
        self.iterations = iterations
        super().__init__(
            f"Vincenty formula failed to converge after {iterations} iterations "
            f"between ({lat1}, {lon1}) and ({lat2}, {lon2})"
        )
