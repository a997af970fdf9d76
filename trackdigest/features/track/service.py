"""
Track Summary Service

Runs the whole pipeline for one GPX source:
parse -> smooth elevations / accumulate distance -> build profile -> assemble.
"""

import io
import logging
import os
from typing import BinaryIO, Optional, TextIO, Union

from trackdigest.config import Settings, get_settings
from trackdigest.errors import SourceUnavailableError
from trackdigest.features.track.parser import TrackParser
from trackdigest.features.track.profile import build_profile
from trackdigest.features.track.schemas import TrackSummary
from trackdigest.shared.elevation import summarize_elevations
from trackdigest.shared.geo import cumulative_distances
from trackdigest.shared.track_types import RawTrack

logger = logging.getLogger(__name__)

TrackSource = Union[str, os.PathLike, bytes, BinaryIO, TextIO]


class TrackSummaryService:
    """Builds a TrackSummary from a GPX source."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def process(self, source: TrackSource) -> TrackSummary:
        """
        Summarize one GPX track.

        Args:
            source: File path, raw GPX bytes, or a readable stream

        Returns:
            TrackSummary

        Raises:
            TrackDigestError: Any failure, see trackdigest.errors
        """
        if isinstance(source, (str, os.PathLike)):
            return self.process_file(source)
        if isinstance(source, bytes):
            source = io.BytesIO(source)
        return self.summarize(self._parse(source))

    def process_file(self, path: Union[str, os.PathLike]) -> TrackSummary:
        """Open a GPX file and summarize it."""
        try:
            stream = open(path, "rb")
        except OSError as e:
            logger.error(f"Cannot open GPX file {path}: {e}")
            raise SourceUnavailableError(os.fspath(path), e.strerror or str(e)) from e

        with stream:
            raw_track = self._parse(stream)
        return self.summarize(raw_track)

    def summarize(self, raw_track: RawTrack) -> TrackSummary:
        """Compute the summary of an already parsed track."""
        s = self.settings
        points = raw_track.points

        elevations = summarize_elevations(points, s.smoothing_window, s.boundary_mode)
        distances = cumulative_distances(
            points,
            s.boundary_mode,
            max_iterations=s.geodesic_max_iterations,
            tolerance=s.geodesic_tolerance,
            strict=s.strict_geodesy
        )
        distance_total = distances[-1]

        profile = build_profile(
            elevations.smoothed_elevations,
            elevations.elevation_min,
            elevations.elevation_max,
            distances,
            distance_total,
            boundary_mode=s.boundary_mode,
            canvas_size=s.canvas_size
        )

        first, last = raw_track.first_point, raw_track.last_point
        summary = TrackSummary(
            start_timestamp=raw_track.start_timestamp,
            end_timestamp=raw_track.end_timestamp,
            start_longitude=first.longitude,
            start_latitude=first.latitude,
            end_longitude=last.longitude,
            end_latitude=last.latitude,
            elevation_min=elevations.elevation_min,
            elevation_max=elevations.elevation_max,
            ascent_total=elevations.ascent_total,
            descent_total=elevations.descent_total,
            distance_total=distance_total,
            profile=profile
        )

        logger.info(
            f"Track summarized: {len(points)} points, {distance_total:.0f} m, "
            f"+{elevations.ascent_total:.0f}/-{elevations.descent_total:.0f} m"
        )
        return summary

    def _parse(self, stream: Union[BinaryIO, TextIO]) -> RawTrack:
        return TrackParser(chunk_size=self.settings.read_chunk_size).parse(stream)


def process(source: TrackSource, settings: Optional[Settings] = None) -> TrackSummary:
    """Summarize one GPX source with the given (or global) settings."""
    return TrackSummaryService(settings).process(source)


def summarize_file(path: Union[str, os.PathLike], settings: Optional[Settings] = None) -> str:
    """Summarize a GPX file and return the summary as JSON text."""
    return TrackSummaryService(settings).process_file(path).to_json()
