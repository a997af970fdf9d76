"""
Tests for TrackSummaryService.

End-to-end: GPX bytes/file/stream in, TrackSummary out.
"""

import io
import json

import pytest

from trackdigest.config import Settings
from trackdigest.errors import (
    DegenerateProfileScaleError,
    EmptyTrackError,
    GeodesicNonConvergenceError,
    MalformedMarkupError,
    SourceUnavailableError,
    TrackDigestError,
)
from trackdigest.features.track import TrackSummaryService, process, summarize_file
from trackdigest.shared.geo import cumulative_distances


SUMMARY_FIELDS = {
    "start_timestamp",
    "end_timestamp",
    "start_longitude",
    "start_latitude",
    "end_longitude",
    "end_latitude",
    "elevation_min",
    "elevation_max",
    "ascent_total",
    "descent_total",
    "distance_total",
    "profile",
}


# =============================================================================
# Sawtooth scenario
# =============================================================================

class TestSawtoothTrack:
    """7 points eastward along 45N, elevations [10, 12, 9, 14, 8, 13, 11]."""

    def test_summary(self, sawtooth_gpx, sawtooth_points, settings):
        summary = TrackSummaryService(settings).process(sawtooth_gpx)

        assert summary.start_timestamp.startswith("2024-05-01T08:00:00")
        assert summary.end_timestamp.startswith("2024-05-01T08:01:00")
        assert summary.start_latitude == pytest.approx(45.0)
        assert summary.start_longitude == pytest.approx(6.0)
        assert summary.end_latitude == pytest.approx(45.0)
        assert summary.end_longitude == pytest.approx(6.006)

        assert summary.elevation_min == pytest.approx(10.0)
        assert summary.elevation_max == pytest.approx(13.0)
        assert summary.ascent_total == pytest.approx(4.6)
        assert summary.descent_total == pytest.approx(3.6)

        expected_distance = cumulative_distances(sawtooth_points)[-1]
        assert summary.distance_total == pytest.approx(expected_distance)
        assert 450 < summary.distance_total < 500

    def test_profile(self, sawtooth_gpx, settings):
        summary = TrackSummaryService(settings).process(sawtooth_gpx)
        assert summary.profile == [[
            (0, 0),
            (333, 1333),
            (667, 400),
            (1000, 800),
            (1333, 667),
            (1667, 2000),
            (2000, 667),
        ]]

    def test_invariants(self, sawtooth_gpx, settings):
        summary = TrackSummaryService(settings).process(sawtooth_gpx)
        segment = summary.profile[0]
        assert summary.elevation_min <= summary.elevation_max
        assert summary.ascent_total > 0
        assert summary.descent_total > 0
        assert summary.distance_total > 0
        assert len(set(segment)) >= 2
        assert all(a != b for a, b in zip(segment, segment[1:]))

    def test_legacy_boundaries(self, sawtooth_gpx, sawtooth_points, legacy_settings):
        """Legacy mode drops the final point from distance and elevation scans."""
        summary = TrackSummaryService(legacy_settings).process(sawtooth_gpx)

        assert summary.ascent_total == pytest.approx(4.4)
        assert summary.descent_total == pytest.approx(1.4)
        assert summary.distance_total == pytest.approx(cumulative_distances(sawtooth_points)[-2])
        # Endpoints still come from the real last point
        assert summary.end_longitude == pytest.approx(6.006)
        assert summary.profile == [[
            (0, 0),
            (400, 1333),
            (800, 400),
            (1200, 800),
            (1600, 2000),
        ]]

    def test_legacy_keeps_corrected_geodesy(self, legacy_settings):
        """Legacy mode only truncates; its distance is the full ellipsoidal one."""
        gpx = (
            b"<gpx><trk><trkseg>"
            b'<trkpt lat="-37.95103341666667" lon="144.42486788888888"><ele>100</ele><time>T0</time></trkpt>'
            b'<trkpt lat="-37.65282113888889" lon="143.92649552777777"><ele>300</ele><time>T1</time></trkpt>'
            b'<trkpt lat="-37.65282113888889" lon="143.93649552777777"><ele>200</ele><time>T2</time></trkpt>'
            b"</trkseg></trk></gpx>"
        )
        summary = TrackSummaryService(legacy_settings).process(gpx)
        assert summary.distance_total == pytest.approx(54972.271, abs=2e-3)


# =============================================================================
# Sources
# =============================================================================

class TestSources:
    """process() accepts paths, bytes and streams."""

    def test_path(self, tmp_path, sawtooth_gpx, settings):
        path = tmp_path / "ride.gpx"
        path.write_bytes(sawtooth_gpx)

        from_path = TrackSummaryService(settings).process(path)
        from_str = TrackSummaryService(settings).process(str(path))
        from_bytes = TrackSummaryService(settings).process(sawtooth_gpx)
        assert from_path == from_str == from_bytes

    def test_binary_stream(self, sawtooth_gpx, settings):
        summary = TrackSummaryService(settings).process(io.BytesIO(sawtooth_gpx))
        assert summary.distance_total > 0

    def test_missing_file(self, tmp_path, settings):
        with pytest.raises(SourceUnavailableError) as exc_info:
            TrackSummaryService(settings).process(tmp_path / "nope.gpx")
        assert "nope.gpx" in exc_info.value.source

    def test_module_level_process(self, sawtooth_gpx, settings):
        assert process(sawtooth_gpx, settings) == TrackSummaryService(settings).process(sawtooth_gpx)


# =============================================================================
# Errors
# =============================================================================

class TestErrors:
    """Failures surface as typed errors, never partial summaries."""

    def test_empty_track(self, gpx_factory, settings):
        with pytest.raises(EmptyTrackError):
            TrackSummaryService(settings).process(gpx_factory([]))

    def test_constant_elevation(self, gpx_factory, coords_factory, settings):
        gpx = gpx_factory(coords_factory([250.0] * 8))
        with pytest.raises(DegenerateProfileScaleError):
            TrackSummaryService(settings).process(gpx)

    def test_single_point(self, gpx_factory, settings):
        """One point has no distance, so the profile cannot be scaled."""
        gpx = gpx_factory([(45.0, 6.0, 100.0)])
        with pytest.raises(DegenerateProfileScaleError):
            TrackSummaryService(settings).process(gpx)

    def test_malformed(self, settings):
        with pytest.raises(MalformedMarkupError):
            TrackSummaryService(settings).process(b"<gpx><trk>")

    def test_strict_geodesy(self, sawtooth_gpx):
        settings = Settings(_env_file=None, strict_geodesy=True, geodesic_max_iterations=1)
        with pytest.raises(GeodesicNonConvergenceError):
            TrackSummaryService(settings).process(sawtooth_gpx)

    def test_lenient_geodesy_zero_distance(self, sawtooth_gpx):
        """Every pair falls back to 0 m, leaving nothing to scale."""
        settings = Settings(_env_file=None, geodesic_max_iterations=1)
        with pytest.raises(DegenerateProfileScaleError) as exc_info:
            TrackSummaryService(settings).process(sawtooth_gpx)
        assert exc_info.value.distance_total == 0.0

    def test_all_errors_share_base(self, settings):
        with pytest.raises(TrackDigestError):
            TrackSummaryService(settings).process(b"")


# =============================================================================
# Serialization
# =============================================================================

class TestSerialization:
    """JSON output keeps the summary field names."""

    def test_json_fields(self, sawtooth_gpx, settings):
        data = json.loads(TrackSummaryService(settings).process(sawtooth_gpx).to_json())
        assert set(data) == SUMMARY_FIELDS
        assert data["profile"][0][0] == [0, 0]
        assert all(isinstance(v, int) for point in data["profile"][0] for v in point)

    def test_summarize_file(self, tmp_path, sawtooth_gpx, settings):
        path = tmp_path / "ride.gpx"
        path.write_bytes(sawtooth_gpx)
        data = json.loads(summarize_file(path, settings))
        assert data["elevation_max"] == pytest.approx(13.0)
