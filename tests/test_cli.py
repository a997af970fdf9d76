"""
Tests for the trackdigest CLI.
"""

import json

import pytest
from click.testing import CliRunner

from trackdigest.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def gpx_path(tmp_path, sawtooth_gpx):
    path = tmp_path / "ride.gpx"
    path.write_bytes(sawtooth_gpx)
    return path


class TestSummarizeCommand:
    """Tests for `trackdigest summarize`."""

    def test_prints_json(self, runner, gpx_path):
        result = runner.invoke(cli, ["summarize", str(gpx_path)])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output.strip().splitlines()[-1])
        assert data["elevation_min"] == pytest.approx(10.0)
        assert data["profile"][0][-1] == [2000, 667]

    def test_legacy_boundaries(self, runner, gpx_path):
        result = runner.invoke(cli, ["summarize", str(gpx_path), "--legacy-boundaries"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output.strip().splitlines()[-1])
        assert data["descent_total"] == pytest.approx(1.4)

    def test_canvas_size(self, runner, gpx_path):
        result = runner.invoke(cli, ["summarize", str(gpx_path), "--canvas-size", "10"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output.strip().splitlines()[-1])
        assert data["profile"][0][-1][0] == 10

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["summarize", str(tmp_path / "missing.gpx")])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "missing.gpx" in result.output

    def test_flat_track(self, runner, tmp_path, gpx_factory, coords_factory):
        path = tmp_path / "flat.gpx"
        path.write_bytes(gpx_factory(coords_factory([100.0] * 6)))
        result = runner.invoke(cli, ["summarize", str(path)])
        assert result.exit_code == 1
        assert "Cannot scale profile" in result.output


class TestDistanceCommand:
    """Tests for `trackdigest distance`."""

    def test_flinders_peak_buninyong(self, runner):
        result = runner.invoke(cli, [
            "distance", "--",
            "-37.95103341666667", "144.42486788888888",
            "-37.65282113888889", "143.92649552777777",
        ])
        assert result.exit_code == 0, result.output
        assert float(result.output.strip()) == pytest.approx(54972.271, abs=2e-3)

    def test_same_point(self, runner):
        result = runner.invoke(cli, ["distance", "10", "20", "10", "20"])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "0.000"
