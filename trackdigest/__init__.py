"""
trackdigest - statistical summary of a single GPX track.

Usage:
    from trackdigest import process
    summary = process("ride.gpx")
    print(summary.to_json())
"""

from trackdigest.features.track import TrackSummary, TrackSummaryService, process, summarize_file

__version__ = "0.1.0"

__all__ = [
    "TrackSummary",
    "TrackSummaryService",
    "process",
    "summarize_file",
]
