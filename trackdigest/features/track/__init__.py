"""
GPX track summary module.

Usage:
    from trackdigest.features.track import TrackSummaryService
    summary = TrackSummaryService().process("ride.gpx")

Components:
- TrackParser: Streaming GPX parser, yields RawTrack
- build_profile: Quantized elevation profile
- TrackSummaryService: Full pipeline, yields TrackSummary
- TrackSummary: Pydantic schema for the output
"""

from .parser import TrackParser, ParserState
from .profile import build_profile, collapse_duplicates
from .schemas import TrackSummary, Profile, ProfilePoint
from .service import TrackSummaryService, process, summarize_file

__all__ = [
    # Parser
    "TrackParser",
    "ParserState",
    # Profile
    "build_profile",
    "collapse_duplicates",
    # Service
    "TrackSummaryService",
    "process",
    "summarize_file",
    # Schemas
    "TrackSummary",
    "Profile",
    "ProfilePoint",
]
