"""
GPX Track Parser

Streams a GPX document and extracts track points with their time bounds.

The document is fed in chunks to an incremental XML parser whose target is
a small state machine; no element tree is built, so memory stays flat for
large recordings.
"""

import logging
import math
import xml.etree.ElementTree as ET
from enum import Enum
from typing import IO, AnyStr, Callable, Dict, List, Optional, Tuple

from trackdigest.errors import (
    EmptyTrackError,
    InvalidNumericLiteralError,
    MalformedMarkupError,
    MissingRequiredFieldError,
    SourceUnavailableError,
)
from trackdigest.shared.track_types import RawTrack, TrackPoint

logger = logging.getLogger(__name__)

POINT_TAG = "trkpt"
ELEVATION_TAG = "ele"
TIMESTAMP_TAG = "time"

# Point fields are matched only in these namespaces ("" is no namespace)
GPX_NAMESPACES = frozenset({
    "",
    "http://www.topografix.com/GPX/1/0",
    "http://www.topografix.com/GPX/1/1",
})

DEFAULT_CHUNK_SIZE = 64 * 1024


class ParserState(str, Enum):
    """Where the parser is relative to the current track point."""
    IDLE = "idle"
    IN_POINT = "in_point"
    IN_POINT_ELEVATION = "in_point_elevation"
    IN_POINT_TIMESTAMP = "in_point_timestamp"


def _gpx_name(tag: str) -> Optional[str]:
    """
    Return the local name of a GPX element, or None for a foreign one.

    ElementTree reports namespaced tags as "{namespace}name".
    """
    if not tag.startswith("{"):
        return tag
    namespace, name = tag[1:].split("}", 1)
    if namespace not in GPX_NAMESPACES:
        return None
    return name


def parse_number(field: str, text: str) -> float:
    """Parse a decimal literal, rejecting nan/inf."""
    try:
        value = float(text)
    except ValueError as e:
        raise InvalidNumericLiteralError(field, text) from e
    if not math.isfinite(value):
        raise InvalidNumericLiteralError(field, text)
    return value


class _PointBuilder:
    """Mutable accumulator for the track point being read."""

    def __init__(self, latitude: float, longitude: float):
        self.latitude = latitude
        self.longitude = longitude
        self.elevation: Optional[float] = None
        self.has_timestamp = False

    def build(self, index: int) -> TrackPoint:
        if self.elevation is None:
            raise MissingRequiredFieldError(ELEVATION_TAG, index)
        if not self.has_timestamp:
            raise MissingRequiredFieldError(TIMESTAMP_TAG, index)
        return TrackPoint(
            latitude=self.latitude,
            longitude=self.longitude,
            elevation=self.elevation
        )


class TrackParser:
    """
    Streaming GPX track point parser.

    Acts as the target of an xml.etree.ElementTree.XMLParser: the XML parser
    calls start()/data()/end()/close() and every start or end event is looked
    up in a transition table keyed by (state, element name). Events with no
    transition are ignored; the ones listed in _INVALID_NESTING abort the
    parse as malformed.

    Only GPX elements (no namespace, or a GPX 1.0/1.1 namespace) take part
    in transitions. Inside a point, ele and time count only as direct
    children of trkpt: any other child (extensions, link, ...) opens a
    subtree that is skipped whole.

    Usage:
        with open("ride.gpx", "rb") as f:
            raw = TrackParser().parse(f)
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.chunk_size = chunk_size
        self._reset()

    def _reset(self) -> None:
        self.state = ParserState.IDLE
        self.points: List[TrackPoint] = []
        self.start_timestamp: Optional[str] = None
        self.end_timestamp: Optional[str] = None
        self._current: Optional[_PointBuilder] = None
        self._text: List[str] = []
        # Open elements of a skipped subtree inside the current point
        self._skip_depth = 0

    def parse(self, stream: IO[AnyStr]) -> RawTrack:
        """
        Read the whole stream and return the track.

        Args:
            stream: Readable object (binary or text) holding GPX markup

        Returns:
            RawTrack with the points in file order

        Raises:
            MalformedMarkupError: Invalid XML or invalid point nesting
            MissingRequiredFieldError: A point lacks lat/lon/ele/time
            InvalidNumericLiteralError: A coordinate or elevation is not a number
            EmptyTrackError: The document has no track points
            SourceUnavailableError: Reading the stream failed
        """
        self._reset()
        xml_parser = ET.XMLParser(target=self)

        try:
            while True:
                chunk = stream.read(self.chunk_size)
                if not chunk:
                    break
                xml_parser.feed(chunk)
            raw_track = xml_parser.close()
        except ET.ParseError as e:
            line, column = e.position
            logger.error(f"Failed to parse GPX: {e}")
            raise MalformedMarkupError(f"Invalid GPX markup: {e.msg}", line, column) from e
        except UnicodeDecodeError as e:
            raise MalformedMarkupError(f"Invalid GPX text encoding: {e.reason}") from e
        except OSError as e:
            raise SourceUnavailableError(getattr(stream, "name", repr(stream)), str(e)) from e

        logger.debug(
            f"Parsed {len(raw_track.points)} track points "
            f"({raw_track.start_timestamp} .. {raw_track.end_timestamp})"
        )
        return raw_track

    # -------------------------------------------------------------------------
    # XMLParser target interface
    # -------------------------------------------------------------------------

    def start(self, tag: str, attrib: Dict[str, str]) -> None:
        if self._skip_depth:
            self._skip_depth += 1
            return
        key = (self.state, _gpx_name(tag))
        if key in self._INVALID_NESTING:
            raise MalformedMarkupError(
                f"<{key[1]}> not allowed in state {self.state.value} "
                f"(track point #{len(self.points)})"
            )
        handler = self._START_TRANSITIONS.get(key)
        if handler is not None:
            handler(self, attrib)
        elif self.state == ParserState.IN_POINT:
            self._skip_depth = 1

    def end(self, tag: str) -> None:
        if self._skip_depth:
            self._skip_depth -= 1
            return
        handler = self._END_TRANSITIONS.get((self.state, _gpx_name(tag)))
        if handler is not None:
            handler(self)

    def data(self, text: str) -> None:
        # Text can arrive in several pieces, it is joined when the element ends
        if self.state in (ParserState.IN_POINT_ELEVATION, ParserState.IN_POINT_TIMESTAMP):
            self._text.append(text)

    def close(self) -> RawTrack:
        if not self.points:
            raise EmptyTrackError()
        if self.start_timestamp is None or self.end_timestamp is None:
            raise MissingRequiredFieldError(TIMESTAMP_TAG)
        return RawTrack(
            start_timestamp=self.start_timestamp,
            end_timestamp=self.end_timestamp,
            points=self.points
        )

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def _begin_point(self, attrib: Dict[str, str]) -> None:
        index = len(self.points)
        coordinates = []
        for name in ("lat", "lon"):
            value = attrib.get(name)
            if value is None:
                raise MissingRequiredFieldError(name, index)
            coordinates.append(parse_number(name, value.strip()))
        self._current = _PointBuilder(*coordinates)
        self.state = ParserState.IN_POINT

    def _begin_elevation(self, attrib: Dict[str, str]) -> None:
        self._text = []
        self.state = ParserState.IN_POINT_ELEVATION

    def _begin_timestamp(self, attrib: Dict[str, str]) -> None:
        self._text = []
        self.state = ParserState.IN_POINT_TIMESTAMP

    def _end_elevation(self) -> None:
        text = "".join(self._text).strip()
        if text:
            self._current.elevation = parse_number(ELEVATION_TAG, text)
        self.state = ParserState.IN_POINT

    def _end_timestamp(self) -> None:
        text = "".join(self._text).strip()
        if text:
            if self.start_timestamp is None:
                self.start_timestamp = text
            self.end_timestamp = text
            self._current.has_timestamp = True
        self.state = ParserState.IN_POINT

    def _end_point(self) -> None:
        self.points.append(self._current.build(len(self.points)))
        self._current = None
        self.state = ParserState.IDLE

    _START_TRANSITIONS: Dict[Tuple[ParserState, str], Callable] = {
        (ParserState.IDLE, POINT_TAG): _begin_point,
        (ParserState.IN_POINT, ELEVATION_TAG): _begin_elevation,
        (ParserState.IN_POINT, TIMESTAMP_TAG): _begin_timestamp,
    }

    _END_TRANSITIONS: Dict[Tuple[ParserState, str], Callable] = {
        (ParserState.IN_POINT_ELEVATION, ELEVATION_TAG): _end_elevation,
        (ParserState.IN_POINT_TIMESTAMP, TIMESTAMP_TAG): _end_timestamp,
        (ParserState.IN_POINT, POINT_TAG): _end_point,
    }

    _INVALID_NESTING = frozenset({
        (ParserState.IN_POINT, POINT_TAG),
        (ParserState.IN_POINT_ELEVATION, POINT_TAG),
        (ParserState.IN_POINT_TIMESTAMP, POINT_TAG),
        (ParserState.IN_POINT_ELEVATION, ELEVATION_TAG),
        (ParserState.IN_POINT_ELEVATION, TIMESTAMP_TAG),
        (ParserState.IN_POINT_TIMESTAMP, ELEVATION_TAG),
        (ParserState.IN_POINT_TIMESTAMP, TIMESTAMP_TAG),
    })
