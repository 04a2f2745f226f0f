from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator

from gpxsplit.errors import InvalidTrkptError
from gpxsplit.geo.core import AngleUnit, GeoPoint
from gpxsplit.timestamp import Timestamp, parse_timestamp
from gpxsplit.tokens import Token, TokenKind, TokenStream

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackPoint:
    position: GeoPoint
    timestamp: Timestamp


class _State(Enum):
    SEEKING_TRKPT = auto()
    EXPECT_LAT_KEY = auto()
    EXPECT_LAT_VALUE = auto()
    EXPECT_LON_KEY = auto()
    EXPECT_LON_VALUE = auto()
    SEEKING_TIME = auto()
    EXPECT_TIME_CONTENT = auto()


# state -> (required token kind, next state)
_TRANSITIONS = {
    _State.EXPECT_LAT_KEY: (TokenKind.ATTR_KEY, _State.EXPECT_LAT_VALUE),
    _State.EXPECT_LAT_VALUE: (TokenKind.ATTR_VALUE, _State.EXPECT_LON_KEY),
    _State.EXPECT_LON_KEY: (TokenKind.ATTR_KEY, _State.EXPECT_LON_VALUE),
    _State.EXPECT_LON_VALUE: (TokenKind.ATTR_VALUE, _State.SEEKING_TIME),
}


def _invalid(reason: str) -> InvalidTrkptError:
    logger.debug("Malformed trkpt: %s", reason)
    return InvalidTrkptError(reason)


def _is_tag_open(token: Token, name: str) -> bool:
    return token.kind is TokenKind.TAG_OPEN and token.text == name


def _parse_coordinate(token: Token, label: str) -> float:
    text = token.text
    if len(text) < 2:
        raise _invalid(f"{label} attribute value {text!r} is not quoted")
    try:
        return float(text[1:-1])
    except ValueError:
        raise _invalid(f"Invalid {label}: {text!r}") from None


def next_trackpoint(stream: TokenStream) -> TrackPoint | None:
    """
    Pulls tokens until the next complete trkpt has been read.
    The first two attributes of the trkpt are read as lat then lon, and the
    timestamp comes from the next <time> element's content.
    Args:
        stream: Token stream positioned anywhere in a GPX document.
    Returns:
        The next TrackPoint, or None once the stream has no more trkpt elements.
    Raises:
        InvalidTrkptError: If the tokens after <trkpt> do not have the expected shape.
        InvalidDatetimeError: If the time content is not a valid timestamp.
    """
    state = _State.SEEKING_TRKPT
    lat = lon = 0.0

    while True:
        token = stream.next()

        if state is _State.SEEKING_TRKPT:
            if token.is_end:
                return None
            if _is_tag_open(token, "trkpt"):
                state = _State.EXPECT_LAT_KEY
            continue

        if state is _State.SEEKING_TIME:
            if token.is_end:
                raise _invalid("stream ended before <time>")
            if _is_tag_open(token, "time"):
                state = _State.EXPECT_TIME_CONTENT
            continue

        if state is _State.EXPECT_TIME_CONTENT:
            if token.kind is not TokenKind.CONTENT:
                raise _invalid(f"expected time content, got {token.kind.value}")
            return TrackPoint(
                position=GeoPoint(lat, lon, AngleUnit.DEGREES),
                timestamp=parse_timestamp(token.text),
            )

        expected, next_state = _TRANSITIONS[state]
        if token.kind is not expected:
            raise _invalid(f"expected {expected.value}, got {token.kind.value}")
        if state is _State.EXPECT_LAT_VALUE:
            lat = _parse_coordinate(token, "lat")
        elif state is _State.EXPECT_LON_VALUE:
            lon = _parse_coordinate(token, "lon")
        state = next_state


def iter_trackpoints(stream: TokenStream) -> Iterator[TrackPoint]:
    while True:
        point = next_trackpoint(stream)
        if point is None:
            return
        yield point
