import datetime
import math
from pathlib import Path

import gpxpy
import gpxpy.gpx
import pytest

from gpxsplit.tokens import Token, TokenKind, TokenStream

SAMPLES_DIR = Path(__file__).parent / "samples"
START_TIME = datetime.datetime(2023, 3, 18, 9, 0, 0, tzinfo=datetime.timezone.utc)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep GPXSPLIT_* variables from the developer's shell out of the tests."""
    for name in (
        "GPXSPLIT_CONFIG_PATH",
        "GPXSPLIT_DISTANCE_UNIT",
        "GPXSPLIT_PACE_DISTANCE",
        "GPXSPLIT_CHUNK_SIZE",
        "GPXSPLIT_LOG_LEVEL",
        "GPXSPLIT_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_gpx_path():
    return SAMPLES_DIR / "sample.gpx"


METERS_PER_MILE = 1609.344
# One degree of latitude on a 6371 km sphere.
METERS_PER_DEGREE = 111_195.0


def build_track_gpx(total_miles, pace_s_per_mile, step_s, name="Track"):
    """Build a winding track at a steady pace, one point every ``step_s``.

    The heading swings between north-north-east and east-south-east so both
    latitude and longitude change from point to point.
    """
    step_m = step_s / pace_s_per_mile * METERS_PER_MILE
    steps = round(total_miles * METERS_PER_MILE / step_m)

    gpx = gpxpy.gpx.GPX()
    track = gpxpy.gpx.GPXTrack(name=name)
    gpx.tracks.append(track)
    segment = gpxpy.gpx.GPXTrackSegment()
    track.segments.append(segment)

    lat, lon = 33.749, -84.388
    for idx in range(steps + 1):
        segment.points.append(
            gpxpy.gpx.GPXTrackPoint(
                latitude=lat,
                longitude=lon,
                elevation=300.0,
                time=START_TIME + datetime.timedelta(seconds=idx * step_s),
            )
        )
        bearing = math.radians(60.0 + 45.0 * math.sin(idx / 25.0))
        lat += step_m * math.cos(bearing) / METERS_PER_DEGREE
        lon += (
            step_m
            * math.sin(bearing)
            / (METERS_PER_DEGREE * math.cos(math.radians(lat)))
        )
    return gpx.to_xml().encode("utf-8")


@pytest.fixture
def five_k_gpx(tmp_path):
    path = tmp_path / "Running_of_the_leprechauns_5k.gpx"
    path.write_bytes(build_track_gpx(3.1, 396, 6, name="Running of the leprechauns 5k"))
    return path


@pytest.fixture
def marathon_gpx(tmp_path):
    path = tmp_path / "Atlanta_marathon.gpx"
    path.write_bytes(build_track_gpx(26.2, 528, 8, name="Atlanta marathon"))
    return path


def _trkpt_tokens(lat, lon, time):
    return [
        Token(TokenKind.TAG_OPEN, "trkpt"),
        Token(TokenKind.ATTR_KEY, "lat"),
        Token(TokenKind.ATTR_VALUE, f'"{lat}"'),
        Token(TokenKind.ATTR_KEY, "lon"),
        Token(TokenKind.ATTR_VALUE, f'"{lon}"'),
        Token(TokenKind.TAG_OPEN, "ele"),
        Token(TokenKind.CONTENT, "291.4"),
        Token(TokenKind.TAG_OPEN, "time"),
        Token(TokenKind.CONTENT, time),
    ]


@pytest.fixture
def trkpt_tokens():
    return _trkpt_tokens


@pytest.fixture
def make_stream():
    def make(*tokens):
        return TokenStream(list(tokens) + [Token(TokenKind.EOF)])

    return make
