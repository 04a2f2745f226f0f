from gpxsplit.errors import (
    GpxError,
    InvalidDatetimeError,
    InvalidTrkptError,
    NoTimeError,
    NoTrkptError,
    SecondTimeBeforeFirstError,
)
from gpxsplit.geo import GeoPoint, TrackPoint, next_trackpoint
from gpxsplit.split import DistanceUnit, Split, split_from_gpx, total_split
from gpxsplit.timestamp import Timestamp, elapsed_seconds, parse_timestamp
from gpxsplit.tokens import TokenStream, read_gpx, tokenize

__version__ = "0.1.0"

__all__ = [
    "DistanceUnit",
    "GeoPoint",
    "GpxError",
    "InvalidDatetimeError",
    "InvalidTrkptError",
    "NoTimeError",
    "NoTrkptError",
    "SecondTimeBeforeFirstError",
    "Split",
    "Timestamp",
    "TokenStream",
    "TrackPoint",
    "elapsed_seconds",
    "next_trackpoint",
    "parse_timestamp",
    "read_gpx",
    "split_from_gpx",
    "tokenize",
    "total_split",
]
