from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from gpxsplit.errors import NoTrkptError
from gpxsplit.geo import R_KM, R_MILES, distance, iter_trackpoints, next_trackpoint
from gpxsplit.timestamp import elapsed_seconds
from gpxsplit.tokens import DEFAULT_CHUNK_SIZE, TokenStream

logger = logging.getLogger(__name__)


class DistanceUnit(Enum):
    MILES = "mi"
    KM = "km"

    @property
    def radius(self) -> float:
        return R_MILES if self is DistanceUnit.MILES else R_KM


@dataclass(frozen=True)
class Split:
    """Distance travelled and the time in seconds taken to travel it."""

    distance: float
    distance_unit: DistanceUnit
    time: int

    def average_pace(self, unit_distance: float) -> int:
        """Average seconds per ``unit_distance`` in ``distance_unit``."""
        return round(self.time / (self.distance / unit_distance))


def total_split(
    stream: TokenStream, unit: DistanceUnit = DistanceUnit.MILES
) -> Split:
    """
    Aggregates every trackpoint in the stream into a single Split.
    Args:
        stream: Token stream over a GPX document.
        unit: Distance unit of the resulting Split.
    Returns:
        Split covering the whole track. A single-point track gives a zero Split.
    Raises:
        NoTrkptError: If the stream contains no trkpt at all.
        InvalidTrkptError: If a trkpt is malformed.
        InvalidDatetimeError: If a trkpt time is malformed.
    """
    previous = next_trackpoint(stream)
    if previous is None:
        raise NoTrkptError("No trkpt found in GPX.")

    radius = unit.radius
    total_distance = 0.0
    total_time = 0
    count = 1

    for point in iter_trackpoints(stream):
        total_distance += distance(point.position, previous.position, radius)
        total_time += elapsed_seconds(point.timestamp, previous.timestamp)
        previous = point
        count += 1

    logger.debug(
        "Aggregated %s trackpoints: %.3f %s in %s s",
        count,
        total_distance,
        unit.value,
        total_time,
    )
    return Split(distance=total_distance, distance_unit=unit, time=total_time)


def split_from_gpx(
    buffer: bytes | bytearray | memoryview,
    unit: DistanceUnit = DistanceUnit.MILES,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Split:
    return total_split(TokenStream.from_buffer(buffer, chunk_size), unit)
