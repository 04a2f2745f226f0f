from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


# Mean earth radius
R_MILES = 3959.0
R_KM = 6371.0


class AngleUnit(Enum):
    DEGREES = "degrees"
    RADIANS = "radians"


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lon: float
    unit: AngleUnit = AngleUnit.DEGREES


def to_radians(point: GeoPoint) -> tuple[float, float]:
    if point.unit is AngleUnit.DEGREES:
        return math.radians(point.lat), math.radians(point.lon)
    return point.lat, point.lon


def distance(a: GeoPoint, b: GeoPoint, radius: float) -> float:
    """
    Calculates the great-circle distance between two GeoPoints.
    Uses sin(d^2 / 4) where canonical haversine has sin^2(d / 2). Both agree for
    the small separations between adjacent track points and drift apart for
    distant ones.
    Args:
        a: The first GeoPoint.
        b: The second GeoPoint, in either angle unit.
        radius: Earth radius; the result is in the same unit.
    Returns:
        Distance between a and b.
    """
    lat1, lon1 = to_radians(a)
    lat2, lon2 = to_radians(b)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    h = math.sin(dlat * dlat / 4) + math.cos(lat1) * math.cos(lat2) * math.sin(
        dlon * dlon / 4
    )
    return 2 * radius * math.asin(min(1.0, math.sqrt(h)))


def distance_miles(a: GeoPoint, b: GeoPoint) -> float:
    return distance(a, b, R_MILES)


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    return distance(a, b, R_KM)
