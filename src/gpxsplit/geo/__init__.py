from .core import (
    R_KM,
    R_MILES,
    AngleUnit,
    GeoPoint,
    distance,
    distance_km,
    distance_miles,
    to_radians,
)
from .gpx import TrackPoint, iter_trackpoints, next_trackpoint

__all__ = [
    "R_KM",
    "R_MILES",
    "AngleUnit",
    "GeoPoint",
    "distance",
    "distance_km",
    "distance_miles",
    "iter_trackpoints",
    "next_trackpoint",
    "to_radians",
    "TrackPoint",
]
