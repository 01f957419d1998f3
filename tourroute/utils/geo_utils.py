"""Geographic helpers shared by the optimizer and the API layer"""
import math
from typing import Any, Iterable, Optional, Tuple

from ..config import EARTH_RADIUS_KM


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle (haversine) distance between two points.

    Args:
        lat1: Latitude of the first point in decimal degrees
        lon1: Longitude of the first point in decimal degrees
        lat2: Latitude of the second point in decimal degrees
        lon2: Longitude of the second point in decimal degrees

    Returns:
        Distance in kilometers
    """
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push a slightly outside [0, 1]
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance in meters."""
    return distance_km(lat1, lon1, lat2, lon2) * 1000


def path_length_km(points: Iterable[Tuple[float, float]]) -> float:
    """
    Sum of distances over consecutive (lat, lon) pairs.

    Args:
        points: Ordered (latitude, longitude) tuples

    Returns:
        Total length in kilometers, 0.0 for fewer than two points
    """
    total = 0.0
    previous = None
    for point in points:
        if previous is not None:
            total += distance_km(previous[0], previous[1], point[0], point[1])
        previous = point
    return total


def parse_coordinate(value: Any) -> Optional[float]:
    """
    Parse a latitude/longitude value coming from the places catalogue.

    Zero, empty, non-numeric and non-finite values count as missing.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number == 0:
        return None
    return number
