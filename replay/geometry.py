"""
Spherical geometry helpers used when a route carries no heading data.
"""
import math


def compute_bearing(origin, destination) -> float:
    """
    Initial great-circle bearing from ``origin`` to ``destination``.

    Args:
        origin: Anything with ``lat``/``lng`` attributes in degrees
        destination: Anything with ``lat``/``lng`` attributes in degrees

    Returns:
        Compass bearing in degrees, clockwise from north, in [0, 360)
    """
    lat1 = math.radians(origin.lat)
    lat2 = math.radians(destination.lat)
    d_lng = math.radians(destination.lng - origin.lng)

    y = math.sin(d_lng) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(d_lng)

    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0


def same_position(a, b) -> bool:
    return a.lat == b.lat and a.lng == b.lng
