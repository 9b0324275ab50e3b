# roadnav/geo/distance.py
import math

EARTH_RADIUS_MI = 3963.0


def great_circle_miles(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    """Haversine distance in miles."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2.0) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MI * c


def initial_bearing(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    """
    Initial great-circle bearing from point 1 towards point 2, in degrees.
    0 is north, 90 east; range is (-180, 180].
    """
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dlambda = math.radians(lon2 - lon1)

    y = math.sin(dlambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(dlambda)
    return math.degrees(math.atan2(y, x))
