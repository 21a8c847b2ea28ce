"""Great-circle helpers.

Points are ``(latitude, longitude)`` pairs in decimal degrees. Results are
returned at full precision; rounding is left to whoever builds the payload.
"""

import math

from geopy.distance import great_circle

EARTH_RADIUS_KM = 6371


def distance_km(a, b) -> float:
    """Great-circle distance between two points on a sphere of radius EARTH_RADIUS_KM."""
    return great_circle(a, b, radius=EARTH_RADIUS_KM).km


def bearing_deg(start, dest) -> float:
    """Initial compass bearing for the great-circle path from start to dest, in [0, 360)."""
    if tuple(start) == tuple(dest):
        # No direction between identical points
        return 0.0

    lat1, lon1 = (math.radians(v) for v in start)
    lat2, lon2 = (math.radians(v) for v in dest)
    d_lon = lon2 - lon1

    y = math.sin(d_lon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(d_lon)
    brng = math.degrees(math.atan2(y, x))
    return (brng + 360) % 360
