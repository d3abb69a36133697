"""Distance calculation utilities using Haversine formula."""

import math

# Earth's radius in kilometers
EARTH_RADIUS_KM = 6371.0


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance in km between two latitude/longitude pairs in degrees.

    The result is unrounded; ``distance`` applies the 2-decimal rounding used
    for edge weights and displayed distances.
    """
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    half_dphi = math.radians(lat2 - lat1) / 2
    half_dlambda = math.radians(lon2 - lon1) / 2

    h = math.sin(half_dphi) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(half_dlambda) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(min(1.0, h)))


def distance(a, b) -> float:
    """
    Straight-line distance between two coordinates, rounded to 2 decimals.

    Accepts anything with ``latitude`` and ``longitude`` attributes. Used for
    diagnostics only; railway distances come from the graph.
    """
    return round(haversine(a.latitude, a.longitude, b.latitude, b.longitude), 2)


def station_distance(station1, station2) -> float:
    """Straight-line distance between two stations' locations."""
    return distance(station1.location, station2.location)
