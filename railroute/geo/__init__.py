"""Great-circle distance helpers."""

from .distance import distance, haversine, station_distance

__all__ = ["haversine", "distance", "station_distance"]
