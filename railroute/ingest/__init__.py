"""Offline ingestion: build line artifacts from a station listing and OSM data."""

from .listing import parse_station_listing
from .matching import MatchResult, match_line, strip_suffixes
from .osm import IngestError, OsmData, parse_relation

__all__ = [
    "parse_station_listing",
    "parse_relation",
    "match_line",
    "strip_suffixes",
    "MatchResult",
    "OsmData",
    "IngestError",
]
