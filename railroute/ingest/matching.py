"""Match listed stations to OSM nodes and derive the line's edges."""

import logging
from dataclasses import dataclass

from railroute.geo.distance import haversine

from .osm import OsmData, build_sequence, slice_distance, station_members

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """The three artifacts of one ingestion run."""

    listing: list[dict]  # Every listed station, with coordinates where matched
    stations: list[dict]  # Stations found in both sources, in line order
    edges: list[dict]  # Consecutive matched stations with track distance
    osm_stations: list[dict]  # Every station-like OSM point


def strip_suffixes(name: str) -> str:
    """Normalize a station name: ``线路所`` becomes ``所`` and ``站`` is dropped."""
    return name.replace("线路所", "所").replace("站", "")


def osm_station_records(osm: OsmData) -> list[dict]:
    records = []
    for ref in station_members(osm):
        node = osm.nodes[ref]
        raw_name = node.name
        name = strip_suffixes(raw_name) if raw_name else raw_name
        english = node.tags.get("name:en") or name or raw_name
        records.append({
            "osmNodeId": ref,
            "nameLocalRaw": raw_name,
            "nameLocal": name,
            "nameRomaji": english,
            "nameEnglish": english,
            "location": {"latitude": node.lat, "longitude": node.lon},
            "hasPassengerService": True,
        })
    return records


def match_line(listing: list[dict], osm: OsmData) -> MatchResult:
    """
    Match listing records to OSM station nodes by normalized name.

    Matched stations keep the relation's order; each one appears once. The
    edge between two consecutive matched stations is the track length along
    the relation's node sequence, or the straight-line distance when the
    sequence does not run from the first to the second.
    """
    by_name = {record["nameLocal"]: record for record in listing}

    stations: list[dict] = []
    kept_refs: list[str] = []
    for ref in station_members(osm):
        node = osm.nodes[ref]
        if not node.name:
            continue
        name = strip_suffixes(node.name)
        listed = by_name.get(name)
        if listed is None or any(s["id"] == listed["id"] for s in stations):
            continue

        english = node.tags.get("name:en") or name
        kept_refs.append(ref)
        stations.append({
            "id": listed["id"],
            "nameLocal": name,
            "nameRomaji": english,
            "nameEnglish": english,
            "location": {"latitude": node.lat, "longitude": node.lon},
            "hasPassengerService": listed.get("hasPassengerService", True),
        })

    sequence = build_sequence(osm.relation, osm.ways)
    first_index: dict[str, int] = {}
    for i, ref in enumerate(sequence):
        first_index.setdefault(ref, i)

    edges = []
    for i in range(len(kept_refs) - 1):
        a_ref, b_ref = kept_refs[i], kept_refs[i + 1]
        a_idx = first_index.get(a_ref, -1)
        b_idx = first_index.get(b_ref, -1)
        if a_idx >= 0 and b_idx > a_idx:
            distance = slice_distance(sequence, osm.nodes, a_idx, b_idx)
        else:
            n1, n2 = osm.nodes[a_ref], osm.nodes[b_ref]
            distance = round(haversine(n1.lat, n1.lon, n2.lat, n2.lon), 2)
        edges.append({
            "station1Id": stations[i]["id"],
            "station2Id": stations[i + 1]["id"],
            "distance": distance,
        })

    matched = {s["id"]: s for s in stations}
    full_listing = [matched.get(record["id"], record) for record in listing]

    logger.info(
        "Matched %d of %d listed stations, %d edges",
        len(stations),
        len(listing),
        len(edges),
    )
    return MatchResult(
        listing=full_listing,
        stations=stations,
        edges=edges,
        osm_stations=osm_station_records(osm),
    )
