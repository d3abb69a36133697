"""Read an OpenStreetMap route relation (JSON API output) into a node sequence."""

from dataclasses import dataclass, field
from itertools import pairwise

from railroute.geo.distance import haversine

STATION_RAILWAY_TAGS = {"station", "junction", "halt", "stop", "stop_position"}
STATION_PT_TAGS = {"station", "stop_position", "platform"}


class IngestError(RuntimeError):
    """Source data could not be fetched or understood."""


@dataclass
class OsmNode:
    id: str
    lat: float
    lon: float
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.tags.get("name:zh") or self.tags.get("name") or ""


@dataclass
class OsmData:
    """Nodes, ways and the route relation of one ``relation/<id>/full`` query."""

    nodes: dict[str, OsmNode]
    ways: dict[str, list[str]]
    relation: dict


def parse_relation(data: dict, relation_id: str) -> OsmData:
    """
    Index the elements of an OSM JSON document.

    Nodes without usable coordinates are dropped.

    Raises:
        IngestError: if the relation is not part of the document
    """
    nodes: dict[str, OsmNode] = {}
    ways: dict[str, list[str]] = {}
    relation = None

    for element in data.get("elements", []):
        kind = element.get("type")
        element_id = str(element.get("id"))
        if kind == "node":
            try:
                lat = float(element["lat"])
                lon = float(element["lon"])
            except (KeyError, TypeError, ValueError):
                continue
            tags = {k: str(v) for k, v in (element.get("tags") or {}).items()}
            nodes[element_id] = OsmNode(id=element_id, lat=lat, lon=lon, tags=tags)
        elif kind == "way":
            ways[element_id] = [str(ref) for ref in element.get("nodes", [])]
        elif kind == "relation" and element_id == str(relation_id):
            relation = element

    if relation is None:
        raise IngestError(f"Relation {relation_id} not found")

    return OsmData(nodes=nodes, ways=ways, relation=relation)


def is_station_like(node: OsmNode, role: str | None = None) -> bool:
    """Whether a relation member node stands for a station, stop or junction."""
    role = role or ""
    return (
        node.tags.get("railway") in STATION_RAILWAY_TAGS
        or node.tags.get("public_transport") in STATION_PT_TAGS
        or "stop" in role
        or "station" in role
    )


def station_members(osm: OsmData) -> list[str]:
    """Ids of station-like member nodes, in relation order."""
    refs = []
    for member in osm.relation.get("members", []):
        if member.get("type") != "node":
            continue
        ref = str(member.get("ref"))
        node = osm.nodes.get(ref)
        if node and is_station_like(node, member.get("role")):
            refs.append(ref)
    return refs


def build_sequence(relation: dict, ways: dict[str, list[str]]) -> list[str]:
    """Expand relation members into one node id sequence (ways inlined)."""
    sequence = []
    for member in relation.get("members", []):
        if member.get("type") == "node":
            sequence.append(str(member.get("ref")))
        elif member.get("type") == "way":
            sequence.extend(ways.get(str(member.get("ref")), []))
    return sequence


def slice_distance(
    sequence: list[str], nodes: dict[str, OsmNode], start: int, end: int
) -> float:
    """Sum of great-circle segments along ``sequence[start:end + 1]``, in km."""
    total = 0.0
    for a, b in pairwise(sequence[start : end + 1]):
        n1, n2 = nodes.get(a), nodes.get(b)
        if n1 and n2:
            total += round(haversine(n1.lat, n1.lon, n2.lat, n2.lon), 2)
    return round(total, 2)
