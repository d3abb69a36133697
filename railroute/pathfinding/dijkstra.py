"""Dijkstra pathfinding and route reconstruction for railway routes."""

import heapq
import logging
import math
from dataclasses import dataclass, field

from railroute.network.models import Railway, RailwayEdge

from .errors import InternalInconsistency, NoPathFound, UnknownStation
from .graph import RailwayGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Predecessor:
    """How the search last improved a station: from where, over which edge."""

    from_station: str
    edge: RailwayEdge
    railway: Railway


@dataclass
class SearchState:
    """Distances and predecessor links left by one search."""

    start: str
    end: str
    distances: dict[str, float]
    predecessors: dict[str, Predecessor]
    settled: set[str] = field(default_factory=set)

    @property
    def total_distance(self) -> float:
        return self.distances[self.end]


@dataclass(frozen=True)
class SegmentInfo:
    """Information about a path segment, oriented in travel direction."""

    from_station: str
    to_station: str
    distance_km: float
    railway_id: str
    railway_name: str


@dataclass(frozen=True)
class RouteResult:
    """Result of a successful route query."""

    edges: list[RailwayEdge]  # Traversed edges, start to end
    railways: list[Railway]  # Owning railway of each edge
    stations: list[str]  # Station ids visited, start and end included
    total_distance: float  # km
    path_description: list[str]

    @property
    def segments(self) -> list[SegmentInfo]:
        return [
            SegmentInfo(
                from_station=self.stations[i],
                to_station=self.stations[i + 1],
                distance_km=edge.distance,
                railway_id=railway.id,
                railway_name=railway.name_english,
            )
            for i, (edge, railway) in enumerate(zip(self.edges, self.railways))
        ]

    @property
    def num_segments(self) -> int:
        return len(self.edges)


def shortest_path(graph: RailwayGraph, start: str, end: str) -> SearchState:
    """
    Run Dijkstra's algorithm from ``start`` until ``end`` is settled.

    Among unsettled stations the one with the smallest tentative distance is
    settled next; ties go to the lowest station id. A neighbor is only
    updated when the new distance is strictly smaller, so among parallel
    edges of equal weight the first one added to the graph wins.

    Edge weights must be non-negative (RailwayGraph rejects others).

    Args:
        graph: RailwayGraph to search
        start: Departure station id
        end: Arrival station id

    Returns:
        SearchState with distances and predecessor links

    Raises:
        UnknownStation: if start or end is not in the graph
        NoPathFound: if end is unreachable from start
    """
    for station_id in (start, end):
        if not graph.has_station(station_id):
            raise UnknownStation(station_id)

    distances = {station_id: math.inf for station_id in graph.get_stations()}
    distances[start] = 0.0
    state = SearchState(start=start, end=end, distances=distances, predecessors={})

    # Entries are (distance, station id); stale ones are skipped when popped
    heap = [(0.0, start)]
    while heap:
        current_distance, current = heapq.heappop(heap)
        if current in state.settled or current_distance > distances[current]:
            continue
        if current == end:
            break

        state.settled.add(current)

        for arc in graph.arcs(current):
            if arc.to_station in state.settled:
                continue
            candidate = current_distance + arc.weight
            if candidate < distances[arc.to_station]:
                distances[arc.to_station] = candidate
                state.predecessors[arc.to_station] = Predecessor(
                    from_station=current, edge=arc.edge, railway=arc.railway
                )
                heapq.heappush(heap, (candidate, arc.to_station))

    if distances[end] == math.inf:
        logger.debug(
            "No path %s -> %s after settling %d stations", start, end, len(state.settled)
        )
        raise NoPathFound(start, end)

    return state


def format_distance(distance: float) -> str:
    """Render a distance without a trailing ``.0`` for whole kilometers."""
    if float(distance).is_integer():
        return str(int(distance))
    return repr(float(distance))


def describe_segment(edge: RailwayEdge, railway: Railway) -> str:
    """One line of path description, e.g. ``[L / Line] A <-> B (2km)``."""
    return (
        f"[{railway.name_local} / {railway.name_english}] "
        f"{edge.station1.name_local} <-> {edge.station2.name_local} "
        f"({format_distance(edge.distance)}km)"
    )


def reconstruct_route(state: SearchState) -> RouteResult:
    """
    Turn a finished search into a RouteResult.

    Walks predecessor links back from the end station. The total distance is
    the search's own distance for the end station, not a re-summed value.

    Raises:
        InternalInconsistency: if the trace breaks before reaching the start
    """
    edges: list[RailwayEdge] = []
    railways: list[Railway] = []

    current = state.end
    while current != state.start:
        link = state.predecessors.get(current)
        if link is None or len(edges) > len(state.predecessors):
            raise InternalInconsistency(state.start, state.end, current, edges[::-1])
        edges.append(link.edge)
        railways.append(link.railway)
        current = link.from_station

    edges.reverse()
    railways.reverse()

    # Edges keep their stored orientation; walk them to get the travel order
    stations = [state.start]
    description = []
    position = state.start
    for edge, railway in zip(edges, railways):
        position = edge.other_end(position).id
        stations.append(position)
        description.append(describe_segment(edge, railway))

    return RouteResult(
        edges=edges,
        railways=railways,
        stations=stations,
        total_distance=state.total_distance,
        path_description=description,
    )
