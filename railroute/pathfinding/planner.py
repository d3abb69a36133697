"""Route planner: the query interface over a network repository."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from railroute.geo.distance import station_distance
from railroute.network.repository import NetworkRepository

from .dijkstra import RouteResult, reconstruct_route, shortest_path
from .errors import NoPathFound, RoutingError, UnknownStation
from .graph import RailwayGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteOutcome:
    """Result of a planned query: a route, or the reason there is none."""

    found: bool
    route: RouteResult | None = None
    error: RoutingError | None = None


class RoutePlanner:
    """
    Find shortest railway routes between stations.

    The graph is rebuilt from the repository for every query. With
    ``cache_graph`` set, a graph is reused for as long as the repository's
    ``version`` attribute stays the same; repositories without one are
    always rebuilt.
    """

    def __init__(self, repository: NetworkRepository, cache_graph: bool = False):
        """
        Initialize planner with a repository.

        Args:
            repository: Source of railways and stations
            cache_graph: Reuse the built graph until the repository changes
        """
        self.repository = repository
        self.cache_graph = cache_graph
        self._cached: tuple[object, RailwayGraph] | None = None

    def build_graph(self) -> RailwayGraph:
        """Load every railway and build (or reuse) the routing graph."""
        version = getattr(self.repository, "version", None)
        use_cache = self.cache_graph and version is not None

        cached = self._cached
        if use_cache and cached is not None and cached[0] == version:
            return cached[1]

        graph = RailwayGraph.from_railways(self.repository.find_all_railways())
        if use_cache:
            self._cached = (version, graph)
        return graph

    def plan(
        self, start: str, end: str, via: Sequence[str] = ()
    ) -> RouteOutcome:
        """
        Find the shortest route, optionally through intermediate stations.

        Unknown stations and unreachable destinations are reported in the
        outcome rather than raised.

        Args:
            start: Departure station id
            end: Arrival station id
            via: Station ids to pass through, in order

        Returns:
            RouteOutcome with the route or the routing error
        """
        graph = self.build_graph()
        stops = [start, *via, end]

        legs = []
        for leg_start, leg_end in zip(stops, stops[1:]):
            try:
                state = shortest_path(graph, leg_start, leg_end)
            except (UnknownStation, NoPathFound) as e:
                logger.debug("Route leg %s -> %s not found: %s", leg_start, leg_end, e)
                return RouteOutcome(found=False, error=e)
            legs.append(reconstruct_route(state))

        return RouteOutcome(found=True, route=join_legs(legs))

    def find_shortest_path(self, start: str, end: str) -> RouteResult | None:
        """Shortest route between two stations, or None if there is none."""
        return self.plan(start, end).route

    def find_path_via(
        self, start: str, end: str, via: Sequence[str]
    ) -> RouteResult | None:
        """Shortest route passing through ``via`` in order, or None."""
        return self.plan(start, end, via).route

    def straight_line_distance(self, station1_id: str, station2_id: str) -> float | None:
        """Great-circle distance between two stored stations, in km."""
        station1 = self.repository.find_station_by_id(station1_id)
        station2 = self.repository.find_station_by_id(station2_id)
        if station1 is None or station2 is None:
            return None
        return station_distance(station1, station2)


def join_legs(legs: list[RouteResult]) -> RouteResult:
    """Concatenate consecutive legs into a single route."""
    if len(legs) == 1:
        return legs[0]

    stations = [legs[0].stations[0]]
    for leg in legs:
        stations.extend(leg.stations[1:])

    return RouteResult(
        edges=[edge for leg in legs for edge in leg.edges],
        railways=[railway for leg in legs for railway in leg.railways],
        stations=stations,
        total_distance=sum(leg.total_distance for leg in legs),
        path_description=[line for leg in legs for line in leg.path_description],
    )
