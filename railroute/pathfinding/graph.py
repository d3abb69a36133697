"""Railway graph construction from railway edge lists."""

import logging
import math
from collections.abc import Iterable
from typing import NamedTuple

import networkx as nx

from railroute.network.models import Railway, RailwayEdge

from .errors import InvalidEdgeWeight

logger = logging.getLogger(__name__)


class Arc(NamedTuple):
    """One traversal direction of a railway edge."""

    to_station: str
    weight: float
    edge: RailwayEdge
    railway: Railway


class RailwayGraph:
    """
    Bidirectional multigraph of the rail network.

    Nodes are station ids. Every railway edge is stored as one undirected
    multi-edge carrying ``weight`` (km), the originating ``edge`` and its
    ``railway``, so it can be walked from either end. Parallel edges from
    different railways stay distinct.
    """

    def __init__(self):
        """Initialize empty graph."""
        self.graph = nx.MultiGraph()

    @classmethod
    def from_railways(cls, railways: Iterable[Railway]) -> "RailwayGraph":
        """Build a graph from every edge of every railway."""
        railway_graph = cls()
        for railway in railways:
            railway_graph.add_railway(railway)
        logger.debug(
            "Built railway graph: %d stations, %d edges",
            len(railway_graph),
            railway_graph.edge_count(),
        )
        return railway_graph

    def add_railway(self, railway: Railway) -> None:
        """
        Add all edges of a railway.

        Raises:
            InvalidEdgeWeight: if an edge distance is negative or NaN
        """
        for edge in railway.edges:
            weight = edge.distance
            if math.isnan(weight) or weight < 0:
                raise InvalidEdgeWeight(
                    railway.id, edge.station1.id, edge.station2.id, weight
                )
            self.graph.add_edge(
                edge.station1.id,
                edge.station2.id,
                weight=weight,
                edge=edge,
                railway=railway,
            )

    def get_stations(self) -> list[str]:
        """Get list of all station ids."""
        return list(self.graph.nodes())

    def has_station(self, station_id: str) -> bool:
        """Check if a station exists in the graph."""
        return station_id in self.graph

    def arcs(self, station_id: str) -> list[Arc]:
        """Outgoing arcs of a station, in insertion order per neighbor."""
        if station_id not in self.graph:
            return []
        return [
            Arc(neighbor, data["weight"], data["edge"], data["railway"])
            for neighbor, keyed in self.graph.adj[station_id].items()
            for data in keyed.values()
        ]

    def get_neighbors(self, station_id: str) -> list[str]:
        """Get neighboring station ids."""
        if station_id not in self.graph:
            return []
        return list(self.graph.neighbors(station_id))

    def edge_count(self) -> int:
        return self.graph.number_of_edges()

    def __len__(self) -> int:
        """Return number of stations."""
        return len(self.graph)
