"""Domain entities of the rail network: stations, railways and their edges."""

from dataclasses import dataclass, field

from railroute.geo.distance import station_distance


@dataclass(frozen=True)
class Coordinate:
    """Geographic position in degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class Station:
    """
    A point of the rail network.

    Two stations are equal when their identifiers are equal; names and
    location do not take part in comparison or hashing.
    """

    id: str
    name_local: str = field(compare=False)
    name_romaji: str = field(compare=False)
    name_english: str = field(compare=False)
    location: Coordinate = field(compare=False)
    has_passenger_service: bool = field(default=True, compare=False)


@dataclass(frozen=True)
class RailwayEdge:
    """Connection between two consecutive stations of a railway."""

    station1: Station
    station2: Station
    distance: float  # km

    def touches(self, station_id: str) -> bool:
        return station_id in (self.station1.id, self.station2.id)

    def other_end(self, station_id: str) -> Station:
        """Return the endpoint that is not ``station_id``."""
        return self.station2 if self.station1.id == station_id else self.station1


@dataclass
class Railway:
    """
    A named line made of an ordered list of station-to-station edges.

    Edge order follows the real-world track and only matters for storage
    and display; routing treats every edge as bidirectional.
    """

    id: str
    name_local: str
    name_english: str
    edges: list[RailwayEdge] = field(default_factory=list)

    def add_edge(
        self, station1: Station, station2: Station, distance: float | None = None
    ) -> RailwayEdge:
        """
        Append an edge to the line.

        Args:
            station1: First endpoint
            station2: Second endpoint
            distance: Track distance in km; defaults to the straight-line
                distance between the two stations

        Returns:
            The new RailwayEdge
        """
        if distance is None:
            distance = station_distance(station1, station2)
        edge = RailwayEdge(station1=station1, station2=station2, distance=distance)
        self.edges.append(edge)
        return edge

    def stations(self) -> list[Station]:
        """Distinct stations in edge order."""
        seen: dict[str, Station] = {}
        for edge in self.edges:
            seen.setdefault(edge.station1.id, edge.station1)
            seen.setdefault(edge.station2.id, edge.station2)
        return list(seen.values())

    @property
    def label(self) -> str:
        return f"{self.name_local} / {self.name_english}"
