"""Routing failures."""


class RoutingError(Exception):
    """Base class for route query failures."""

    code = "routing_error"


class UnknownStation(RoutingError):
    """The station has no incident edge, so it is not part of the graph."""

    code = "unknown_station"

    def __init__(self, station_id: str):
        super().__init__(f"Unknown station: {station_id}")
        self.station_id = station_id


class NoPathFound(RoutingError):
    """Both stations exist but no sequence of edges connects them."""

    code = "no_path"

    def __init__(self, start: str, end: str):
        super().__init__(f"No path from {start} to {end}")
        self.start = start
        self.end = end


class InternalInconsistency(RoutingError):
    """The predecessor trace broke although the search reached the end station."""

    code = "internal_inconsistency"

    def __init__(self, start: str, end: str, broken_at: str, partial_edges: list):
        super().__init__(
            f"Predecessor trace from {end} back to {start} broke at {broken_at}"
        )
        self.start = start
        self.end = end
        self.broken_at = broken_at
        self.partial_edges = partial_edges


class InvalidEdgeWeight(ValueError):
    """An edge weight is negative or not a number."""

    def __init__(self, railway_id: str, station1_id: str, station2_id: str, weight):
        super().__init__(
            f"Railway {railway_id}: edge {station1_id} <-> {station2_id} "
            f"has invalid weight {weight!r}"
        )
        self.railway_id = railway_id
        self.weight = weight
