"""Repository interface consumed by the route planner, plus an in-memory store."""

import logging
from typing import Protocol

from .models import Railway, Station

logger = logging.getLogger(__name__)


class NetworkRepository(Protocol):
    """
    Read access to the persisted network.

    Implementations may also expose a comparable ``version`` attribute that
    changes on every write; the planner uses it to reuse a built graph.
    """

    def find_all_railways(self) -> list[Railway]:
        """Every railway with its full ordered edge list."""
        ...

    def find_station_by_id(self, station_id: str) -> Station | None:
        """A single station, or None if it is not stored."""
        ...


class InMemoryNetworkRepository:
    """Dictionary-backed repository, used for tests and small seeded networks."""

    def __init__(self):
        self._stations: dict[str, Station] = {}
        self._railways: dict[str, Railway] = {}
        self.version = 0

    def save_station(self, station: Station) -> None:
        self._stations[station.id] = station
        self.version += 1

    def save_railway(self, railway: Railway) -> None:
        """Store a railway and any stations its edges reference."""
        for station in railway.stations():
            self._stations.setdefault(station.id, station)
        self._railways[railway.id] = railway
        self.version += 1
        logger.debug("Saved railway %s (%d edges)", railway.id, len(railway.edges))

    def find_station_by_id(self, station_id: str) -> Station | None:
        return self._stations.get(station_id)

    def find_all_stations(self) -> list[Station]:
        return list(self._stations.values())

    def find_railway_by_id(self, railway_id: str) -> Railway | None:
        return self._railways.get(railway_id)

    def find_all_railways(self) -> list[Railway]:
        return list(self._railways.values())
