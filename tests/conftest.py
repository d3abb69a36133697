"""Shared fixtures: a small multi-line network and repositories holding it."""

import pytest

from railroute.network import InMemoryNetworkRepository
from railroute.network.models import Coordinate, Railway, Station


def make_station(station_id: str, lat: float = 0.0, lon: float = 0.0) -> Station:
    return Station(
        id=station_id,
        name_local=f"{station_id}站",
        name_romaji=station_id,
        name_english=f"Station {station_id}",
        location=Coordinate(latitude=lat, longitude=lon),
    )


@pytest.fixture
def stations():
    """Stations A-H; H has no incident edge."""
    return {
        sid: make_station(sid, lat=0.0, lon=i * 0.05)
        for i, sid in enumerate("ABCDEFGH")
    }


@pytest.fixture
def railways(stations):
    """
    Four lines:

        R1: A -2- B -3- C -4- D
        R2: A -7- E -1.5- D
        R3: B -2.5- E, C -2.75- B (parallel to R1's B-C)
        R4: F -1- G (separate component)
    """
    s = stations
    r1 = Railway("R1", "一号线", "Line 1")
    r1.add_edge(s["A"], s["B"], 2)
    r1.add_edge(s["B"], s["C"], 3)
    r1.add_edge(s["C"], s["D"], 4)

    r2 = Railway("R2", "二号线", "Line 2")
    r2.add_edge(s["A"], s["E"], 7)
    r2.add_edge(s["E"], s["D"], 1.5)

    r3 = Railway("R3", "三号线", "Line 3")
    r3.add_edge(s["B"], s["E"], 2.5)
    r3.add_edge(s["C"], s["B"], 2.75)

    r4 = Railway("R4", "四号线", "Line 4")
    r4.add_edge(s["F"], s["G"], 1)

    return [r1, r2, r3, r4]


@pytest.fixture
def repository(stations, railways):
    repo = InMemoryNetworkRepository()
    for station in stations.values():
        repo.save_station(station)
    for railway in railways:
        repo.save_railway(railway)
    return repo
