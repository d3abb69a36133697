"""SQLite persistence for stations and railways."""

import logging
import math
import sqlite3
import threading
from pathlib import Path

from .errors import DecodeError
from .models import Coordinate, Railway, RailwayEdge, Station

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS stations (
    id TEXT PRIMARY KEY,
    name_local TEXT NOT NULL,
    name_romaji TEXT NOT NULL,
    name_english TEXT NOT NULL,
    latitude REAL NOT NULL,
    longitude REAL NOT NULL,
    has_passenger_service INTEGER NOT NULL DEFAULT 1
);

CREATE TABLE IF NOT EXISTS railways (
    id TEXT PRIMARY KEY,
    name_local TEXT NOT NULL,
    name_english TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS railway_edges (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    railway_id TEXT NOT NULL,
    station1_id TEXT NOT NULL,
    station2_id TEXT NOT NULL,
    distance REAL NOT NULL,
    ordering INTEGER NOT NULL,
    FOREIGN KEY (railway_id) REFERENCES railways(id) ON DELETE CASCADE,
    FOREIGN KEY (station1_id) REFERENCES stations(id) ON DELETE CASCADE,
    FOREIGN KEY (station2_id) REFERENCES stations(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_railway_edges_railway ON railway_edges(railway_id);
"""

STATION_COLUMNS = (
    "id",
    "name_local",
    "name_romaji",
    "name_english",
    "latitude",
    "longitude",
    "has_passenger_service",
)


def _column(row: sqlite3.Row, name: str):
    try:
        value = row[name]
    except (IndexError, KeyError) as e:
        raise DecodeError(f"missing column {name!r}") from e
    if value is None:
        raise DecodeError(f"column {name!r} is NULL")
    return value


def station_from_row(row: sqlite3.Row, prefix: str = "") -> Station:
    """
    Map a stations row to a Station.

    Args:
        row: Row with the stations columns, optionally prefixed (``s1_id``...)
        prefix: Column name prefix used in joined queries

    Raises:
        DecodeError: if a column is missing, NULL or has the wrong type
    """
    values = {name: _column(row, prefix + name) for name in STATION_COLUMNS}
    try:
        location = Coordinate(
            latitude=float(values["latitude"]),
            longitude=float(values["longitude"]),
        )
    except (TypeError, ValueError) as e:
        raise DecodeError(f"station {values['id']!r} has an invalid location") from e

    service = values["has_passenger_service"]
    if service not in (0, 1):
        raise DecodeError(
            f"station {values['id']!r} has invalid has_passenger_service={service!r}"
        )

    return Station(
        id=str(values["id"]),
        name_local=values["name_local"],
        name_romaji=values["name_romaji"],
        name_english=values["name_english"],
        location=location,
        has_passenger_service=service == 1,
    )


def railway_edge_from_row(row: sqlite3.Row) -> RailwayEdge:
    """Map a joined railway_edges row (``s1_*``/``s2_*`` columns) to an edge."""
    try:
        distance = float(_column(row, "distance"))
    except (TypeError, ValueError) as e:
        raise DecodeError("edge distance is not a number") from e
    if not math.isfinite(distance) or distance < 0:
        raise DecodeError(f"edge distance must be a non-negative number, got {distance}")

    return RailwayEdge(
        station1=station_from_row(row, "s1_"),
        station2=station_from_row(row, "s2_"),
        distance=distance,
    )


def _station_select(alias: str) -> str:
    return ", ".join(f"{alias}.{name} AS {alias}_{name}" for name in STATION_COLUMNS)


EDGES_QUERY = f"""
    SELECT re.distance, {_station_select("s1")}, {_station_select("s2")}
    FROM railway_edges re
    JOIN stations s1 ON re.station1_id = s1.id
    JOIN stations s2 ON re.station2_id = s2.id
    WHERE re.railway_id = ?
    ORDER BY re.ordering ASC
"""


class SqliteNetworkRepository:
    """
    Network repository backed by a SQLite database.

    Each instance owns one connection. Writes run inside a transaction.
    ``version`` changes after every write through this instance and after
    every commit made by another connection to the same database file, so
    planners can tell when a cached graph is stale.
    """

    def __init__(self, path: str | Path = ":memory:"):
        """
        Open (and create if needed) the database.

        Args:
            path: Database file, or ":memory:" for a private in-memory database
        """
        self.path = str(path)
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(self.path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA foreign_keys = ON")
        self._lock = threading.Lock()
        self._local_version = 0
        self.init_schema()

    def init_schema(self, reset: bool = False) -> None:
        """Create tables; with ``reset`` drop existing ones first."""
        with self._lock, self._conn:
            if reset:
                for table in ("railway_edges", "railways", "stations"):
                    self._conn.execute(f"DROP TABLE IF EXISTS {table}")
                self._local_version += 1
            self._conn.executescript(SCHEMA)

    @property
    def version(self) -> tuple[int, int]:
        """Local write counter plus SQLite's ``data_version`` for outside commits."""
        with self._lock:
            data_version = self._conn.execute("PRAGMA data_version").fetchone()[0]
        return (self._local_version, data_version)

    def close(self) -> None:
        self._conn.close()

    def save_station(self, station: Station) -> None:
        with self._lock, self._conn:
            self._upsert_station(station)
            self._local_version += 1

    def _upsert_station(self, station: Station) -> None:
        self._conn.execute(
            """
            INSERT INTO stations (id, name_local, name_romaji, name_english,
                                  latitude, longitude, has_passenger_service)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                name_local = excluded.name_local,
                name_romaji = excluded.name_romaji,
                name_english = excluded.name_english,
                latitude = excluded.latitude,
                longitude = excluded.longitude,
                has_passenger_service = excluded.has_passenger_service
            """,
            (
                station.id,
                station.name_local,
                station.name_romaji,
                station.name_english,
                station.location.latitude,
                station.location.longitude,
                1 if station.has_passenger_service else 0,
            ),
        )

    def save_railway(self, railway: Railway) -> None:
        """
        Store a railway and replace its edge list.

        Stations referenced by the edges must already be saved.
        """
        with self._lock, self._conn:
            self._conn.execute(
                """
                INSERT INTO railways (id, name_local, name_english)
                VALUES (?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name_local = excluded.name_local,
                    name_english = excluded.name_english
                """,
                (railway.id, railway.name_local, railway.name_english),
            )
            self._conn.execute(
                "DELETE FROM railway_edges WHERE railway_id = ?", (railway.id,)
            )
            self._conn.executemany(
                """
                INSERT INTO railway_edges
                    (railway_id, station1_id, station2_id, distance, ordering)
                VALUES (?, ?, ?, ?, ?)
                """,
                [
                    (railway.id, edge.station1.id, edge.station2.id, edge.distance, i)
                    for i, edge in enumerate(railway.edges)
                ],
            )
            self._local_version += 1
        logger.debug("Saved railway %s (%d edges)", railway.id, len(railway.edges))

    def find_station_by_id(self, station_id: str) -> Station | None:
        row = self._conn.execute(
            "SELECT * FROM stations WHERE id = ?", (station_id,)
        ).fetchone()
        return station_from_row(row) if row else None

    def find_all_stations(self) -> list[Station]:
        rows = self._conn.execute("SELECT * FROM stations ORDER BY id").fetchall()
        return [station_from_row(row) for row in rows]

    def find_railway_by_id(self, railway_id: str) -> Railway | None:
        row = self._conn.execute(
            "SELECT * FROM railways WHERE id = ?", (railway_id,)
        ).fetchone()
        if not row:
            return None

        railway = Railway(
            id=row["id"], name_local=row["name_local"], name_english=row["name_english"]
        )
        for edge_row in self._conn.execute(EDGES_QUERY, (railway_id,)):
            railway.edges.append(railway_edge_from_row(edge_row))
        return railway

    def find_all_railways(self) -> list[Railway]:
        ids = [row["id"] for row in self._conn.execute("SELECT id FROM railways ORDER BY id")]
        return [self.find_railway_by_id(railway_id) for railway_id in ids]
