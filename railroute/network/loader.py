"""Load line artifacts (stations + edges JSON) produced by the ingestion pipeline."""

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path

from .errors import DecodeError
from .models import Coordinate, Railway, Station

logger = logging.getLogger(__name__)


@dataclass
class LineArtifact:
    """Stations and raw edge records of one line, as written to disk."""

    stations: dict[str, Station]
    edges: list[dict]
    railway: dict = field(default_factory=dict)


def station_from_record(record: dict) -> Station:
    """
    Map an artifact station record to a Station.

    Expected keys: id, nameLocal, location.latitude, location.longitude.
    nameRomaji and nameEnglish default to nameLocal; hasPassengerService
    defaults to True.
    """
    try:
        station_id = str(record["id"])
        name_local = record["nameLocal"]
        location = record["location"]
        coordinate = Coordinate(
            latitude=float(location["latitude"]),
            longitude=float(location["longitude"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise DecodeError(f"invalid station record: {record!r}") from e

    return Station(
        id=station_id,
        name_local=name_local,
        name_romaji=record.get("nameRomaji") or name_local,
        name_english=record.get("nameEnglish") or name_local,
        location=coordinate,
        has_passenger_service=bool(record.get("hasPassengerService", True)),
    )


def load_line_artifact(filepath: str | Path) -> LineArtifact:
    """
    Read a line artifact JSON file.

    Expected shape:
        {"railway": {...}?, "stations": [...], "edges": [{"station1Id",
        "station2Id", "distance"}]}
    """
    filepath = Path(filepath)
    with open(filepath, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict) or "stations" not in data:
        raise DecodeError(f"{filepath} is not a line artifact")

    stations = {}
    for record in data["stations"]:
        station = station_from_record(record)
        stations[station.id] = station

    return LineArtifact(
        stations=stations,
        edges=list(data.get("edges", [])),
        railway=data.get("railway") or {},
    )


def railway_from_artifact(
    artifact: LineArtifact,
    railway_id: str | None = None,
    name_local: str | None = None,
    name_english: str | None = None,
) -> Railway:
    """
    Build a Railway from an artifact's edge records.

    Names not passed explicitly are taken from the artifact's ``railway``
    block. Edges without a distance fall back to the straight-line distance.

    Raises:
        DecodeError: on unknown station references, invalid distances or a
            missing railway id
    """
    meta = artifact.railway
    railway_id = railway_id or meta.get("id")
    if not railway_id:
        raise DecodeError("railway id is required")
    name_local = name_local or meta.get("nameLocal") or railway_id
    name_english = name_english or meta.get("nameEnglish") or name_local

    railway = Railway(id=railway_id, name_local=name_local, name_english=name_english)
    for record in artifact.edges:
        try:
            station1 = artifact.stations[str(record["station1Id"])]
            station2 = artifact.stations[str(record["station2Id"])]
        except KeyError as e:
            raise DecodeError(f"edge references unknown station {e}") from e

        distance = record.get("distance")
        if distance is not None:
            try:
                distance = float(distance)
            except (TypeError, ValueError) as e:
                raise DecodeError(f"invalid edge distance {distance!r}") from e
            if not math.isfinite(distance) or distance < 0:
                raise DecodeError(f"edge distance must be non-negative, got {distance}")

        railway.add_edge(station1, station2, distance)

    return railway


def seed_repository(repository, artifact: LineArtifact, railway: Railway) -> None:
    """Save every artifact station, then the railway, into ``repository``."""
    for station in artifact.stations.values():
        repository.save_station(station)
    repository.save_railway(railway)
    logger.info(
        "Seeded %d stations and railway %s (%d edges)",
        len(artifact.stations),
        railway.id,
        len(railway.edges),
    )
