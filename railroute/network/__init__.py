"""Network entities and the repositories that store them."""

from .errors import DecodeError
from .loader import load_line_artifact, railway_from_artifact, seed_repository
from .models import Coordinate, Railway, RailwayEdge, Station
from .repository import InMemoryNetworkRepository, NetworkRepository
from .sqlite_repository import SqliteNetworkRepository

__all__ = [
    "Coordinate",
    "Station",
    "RailwayEdge",
    "Railway",
    "NetworkRepository",
    "InMemoryNetworkRepository",
    "SqliteNetworkRepository",
    "DecodeError",
    "load_line_artifact",
    "railway_from_artifact",
    "seed_repository",
]
