"""
FastAPI web interface for the railway route planner.

Run with: uvicorn railroute.web.app:app
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Query, Request
from pydantic import BaseModel

from railroute.network import (
    InMemoryNetworkRepository,
    SqliteNetworkRepository,
    load_line_artifact,
    railway_from_artifact,
    seed_repository,
)
from railroute.network.models import Station
from railroute.pathfinding import RoutePlanner

logger = logging.getLogger(__name__)

# Paths
DATA_DIR = Path(__file__).parent.parent / "data"
DEFAULT_LINE_FILE = DATA_DIR / "guangshengang-line.json"


class StationResponse(BaseModel):
    """Station as returned by the API."""

    id: str
    name_local: str
    name_romaji: str
    name_english: str
    latitude: float
    longitude: float
    has_passenger_service: bool


class SegmentDisplay(BaseModel):
    """Display info for a route segment."""

    from_station: str
    to_station: str
    distance_km: float
    railway_id: str
    railway_name: str


class RouteResponse(BaseModel):
    """Response model for route queries."""

    found: bool
    status: str  # found, unknown_station or no_path
    start: str
    end: str
    via: list[str] = []
    stations: list[str] | None = None
    total_distance_km: float | None = None
    straight_line_km: float | None = None
    segments: list[SegmentDisplay] | None = None
    path_description: list[str] | None = None
    error: str | None = None


class DistanceResponse(BaseModel):
    a: str
    b: str
    distance_km: float


class RailwaySummary(BaseModel):
    id: str
    name_local: str
    name_english: str
    num_edges: int
    length_km: float


def station_response(station: Station) -> StationResponse:
    return StationResponse(
        id=station.id,
        name_local=station.name_local,
        name_romaji=station.name_romaji,
        name_english=station.name_english,
        latitude=station.location.latitude,
        longitude=station.location.longitude,
        has_passenger_service=station.has_passenger_service,
    )


def default_repository():
    """Repository from RAILROUTE_DB, else the bundled sample line in memory."""
    db_path = os.getenv("RAILROUTE_DB")
    if db_path:
        logger.info("Using SQLite database %s", db_path)
        return SqliteNetworkRepository(db_path)

    repository = InMemoryNetworkRepository()
    if DEFAULT_LINE_FILE.exists():
        artifact = load_line_artifact(DEFAULT_LINE_FILE)
        seed_repository(repository, artifact, railway_from_artifact(artifact))
    else:
        logger.warning("No database configured and %s is missing", DEFAULT_LINE_FILE)
    return repository


def create_app(repository=None, cache_graph: bool = True) -> FastAPI:
    """
    Build the API around a repository.

    Args:
        repository: Network repository; when None the default one is loaded
            on startup
        cache_graph: Reuse the routing graph until the repository changes
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.repository is None:
            app.state.repository = default_repository()
            app.state.planner = RoutePlanner(app.state.repository, cache_graph=cache_graph)
        yield

    app = FastAPI(
        title="Railway Route Planner",
        description="Shortest railway routes between stations",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.repository = repository
    app.state.planner = (
        RoutePlanner(repository, cache_graph=cache_graph) if repository is not None else None
    )

    @app.get("/api/route", response_model=RouteResponse)
    async def api_route(
        request: Request,
        start: str = Query(...),
        end: str = Query(...),
        via: list[str] = Query(default=[]),
    ) -> RouteResponse:
        """Shortest route between two stations, optionally through others."""
        planner = get_planner(request)
        outcome = planner.plan(start, end, via)
        straight_line = planner.straight_line_distance(start, end)

        if not outcome.found:
            return RouteResponse(
                found=False,
                status=outcome.error.code,
                start=start,
                end=end,
                via=via,
                straight_line_km=straight_line,
                error=str(outcome.error),
            )

        route = outcome.route
        return RouteResponse(
            found=True,
            status="found",
            start=start,
            end=end,
            via=via,
            stations=route.stations,
            total_distance_km=round(route.total_distance, 2),
            straight_line_km=straight_line,
            segments=[
                SegmentDisplay(
                    from_station=seg.from_station,
                    to_station=seg.to_station,
                    distance_km=seg.distance_km,
                    railway_id=seg.railway_id,
                    railway_name=seg.railway_name,
                )
                for seg in route.segments
            ],
            path_description=route.path_description,
        )

    @app.get("/api/stations/{station_id}", response_model=StationResponse)
    async def api_station(request: Request, station_id: str) -> StationResponse:
        station = get_planner(request).repository.find_station_by_id(station_id)
        if station is None:
            raise HTTPException(status_code=404, detail=f"Unknown station: {station_id}")
        return station_response(station)

    @app.get("/api/distance", response_model=DistanceResponse)
    async def api_distance(
        request: Request, a: str = Query(...), b: str = Query(...)
    ) -> DistanceResponse:
        """Straight-line distance between two stations."""
        distance = get_planner(request).straight_line_distance(a, b)
        if distance is None:
            raise HTTPException(status_code=404, detail="Unknown station")
        return DistanceResponse(a=a, b=b, distance_km=distance)

    @app.get("/api/railways", response_model=list[RailwaySummary])
    async def api_railways(request: Request) -> list[RailwaySummary]:
        railways = get_planner(request).repository.find_all_railways()
        return [
            RailwaySummary(
                id=railway.id,
                name_local=railway.name_local,
                name_english=railway.name_english,
                num_edges=len(railway.edges),
                length_km=round(sum(edge.distance for edge in railway.edges), 2),
            )
            for railway in railways
        ]

    @app.get("/health")
    async def health(request: Request):
        """Health check endpoint."""
        planner = request.app.state.planner
        return {
            "status": "ok",
            "planner_loaded": planner is not None,
            "railways": len(planner.repository.find_all_railways()) if planner else 0,
        }

    return app


def get_planner(request: Request) -> RoutePlanner:
    planner = request.app.state.planner
    if planner is None:
        raise HTTPException(status_code=503, detail="Route planner not loaded")
    return planner


app = create_app()
