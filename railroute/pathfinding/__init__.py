"""Pathfinding module for finding railway routes."""

from .dijkstra import RouteResult, SegmentInfo, reconstruct_route, shortest_path
from .errors import (
    InternalInconsistency,
    InvalidEdgeWeight,
    NoPathFound,
    RoutingError,
    UnknownStation,
)
from .graph import RailwayGraph
from .planner import RouteOutcome, RoutePlanner

__all__ = [
    "RailwayGraph",
    "RoutePlanner",
    "RouteOutcome",
    "RouteResult",
    "SegmentInfo",
    "shortest_path",
    "reconstruct_route",
    "RoutingError",
    "UnknownStation",
    "NoPathFound",
    "InternalInconsistency",
    "InvalidEdgeWeight",
]
