"""Tests for the route planner."""

import logging

import pytest

from railroute.network import InMemoryNetworkRepository
from railroute.network.models import Railway
from railroute.pathfinding import NoPathFound, RoutePlanner, UnknownStation

from conftest import make_station


class TestRoutePlanner:
    """Tests for RoutePlanner over an in-memory repository."""

    @pytest.fixture
    def planner(self, repository):
        return RoutePlanner(repository)

    def test_find_shortest_path(self, planner):
        result = planner.find_shortest_path("A", "D")
        assert result is not None
        assert result.total_distance == 6
        assert [(e.station1.id, e.station2.id) for e in result.edges] == [
            ("A", "B"),
            ("B", "E"),
            ("E", "D"),
        ]
        assert len(result.path_description) == 3

    def test_same_station(self, planner):
        result = planner.find_shortest_path("B", "B")
        assert result.total_distance == 0
        assert result.edges == []

    def test_station_without_edges_is_absent(self, planner):
        assert planner.find_shortest_path("A", "H") is None
        assert planner.find_shortest_path("H", "H") is None

    def test_unknown_id_is_absent(self, planner):
        assert planner.find_shortest_path("Unknown", "A") is None

    def test_disconnected_is_absent(self, planner):
        assert planner.find_shortest_path("A", "G") is None

    def test_plan_reports_unknown_station(self, planner):
        outcome = planner.plan("A", "H")
        assert not outcome.found
        assert outcome.route is None
        assert isinstance(outcome.error, UnknownStation)
        assert outcome.error.code == "unknown_station"

    def test_plan_reports_no_path(self, planner):
        outcome = planner.plan("A", "F")
        assert not outcome.found
        assert isinstance(outcome.error, NoPathFound)
        assert outcome.error.code == "no_path"

    def test_plan_found(self, planner):
        outcome = planner.plan("A", "C")
        assert outcome.found
        assert outcome.error is None
        assert outcome.route.total_distance == 4.75


class TestWaypoints:
    """Tests for routing through intermediate stations."""

    @pytest.fixture
    def planner(self, repository):
        return RoutePlanner(repository)

    def test_single_waypoint(self, planner):
        result = planner.find_path_via("A", "D", ["C"])
        # A-B-C (4.75) then C-D (4)
        assert result.stations == ["A", "B", "C", "D"]
        assert result.total_distance == pytest.approx(8.75)
        assert len(result.edges) == len(result.railways) == len(result.path_description) == 3

    def test_multiple_waypoints(self, planner):
        result = planner.find_path_via("A", "D", ["E", "C"])
        # A-B-E (4.5), E-B-C (5.25), C-D (4)
        assert result.stations == ["A", "B", "E", "B", "C", "D"]
        assert result.total_distance == pytest.approx(13.75)

    def test_no_waypoints_is_plain_route(self, planner):
        assert planner.find_path_via("A", "D", []).stations == ["A", "B", "E", "D"]

    def test_unreachable_waypoint(self, planner):
        outcome = planner.plan("A", "D", ["F"])
        assert not outcome.found
        assert isinstance(outcome.error, NoPathFound)

    def test_unknown_waypoint(self, planner):
        assert planner.find_path_via("A", "D", ["INVALID"]) is None

    def test_failing_leg_is_logged(self, planner, caplog):
        with caplog.at_level(logging.DEBUG, logger="railroute.pathfinding.planner"):
            planner.plan("A", "D", ["F"])
        assert "A -> F not found" in caplog.text
        assert "A -> D" not in caplog.text


class TestStraightLineDistance:
    def test_stored_stations(self, planner_for_line):
        assert planner_for_line.straight_line_distance("P", "Q") == 1.11

    def test_missing_station(self, planner_for_line):
        assert planner_for_line.straight_line_distance("P", "Unknown") is None

    @pytest.fixture
    def planner_for_line(self):
        repo = InMemoryNetworkRepository()
        repo.save_station(make_station("P", lat=0, lon=0))
        repo.save_station(make_station("Q", lat=0, lon=0.01))
        return RoutePlanner(repo)


class TestGraphCache:
    def test_rebuilt_every_query_by_default(self, repository):
        planner = RoutePlanner(repository)
        assert planner.build_graph() is not planner.build_graph()

    def test_cached_until_repository_changes(self, repository):
        planner = RoutePlanner(repository, cache_graph=True)
        graph = planner.build_graph()
        assert planner.build_graph() is graph

        extra = Railway("R5", "五号线", "Line 5")
        extra.add_edge(make_station("G"), make_station("H"), 2)
        repository.save_railway(extra)

        rebuilt = planner.build_graph()
        assert rebuilt is not graph
        assert rebuilt.has_station("H")
        assert not graph.has_station("H")

    def test_new_edges_visible_to_queries(self, repository):
        planner = RoutePlanner(repository, cache_graph=True)
        assert planner.find_shortest_path("D", "F") is None

        bridge = Railway("R5", "五号线", "Line 5")
        bridge.add_edge(make_station("D"), make_station("F"), 10)
        repository.save_railway(bridge)

        assert planner.find_shortest_path("A", "G").total_distance == 17

    def test_repository_without_version_is_never_cached(self, railways):
        class PlainRepository:
            def find_all_railways(self):
                return railways

            def find_station_by_id(self, station_id):
                return None

        planner = RoutePlanner(PlainRepository(), cache_graph=True)
        assert planner.build_graph() is not planner.build_graph()
