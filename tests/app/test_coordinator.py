# tests/app/test_coordinator.py
import threading
from dataclasses import FrozenInstanceError

import pytest

from dispatch_core.app.coordinator import DispatchCoordinator
from dispatch_core.app.events import IncidentReported, RouteComputed
from dispatch_core.domain.entities.geography import RoadSegment, Station
from dispatch_core.domain.entities.incident import IncidentStatus, Severity
from dispatch_core.domain.errors import (
    ConfigurationError,
    EmptyGraphError,
    InvalidSeverityError,
    InvalidVertexError,
    NoStationsAvailableError,
    RoutingFailedError,
)
from dispatch_core.domain.geo.distance import PlanarDistance
from dispatch_core.domain.routing.nearest_station import NearestStationLocator
from dispatch_core.domain.routing.road_graph import RoadGraph

STATIONS = [
    Station(0, "Main Station", 33.6844, 73.0479),
    Station(1, "Blue Area", 33.7182, 73.0605),
    Station(2, "G-6 Sector", 33.7100, 73.0800),
    Station(3, "Margalla Road", 33.7400, 73.0900),
    Station(4, "Airport Road", 33.6167, 73.0992),
]
ROADS = [
    RoadSegment(u, v, f"r{u}{v}", w)
    for u, v, w in [
        (0, 1, 6), (0, 3, 8), (1, 2, 5), (1, 4, 12), (2, 3, 7),
        (3, 4, 15), (0, 2, 9), (0, 4, 18), (1, 3, 10), (2, 4, 16),
    ]
]  # fmt: skip


@pytest.fixture
def coord() -> DispatchCoordinator:
    return DispatchCoordinator(STATIONS, RoadGraph.from_segments(5, ROADS))


# ---------- report_incident


def test_report_assigns_nearest_station_and_routes(coord: DispatchCoordinator):
    res = coord.report_incident(33.7100, 73.0750, 3)
    inc = res.incident
    assert inc.id == 1
    assert inc.responding_station_id == 2
    assert inc.severity is Severity.CRITICAL
    assert inc.status is IncidentStatus.RESPONDING
    assert (inc.latitude, inc.longitude) == (33.7100, 73.0750)
    assert res.route.source == 2
    assert res.route.route == coord.compute_route(2).route
    assert coord.incidents == (inc,)


def test_route_from_main_station(coord: DispatchCoordinator):
    res = coord.report_incident(33.6844, 73.0479, "Low")
    assert res.incident.responding_station_id == 0
    assert res.route.route == (0, 4)
    assert list(res.route.distances) == [0, 6, 9, 8, 18]


def test_incident_ids_are_sequential(coord: DispatchCoordinator):
    ids = [coord.report_incident(33.70, 73.07, s).incident.id for s in (1, 2, 3)]
    assert ids == [1, 2, 3]
    assert coord.incident_count == 3
    assert coord.severity_counts() == {Severity.LOW: 1, Severity.MEDIUM: 1, Severity.CRITICAL: 1}


@pytest.mark.parametrize("bad", [0, 4, -1, "Severe", None, 2.5])
def test_invalid_severity_does_not_mutate(coord: DispatchCoordinator, bad):
    seen = []
    coord.subscribe(IncidentReported, seen.append)
    with pytest.raises(InvalidSeverityError):
        coord.report_incident(33.7100, 73.0750, bad)
    assert coord.incidents == ()
    assert seen == []


def test_incidents_snapshot_is_read_only(coord: DispatchCoordinator):
    coord.report_incident(33.7100, 73.0750, 1)
    snap = coord.incidents
    coord.report_incident(33.7100, 73.0750, 2)
    assert len(snap) == 1 and coord.incident_count == 2
    assert isinstance(snap, tuple)


def test_planar_locator_agrees(coord: DispatchCoordinator):
    c = DispatchCoordinator(
        STATIONS,
        RoadGraph.from_segments(5, ROADS),
        locator=NearestStationLocator(PlanarDistance()),
    )
    assert c.report_incident(33.7100, 73.0750, 2).incident.responding_station_id == 2


# ---------- failures


def test_empty_registry_propagates():
    c = DispatchCoordinator([], RoadGraph(0))
    with pytest.raises(NoStationsAvailableError):
        c.report_incident(33.7, 73.0, 1)
    assert c.incidents == ()


def test_registry_graph_mismatch_is_configuration_error():
    with pytest.raises(ConfigurationError):
        DispatchCoordinator(STATIONS, RoadGraph(4))


def test_non_dense_station_ids_are_configuration_error():
    bad = [Station(0, "a", 0, 0), Station(2, "b", 0, 1)]
    with pytest.raises(ConfigurationError):
        DispatchCoordinator(bad, RoadGraph(2))


class _BrokenGraph:
    vertex_count = 5

    def compute_route(self, source):
        raise EmptyGraphError("boom")

    def path_between(self, source, destination):
        raise InvalidVertexError(destination, 5)


def test_graph_errors_surface_as_routing_failed():
    c = DispatchCoordinator(STATIONS, _BrokenGraph())
    with pytest.raises(RoutingFailedError) as info:
        c.report_incident(33.7100, 73.0750, 3)
    assert isinstance(info.value.__cause__, EmptyGraphError)
    assert c.incidents == ()
    with pytest.raises(RoutingFailedError):
        c.compute_route(0)


def test_route_between_wraps_bad_vertex(coord: DispatchCoordinator):
    with pytest.raises(RoutingFailedError):
        coord.route_between(0, 9)


# ---------- assigned incidents & routes


def test_record_assigned_incident(coord: DispatchCoordinator):
    res = coord.record_assigned_incident(3, 2, 33.7401, 73.0899)
    assert res.incident.responding_station_id == 3
    assert res.route.source == 3
    with pytest.raises(InvalidVertexError):
        coord.record_assigned_incident(7, 2, 33.7, 73.0)
    assert coord.incident_count == 1


def test_route_between_publishes(coord: DispatchCoordinator):
    seen = []
    coord.subscribe(RouteComputed, seen.append)
    r = coord.route_between(4, 2)
    assert r.route == (4, 2)
    assert len(seen) == 1 and seen[0].route is r and seen[0].requested_destination == 2


# ---------- observer


def test_subscribers_see_reports_in_order(coord: DispatchCoordinator):
    seen: list[IncidentReported] = []
    unsubscribe = coord.subscribe(IncidentReported, seen.append)
    coord.report_incident(33.7100, 73.0750, 1)
    coord.report_incident(33.6167, 73.0992, 3)
    assert [e.incident.id for e in seen] == [1, 2]
    assert seen[0].seq < seen[1].seq
    assert seen[1].incident.responding_station_id == 4
    assert seen[0].distance_km == pytest.approx(0.4626, abs=0.005)

    unsubscribe()
    coord.report_incident(33.7100, 73.0750, 1)
    assert len(seen) == 2


def test_handler_can_read_coordinator_while_publishing(coord: DispatchCoordinator):
    counts = []
    coord.subscribe(IncidentReported, lambda ev: counts.append(coord.incident_count))
    coord.report_incident(33.7100, 73.0750, 1)
    assert counts == [1]


def test_failing_subscriber_does_not_block_later_ones(coord: DispatchCoordinator):
    seen: list[IncidentReported] = []

    def boom(ev):
        raise RuntimeError("handler failed")

    coord.subscribe(IncidentReported, boom)
    coord.subscribe(IncidentReported, seen.append)
    res = coord.report_incident(33.7100, 73.0750, 3)

    assert res.incident.id == 1 and res.route.source == 2
    assert [e.incident for e in seen] == [res.incident]
    assert coord.incident_count == 1


def test_snapshot_incidents_cannot_be_rewritten(coord: DispatchCoordinator):
    coord.report_incident(33.7100, 73.0750, 1)
    inc = coord.incidents[0]
    with pytest.raises(FrozenInstanceError):
        inc.severity = Severity.CRITICAL
    assert coord.incidents[0].severity is Severity.LOW


# ---------- concurrency


def test_concurrent_reports_do_not_interleave(coord: DispatchCoordinator):
    n_threads, per_thread = 8, 25
    barrier = threading.Barrier(n_threads)

    def worker():
        barrier.wait()
        for _ in range(per_thread):
            coord.report_incident(33.7100, 73.0750, 2)

    threads = [threading.Thread(target=worker) for _ in range(n_threads)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    incidents = coord.incidents
    assert len(incidents) == n_threads * per_thread
    assert [i.id for i in incidents] == list(range(1, n_threads * per_thread + 1))
