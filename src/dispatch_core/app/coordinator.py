# app/coordinator.py
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from dispatch_core.app.channel import EventChannel
from dispatch_core.app.events import DispatchEvent, IncidentReported, RouteComputed
from dispatch_core.app.hooks import DispatchHooks, NoopHooks
from dispatch_core.app.protocols import RoutePlanner, StationLocator
from dispatch_core.domain.entities.geography import GeoPoint, Station
from dispatch_core.domain.entities.incident import Incident, IncidentStatus, Severity
from dispatch_core.domain.errors import (
    ConfigurationError,
    EmptyGraphError,
    InvalidVertexError,
    RoutingFailedError,
    UnreachableError,
)
from dispatch_core.domain.routing.nearest_station import NearestStationLocator
from dispatch_core.domain.routing.road_graph import RouteResult
from dispatch_core.domain.state import DispatchState


@dataclass(frozen=True)
class DispatchResult:
    incident: Incident
    route: RouteResult


class DispatchCoordinator:
    """
    Turns incident reports into station assignments.

    The station registry is read-only after construction. Incident appends,
    id allocation and event publication are serialized by a single lock so
    concurrent reports never interleave.
    """

    def __init__(
        self,
        stations: Sequence[Station],
        graph: RoutePlanner,
        *,
        locator: StationLocator | None = None,
        hooks: DispatchHooks | None = None,
        channel: EventChannel | None = None,
    ):
        if len(stations) != graph.vertex_count:
            raise ConfigurationError(
                f"{len(stations)} stations but road graph has {graph.vertex_count} vertices"
            )
        self._state = DispatchState(stations=tuple(stations))
        self._graph = graph
        self._locator = locator or NearestStationLocator()
        self._hooks = hooks or NoopHooks()
        self._channel = channel or EventChannel(hooks=self._hooks)
        self._lock = threading.RLock()  # handlers may read accessors while publishing

    # --------------- Read accessors -----------------------------

    @property
    def stations(self) -> tuple[Station, ...]:
        return self._state.stations

    @property
    def incidents(self) -> tuple[Incident, ...]:
        with self._lock:
            return tuple(self._state.incidents)

    @property
    def incident_count(self) -> int:
        with self._lock:
            return len(self._state.incidents)

    def station(self, station_id: int) -> Station:
        s = self._state.station(station_id)
        if s is None:
            raise InvalidVertexError(station_id, len(self._state.stations))
        return s

    def severity_counts(self) -> dict[Severity, int]:
        with self._lock:
            return self._state.severity_counts()

    def subscribe(
        self, etype: type[DispatchEvent], handler: Callable[[DispatchEvent], None]
    ) -> Callable[[], None]:
        return self._channel.on(etype, handler)

    # --------------- Operations ---------------------------------

    def report_incident(self, lat: float, lon: float, severity) -> DispatchResult:
        self._hooks.report_start(latitude=lat, longitude=lon, severity=severity)
        sev = self._validated(severity, op="report_incident")
        try:
            nearest = self._locator.find_nearest(GeoPoint(lat, lon), self._state.stations)
        except Exception as exc:
            self._hooks.error(op="report_incident", exc=exc)
            raise
        return self._dispatch(nearest.station.id, sev, lat, lon, distance_km=nearest.distance_km)

    def record_assigned_incident(
        self, station_id: int, severity, lat: float, lon: float
    ) -> DispatchResult:
        """Record an incident whose responding station was chosen upstream."""
        sev = self._validated(severity, op="record_assigned_incident")
        self.station(station_id)
        return self._dispatch(station_id, sev, lat, lon, distance_km=None)

    def compute_route(self, station_id: int) -> RouteResult:
        return self._routed(lambda: self._graph.compute_route(station_id), op="compute_route")

    def route_between(self, from_id: int, to_id: int) -> RouteResult:
        route = self._routed(
            lambda: self._graph.path_between(from_id, to_id), op="route_between"
        )
        with self._lock:
            ev = RouteComputed(seq=self._channel.next_seq(), route=route, requested_destination=to_id)
            self._hooks.route_computed(ev)
            self._channel.publish(ev)
        return route

    # --------------- Helpers ------------------------------------

    def _validated(self, severity, *, op: str) -> Severity:
        try:
            return Severity.parse(severity)
        except Exception as exc:
            self._hooks.error(op=op, exc=exc)
            raise

    def _routed(self, fn: Callable[[], RouteResult], *, op: str) -> RouteResult:
        try:
            return fn()
        except (InvalidVertexError, EmptyGraphError, UnreachableError) as exc:
            self._hooks.error(op=op, exc=exc)
            raise RoutingFailedError(str(exc)) from exc

    def _dispatch(
        self, station_id: int, sev: Severity, lat: float, lon: float, *, distance_km
    ) -> DispatchResult:
        # Route before taking the lock: routing failures must leave the log untouched.
        route = self._routed(lambda: self._graph.compute_route(station_id), op="dispatch")
        with self._lock:
            incident = Incident(
                id=self._state.next_incident_id(),
                responding_station_id=station_id,
                severity=sev,
                latitude=lat,
                longitude=lon,
                status=IncidentStatus.PENDING,
            ).responding()
            self._state.append(incident)
            ev = IncidentReported(
                seq=self._channel.next_seq(), incident=incident, route=route, distance_km=distance_km
            )
            self._hooks.incident_reported(ev)
            self._channel.publish(ev)
        return DispatchResult(incident, route)
