from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from dispatch_core.domain.entities.geography import GeoPoint, Station


# ------------- Geometry --------------------
@runtime_checkable
class DistanceMetric(Protocol):
    """
    Ground distance in kilometres between (lat1, lon1) and (lat2, lon2).
    Arguments may be scalars or numpy arrays (broadcasting), degrees WGS84.
    Only the ranking matters to the locator; the value is reported back to callers.
    """

    name: str

    def km(self, lat1, lon1, lat2, lon2): ...


# ------------- Routing ---------------------
@runtime_checkable
class StationLocator(Protocol):
    def find_nearest(self, point: GeoPoint, stations: Sequence[Station]): ...


@runtime_checkable
class RoutePlanner(Protocol):
    """
    Responsibilities:
      • Shortest-path distances from a station over the road network.
      • The representative response route from a station.
      • A point-to-point path between two stations.
    """

    @property
    def vertex_count(self) -> int: ...
    def shortest_paths(self, source: int): ...
    def compute_route(self, source: int): ...
    def path_between(self, source: int, destination: int): ...


# ------------- Observability ---------------
@runtime_checkable
class DispatchHooks(Protocol):
    def report_start(self, *, latitude, longitude, severity): ...
    def incident_reported(self, ev): ...
    def route_computed(self, ev): ...
    def error(self, *, op: str, exc: BaseException, **kw): ...
