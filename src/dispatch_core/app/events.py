# app/events.py
from dataclasses import dataclass

from dispatch_core.domain.entities.incident import Incident
from dispatch_core.domain.routing.road_graph import RouteResult


@dataclass(frozen=True)
class DispatchEvent:
    seq: int  # publication order within the session


@dataclass(frozen=True)
class IncidentReported(DispatchEvent):
    incident: Incident
    route: RouteResult
    distance_km: float | None = None  # None when the station was chosen by the caller


# Adapter-requested station-to-station paths
@dataclass(frozen=True)
class RouteComputed(DispatchEvent):
    route: RouteResult
    requested_destination: int | None = None
