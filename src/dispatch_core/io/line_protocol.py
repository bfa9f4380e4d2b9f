"""
Pipe-delimited line protocol spoken between the dashboard and the dispatch backend.

Requests (one per line):
    INCIDENT|<stationId>|<severity>|<lat>|<lon>
    DIJKSTRA|<from>|<to>
    PING
    GET_INCIDENTS
    STATIONS

Responses:
    INCIDENT_ADDED|<count>    ROUTE|a,b,c    PONG
    INCIDENTS|<count>         STATIONS|<n>|name,lat,lon|...
    ERROR|<reason>

Only framing and mapping live here; opening sockets is the caller's job.
"""

import logging
from dataclasses import dataclass

from dispatch_core.domain.entities.incident import Severity
from dispatch_core.domain.errors import DispatchError, ProtocolError

log = logging.getLogger("dispatch_core.protocol")

SEP = "|"


@dataclass(frozen=True)
class IncidentMessage:
    station_id: int
    severity: int
    lat: float
    lon: float


@dataclass(frozen=True)
class RouteRequest:
    from_id: int
    to_id: int


@dataclass(frozen=True)
class Ping:
    pass


@dataclass(frozen=True)
class GetIncidents:
    pass


@dataclass(frozen=True)
class ListStations:
    pass


Message = IncidentMessage | RouteRequest | Ping | GetIncidents | ListStations


# ------------- Encoding (client side) --------------------


def format_incident(station_id: int, severity: int, lat: float, lon: float) -> str:
    return f"INCIDENT|{station_id}|{int(severity)}|{lat:.4f}|{lon:.4f}"


def format_route_request(from_id: int, to_id: int) -> str:
    return f"DIJKSTRA|{from_id}|{to_id}"


def format_ping() -> str:
    return "PING"


# ------------- Decoding (server side) --------------------


def _ints(parts: list[str], what: str) -> list[int]:
    try:
        return [int(p) for p in parts]
    except ValueError:
        raise ProtocolError(f"{what}: expected integers, got {parts}") from None


def parse_message(line: str) -> Message:
    parts = [p.strip() for p in line.strip("\r\n").strip().split(SEP)]
    cmd, args = parts[0].upper(), parts[1:]
    if cmd == "INCIDENT":
        if len(args) != 4:
            raise ProtocolError(f"INCIDENT expects 4 fields, got {len(args)}")
        station_id, severity = _ints(args[:2], "INCIDENT")
        try:
            lat, lon = float(args[2]), float(args[3])
        except ValueError:
            raise ProtocolError(f"INCIDENT: bad coordinates {args[2:]}") from None
        return IncidentMessage(station_id, severity, lat, lon)
    if cmd == "DIJKSTRA":
        if len(args) != 2:
            raise ProtocolError(f"DIJKSTRA expects 2 fields, got {len(args)}")
        return RouteRequest(*_ints(args, "DIJKSTRA"))
    if args:
        raise ProtocolError(f"{cmd} takes no fields")
    if cmd == "PING":
        return Ping()
    if cmd == "GET_INCIDENTS":
        return GetIncidents()
    if cmd == "STATIONS":
        return ListStations()
    raise ProtocolError(f"unknown command {parts[0]!r}")


class LineProtocolHandler:
    """Maps one request line onto the coordinator and renders the reply line."""

    def __init__(self, coordinator):
        self.coordinator = coordinator

    def handle(self, line: str) -> str:
        try:
            msg = parse_message(line)
            return self.dispatch(msg)
        except DispatchError as exc:
            log.warning("request %r failed: %s", line.strip(), exc)
            return f"ERROR{SEP}{type(exc).__name__}"

    def dispatch(self, msg: Message) -> str:
        c = self.coordinator
        if isinstance(msg, IncidentMessage):
            res = c.record_assigned_incident(
                msg.station_id, Severity.parse(msg.severity), msg.lat, msg.lon
            )
            return f"INCIDENT_ADDED{SEP}{res.incident.id}"
        if isinstance(msg, RouteRequest):
            r = c.route_between(msg.from_id, msg.to_id)
            return "ROUTE" + SEP + ",".join(str(v) for v in r.route)
        if isinstance(msg, Ping):
            return "PONG"
        if isinstance(msg, GetIncidents):
            return f"INCIDENTS{SEP}{c.incident_count}"
        if isinstance(msg, ListStations):
            rows = [f"{s.name},{s.latitude:.4f},{s.longitude:.4f}" for s in c.stations]
            return SEP.join(["STATIONS", str(len(rows)), *rows])
        raise TypeError(msg)
