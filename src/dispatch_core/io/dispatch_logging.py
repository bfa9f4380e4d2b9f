# io/dispatch_logging.py
import json
import logging
import sys

from dispatch_core.app.events import IncidentReported, RouteComputed
from dispatch_core.app.hooks import NoopHooks
from dispatch_core.io.recorder import Recorder


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, default=str)


def default_json_logger(name="dispatch_core", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


class DispatchLogging(NoopHooks):
    """
    One place to shape and emit structured logs for dispatch operations,
    and to forward the resulting events to an optional Recorder.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug = run_id, debug
        self.recorder = recorder
        self.log = logger or default_json_logger(level="DEBUG" if debug else level)

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    # --------------------------------------------------------

    def report_start(self, *, latitude, longitude, severity):
        if self.debug:
            self._emit("DEBUG", "report_start", lat=latitude, lon=longitude, severity=severity)

    def incident_reported(self, ev: IncidentReported):
        inc = ev.incident
        self._emit(
            "INFO",
            "incident_reported",
            seq=ev.seq,
            incident_id=inc.id,
            station_id=inc.responding_station_id,
            severity=inc.severity.label,
            lat=round(inc.latitude, 4),
            lon=round(inc.longitude, 4),
            distance_km=ev.distance_km,
            route=list(ev.route.route),
        )
        if self.recorder:
            self.recorder.emit(ev)

    def route_computed(self, ev: RouteComputed):
        self._emit(
            "INFO",
            "route_computed",
            seq=ev.seq,
            source=ev.route.source,
            destination=ev.route.destination,
            distance=ev.route.total_distance,
            route=list(ev.route.route),
        )
        if self.recorder:
            self.recorder.emit(ev)

    def error(self, *, op: str, exc: BaseException, **extra):
        self._emit("ERROR", "dispatch_error", op=op, error=type(exc).__name__, detail=str(exc), **extra)
