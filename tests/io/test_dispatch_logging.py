import io
import json
import logging

import pytest

from dispatch_core.app.build import build
from dispatch_core.app.events import IncidentReported
from dispatch_core.config.networks import default_config
from dispatch_core.domain.errors import InvalidSeverityError
from dispatch_core.io.dispatch_logging import DispatchLogging, _JsonFormatter
from dispatch_core.io.recorder import JsonlSink, MemorySink, Recorder


class _Capture(logging.Handler):
    def __init__(self):
        super().__init__()
        self.lines: list[dict] = []
        self.setFormatter(_JsonFormatter())

    def emit(self, record):
        self.lines.append(json.loads(self.format(record)))


def _logger(name):
    lg = logging.getLogger(name)
    lg.handlers.clear()
    lg.propagate = False
    lg.setLevel(logging.DEBUG)
    cap = _Capture()
    lg.addHandler(cap)
    return lg, cap


def test_incident_reported_is_logged_and_recorded():
    lg, cap = _logger("test.dispatch.report")
    mem = MemorySink()
    hooks = DispatchLogging(run_id="r-7", logger=lg, recorder=Recorder(mem))
    app = build(default_config(run_id="r-7"), hooks=hooks)

    app.coordinator.report_incident(33.7100, 73.0750, 3)

    rec = next(r for r in cap.lines if r["msg"] == "incident_reported")
    assert rec["run_id"] == "r-7" and rec["level"] == "INFO"
    assert rec["station_id"] == 2 and rec["severity"] == "Critical"
    assert rec["route"] == [2, 4]
    assert len(mem.events) == 1 and isinstance(mem.events[0], IncidentReported)


def test_errors_are_logged():
    lg, cap = _logger("test.dispatch.errors")
    app = build(default_config(), hooks=DispatchLogging(logger=lg))
    with pytest.raises(InvalidSeverityError):
        app.coordinator.report_incident(33.7, 73.0, 9)
    rec = cap.lines[-1]
    assert rec["msg"] == "dispatch_error" and rec["level"] == "ERROR"
    assert rec["error"] == "InvalidSeverityError" and rec["op"] == "report_incident"


def test_debug_emits_report_start():
    lg, cap = _logger("test.dispatch.debug")
    hooks = DispatchLogging(logger=lg, debug=True)
    hooks.report_start(latitude=1.0, longitude=2.0, severity=1)
    assert cap.lines[0]["msg"] == "report_start" and cap.lines[0]["lat"] == 1.0


def test_jsonl_sink_serializes_events():
    buf = io.StringIO()
    app = build(default_config(), use_logging=False, recorder=None)
    app.coordinator.subscribe(IncidentReported, Recorder(JsonlSink(buf)).emit)
    app.coordinator.report_incident(33.6167, 73.0992, "Medium")
    row = json.loads(buf.getvalue().strip())
    assert row["name"] == "IncidentReported"
    assert row["incident"]["status"] == "responding"
    assert row["incident"]["severity"] == 2
    assert row["route"]["source"] == 4


def test_failing_sink_does_not_break_recording():
    class Boom:
        def write(self, ev):
            raise OSError("disk full")

    mem = MemorySink()
    Recorder(Boom(), mem).emit({"x": 1})
    assert mem.events == [{"x": 1}]


def test_failing_subscriber_is_logged_and_skipped():
    lg, cap = _logger("test.dispatch.publish")
    app = build(default_config(), hooks=DispatchLogging(logger=lg))
    seen = []

    def boom(ev):
        raise RuntimeError("subscriber down")

    app.coordinator.subscribe(IncidentReported, boom)
    app.coordinator.subscribe(IncidentReported, seen.append)
    app.coordinator.report_incident(33.7100, 73.0750, 3)

    assert len(seen) == 1
    rec = next(r for r in cap.lines if r["msg"] == "dispatch_error")
    assert rec["op"] == "publish" and rec["error"] == "RuntimeError"
