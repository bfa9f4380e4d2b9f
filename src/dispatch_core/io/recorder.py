# io/recorder.py
import json
import logging
import sys
from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Protocol

log = logging.getLogger("dispatch_core.recorder")


def _jsonable(o):
    if isinstance(o, Enum):
        return o.value
    if isinstance(o, tuple):
        return list(o)
    raise TypeError(f"{type(o).__name__} is not JSON serializable")


def to_record(ev) -> dict:
    rec = asdict(ev) if is_dataclass(ev) else dict(ev)
    rec["name"] = type(ev).__name__
    return rec


class Sink(Protocol):
    def write(self, ev) -> None: ...


class JsonlSink:
    def __init__(self, fp=sys.stdout):
        self.fp = fp

    def write(self, ev) -> None:
        self.fp.write(json.dumps(to_record(ev), default=_jsonable) + "\n")


class MemorySink:
    def __init__(self):
        self.events: list = []

    def write(self, ev) -> None:
        self.events.append(ev)


class Recorder:
    """Fans dispatch events out to sinks; a failing sink is logged and skipped."""

    def __init__(self, *sinks: Sink):
        self.sinks = sinks or (JsonlSink(),)

    def emit(self, ev) -> None:
        for s in self.sinks:
            try:
                s.write(ev)
            except Exception:
                log.exception("sink %s failed on %s", type(s).__name__, type(ev).__name__)
