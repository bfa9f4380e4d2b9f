# main.py
import argparse
import sys

from dispatch_core.app.build import build
from dispatch_core.config.networks import default_config
from dispatch_core.io.recorder import JsonlSink, Recorder


def run(lat: float, lon: float, severity: str, *, debug: bool = False) -> int:
    app = build(default_config(log={"level": "INFO", "debug": debug}), recorder=Recorder(JsonlSink()))
    c = app.coordinator

    result = c.report_incident(lat, lon, severity)
    x, y = app.viewport.to_screen(lat, lon)
    station = c.station(result.incident.responding_station_id)
    print(
        f"incident #{result.incident.id} ({result.incident.severity.label}) -> "
        f"{station.name} [station {station.id}], route {list(result.route.route)}, "
        f"screen ({x}, {y})"
    )

    # Replay the same report over the wire format the backend speaks
    for line in (
        "PING",
        f"INCIDENT|{station.id}|{int(result.incident.severity)}|{lat:.4f}|{lon:.4f}",
        "GET_INCIDENTS",
    ):
        print(f"{line} => {app.protocol.handle(line)}")
    return 0


if __name__ == "__main__":
    p = argparse.ArgumentParser(description="Report one incident against the built-in network.")
    p.add_argument("lat", type=float, nargs="?", default=33.7100)
    p.add_argument("lon", type=float, nargs="?", default=73.0750)
    p.add_argument("--severity", default="Critical", help="1-3 or Low/Medium/Critical")
    p.add_argument("--debug", action="store_true")
    args = p.parse_args()
    sys.exit(run(args.lat, args.lon, args.severity, debug=args.debug))
