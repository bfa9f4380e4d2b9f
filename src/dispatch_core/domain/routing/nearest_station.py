from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from dispatch_core.app.protocols import DistanceMetric
from dispatch_core.domain.entities.geography import GeoPoint, Station
from dispatch_core.domain.errors import NoStationsAvailableError
from dispatch_core.domain.geo.distance import HaversineDistance


@dataclass(frozen=True)
class NearestStation:
    station: Station
    distance_km: float


class NearestStationLocator:
    def __init__(self, metric: DistanceMetric | None = None):
        self.metric = metric or HaversineDistance()

    def find_nearest(self, point: GeoPoint, stations: Sequence[Station]) -> NearestStation:
        if not stations:
            raise NoStationsAvailableError("station registry is empty")
        ordered = sorted(stations, key=lambda s: s.id)
        lats = np.fromiter((s.latitude for s in ordered), dtype=float, count=len(ordered))
        lons = np.fromiter((s.longitude for s in ordered), dtype=float, count=len(ordered))
        d = np.asarray(self.metric.km(point.latitude, point.longitude, lats, lons), dtype=float)
        # argmin returns the first minimum, i.e. the lowest station id
        i = int(np.argmin(d))
        return NearestStation(ordered[i], float(d[i]))
