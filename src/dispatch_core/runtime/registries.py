# runtime/registries.py
from collections.abc import Callable

from dispatch_core.app.protocols import DistanceMetric, StationLocator
from dispatch_core.config.models import LocatorHaversineModel, LocatorPlanarModel, LocatorUnion
from dispatch_core.domain.geo.distance import HaversineDistance, PlanarDistance
from dispatch_core.domain.routing.nearest_station import NearestStationLocator

MetricFactory = Callable[[LocatorUnion], DistanceMetric]

_metric_registry: dict[str, MetricFactory] = {}


# ------------------- Distance metric registry ---------------------------


def register_metric(kind: str):
    def deco(fn: MetricFactory):
        _metric_registry[kind] = fn
        return fn

    return deco


def make_metric(cfg: LocatorUnion) -> DistanceMetric:
    try:
        return _metric_registry[cfg.metric](cfg)
    except KeyError:
        raise ValueError(f"Unknown distance metric {cfg.metric!r}") from None


def make_locator(cfg: LocatorUnion) -> StationLocator:
    return NearestStationLocator(metric=make_metric(cfg))


@register_metric("haversine")
def _make_haversine(cfg: LocatorHaversineModel):
    return HaversineDistance(cfg.radius_km)


@register_metric("planar")
def _make_planar(cfg: LocatorPlanarModel):
    return PlanarDistance(cfg.km_per_degree)
