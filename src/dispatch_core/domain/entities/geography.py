from dataclasses import dataclass


# Core geographic types shared by routing and projection
@dataclass(frozen=True)
class GeoPoint:
    latitude: float  # decimal degrees, WGS84
    longitude: float


@dataclass(frozen=True)
class Station:
    id: int  # dense, equals the station's vertex in the road graph
    name: str
    latitude: float
    longitude: float


@dataclass(frozen=True)
class RoadSegment:
    from_station_id: int
    to_station_id: int
    name: str
    distance_weight: float
    visual_width: float | None = None  # rendering hint, passed through untouched
