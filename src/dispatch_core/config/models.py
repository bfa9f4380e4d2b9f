from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from dispatch_core.domain.entities.geography import RoadSegment, Station
from dispatch_core.domain.geo.projection import MAX_LATITUDE, MAX_ZOOM, MIN_ZOOM


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


# ----------------- NETWORK ---------------------


class StationModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    id: int = Field(ge=0)
    name: str
    lat: float = Field(ge=-MAX_LATITUDE, le=MAX_LATITUDE)
    lon: float = Field(ge=-180.0, le=180.0)

    def to_station(self) -> Station:
        return Station(self.id, self.name, self.lat, self.lon)


class RoadModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    a: int = Field(ge=0)
    b: int = Field(ge=0)
    name: str = ""
    weight: float
    width: float | None = None

    @field_validator("weight")
    @classmethod
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if not v > 0:
            raise ValueError(f"{info.field_name} must be > 0, got {v}")
        return v

    def to_segment(self) -> RoadSegment:
        return RoadSegment(self.a, self.b, self.name, self.weight, self.width)


class NetworkModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    stations: list[StationModel]
    roads: list[RoadModel] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_ids(self):
        ids = [s.id for s in self.stations]
        if ids != list(range(len(ids))):
            raise ValueError(f"station ids must be 0..{len(ids) - 1} in order, got {ids}")
        n = len(ids)
        for r in self.roads:
            if r.a >= n or r.b >= n:
                raise ValueError(f"road {r.name or (r.a, r.b)!r} references unknown station")
        return self


# ----------------- LOCATOR ---------------------


class LocatorHaversineModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    metric: Literal["haversine"] = "haversine"
    radius_km: float = Field(default=6371.0, gt=0)


class LocatorPlanarModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    metric: Literal["planar"] = "planar"
    km_per_degree: float = Field(default=111.0, gt=0)


LocatorUnion = Annotated[
    LocatorHaversineModel | LocatorPlanarModel, Field(discriminator="metric")
]


# ----------------- VIEWPORT ---------------------


class ViewportModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    center: tuple[float, float] = (33.6844, 73.0479)
    zoom: float = Field(default=13.0, ge=MIN_ZOOM, le=MAX_ZOOM)
    width: int = Field(default=800, gt=0)
    height: int = Field(default=600, gt=0)


# ------------------------------------------------------------------


class DispatchModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "dispatch"
    run_id: str = "local"
    network: NetworkModel
    locator: LocatorUnion = Field(default_factory=LocatorHaversineModel)
    viewport: ViewportModel = Field(default_factory=ViewportModel)
    log: LogModel = LogModel()
