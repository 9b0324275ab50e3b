import os
from math import isfinite
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from roadnav.geo.projection import K0, ROOT_LAT, ROOT_LON


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False  # per-query records
    sample_every: int = 1


class ProjectionModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    ref_lon: float = ROOT_LON
    ref_lat: float = ROOT_LAT
    k0: float = K0

    @field_validator("ref_lon")
    @classmethod
    def _lon_range(cls, v: float) -> float:
        if not (-180.0 <= v <= 180.0):
            raise ValueError("ref_lon must be within [-180, 180]")
        return v

    @field_validator("ref_lat")
    @classmethod
    def _lat_range(cls, v: float) -> float:
        # the flattening degenerates at the poles
        if not (-90.0 < v < 90.0):
            raise ValueError("ref_lat must be within (-90, 90)")
        return v

    @field_validator("k0")
    @classmethod
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if not isfinite(v) or v <= 0:
            raise ValueError(f"{info.field_name} must be a positive finite number")
        return v


# ----------------- GRAPH SOURCES ---------------------


class GraphByPath(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["path"] = "path"
    file: str
    fmt: Literal["osm", "pickle"] = "osm"
    must_exist: bool = True

    @field_validator("file")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


class VertexModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    id: int
    lon: float
    lat: float
    name: str | None = None  # registers a searchable location


class EdgeModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    u: int
    v: int
    way: str | None = None


class GraphInline(BaseModel):
    """Small networks spelled out in the config (fixtures, demos)."""

    model_config = ConfigDict(extra="forbid")
    by: Literal["inline"] = "inline"
    vertices: list[VertexModel] = Field(default_factory=list)
    edges: list[EdgeModel] = Field(default_factory=list)

    @model_validator(mode="after")
    def _edges_reference_vertices(self):
        ids = [v.id for v in self.vertices]
        known = set(ids)
        if len(known) != len(ids):
            raise ValueError("vertex ids must be unique")
        for e in self.edges:
            missing = {e.u, e.v} - known
            if missing:
                raise ValueError(f"edge ({e.u}, {e.v}) references unknown vertex {sorted(missing)}")
        return self


GraphRef = Annotated[GraphByPath | GraphInline, Field(discriminator="by")]


# ----------------- ROUTERS ---------------------


class RouterAStarModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["astar"] = "astar"
    skip_predecessor: bool = True


class RouterDijkstraModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["dijkstra"] = "dijkstra"
    skip_predecessor: bool = True


RouterUnion = Annotated[RouterAStarModel | RouterDijkstraModel, Field(discriminator="kind")]


# ------------------------------------------------------------------


class AppModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "roadnav"
    projection: ProjectionModel = Field(default_factory=ProjectionModel)
    graph: GraphRef = Field(default_factory=GraphInline)
    router: RouterUnion = Field(default_factory=RouterAStarModel)
    log: LogModel = LogModel()
