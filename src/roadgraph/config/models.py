from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Coord = tuple[float, float]  # (lat, lon)


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False  # emit sampled node_visited records
    sample_every: int = 1

    @field_validator("sample_every")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("sample_every must be >= 1")
        return v


# ----------------- HEURISTICS ---------------------


class HeuristicEuclideanModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["euclidean"] = "euclidean"


class HeuristicHaversineModel(BaseModel):
    """Great-circle km; use when road lengths are kilometres."""

    model_config = ConfigDict(extra="forbid")
    kind: Literal["haversine"] = "haversine"


class HeuristicZeroModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["zero"] = "zero"


HeuristicUnion = Annotated[
    HeuristicEuclideanModel | HeuristicHaversineModel | HeuristicZeroModel,
    Field(discriminator="kind"),
]


class SearchModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    algorithm: Literal["bfs", "dijkstra", "astar"] = "astar"
    heuristic: HeuristicUnion = Field(default_factory=HeuristicEuclideanModel)
    snap: bool = True  # snap free points to the nearest intersection before routing


# ----------------- ROAD MAP ---------------------


class RoadModel(BaseModel):
    """
    One road record as handed over by a map loader. Values are not range-checked
    here: the graph skips bad roads and the build step reports them.
    """

    model_config = ConfigDict(extra="forbid")
    start: Coord
    end: Coord
    name: str | None
    category: str | None
    length: float | None
    shape: list[Coord] = Field(default_factory=list)


class RoadMapModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    intersections: list[Coord] = Field(default_factory=list)
    roads: list[RoadModel] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_intersections(self):
        seen: set[Coord] = set()
        dups = []
        for c in self.intersections:
            if c in seen:
                dups.append(c)
            seen.add(c)
        if dups:
            raise ValueError(f"duplicate intersections: {dups}")
        return self


# ------------------------------------------------------------------


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    run_id: str = "local"
    log: LogModel = LogModel()
    search: SearchModel = Field(default_factory=SearchModel)
    road_map: RoadMapModel = Field(default_factory=RoadMapModel)
