from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, conint
from pydantic.alias_generators import to_camel

TileCode = str
HandString = str
WindIndex = conint(ge=0, le=3)


class RuleSet(BaseModel):
    red_tiles_enabled: bool = True
    open_tanyao: bool = True
    base_wall_size: conint(ge=0) = 69

    model_config = ConfigDict(frozen=True)


class AnalysisContext(BaseModel):
    hand: HandString
    round_wind: WindIndex | None = None
    seat_wind: WindIndex | None = None
    indicator_tiles: list[TileCode] = Field(default_factory=list)
    red_tiles_enabled: bool | None = None
    turn: conint(ge=1) | None = None
    discard_history: str | None = None

    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)


class CurrentEvaluation(BaseModel):
    shanten: conint(ge=-1)
    value: float


class DiscardCandidate(BaseModel):
    tile: TileCode
    shanten: conint(ge=-1)
    value: float
    waits: list[TileCode] = Field(default_factory=list)
    waits_remaining: conint(ge=0) = 0
    is_recommended: bool = False


class EvaluationResult(BaseModel):
    current: CurrentEvaluation
    candidates: list[DiscardCandidate] = Field(default_factory=list)
    recommended: TileCode | None = None
    dora: list[TileCode] = Field(default_factory=list)
    wall_remaining: conint(ge=0)


class DoraRequest(BaseModel):
    indicator_tiles: list[TileCode]

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DoraResponse(BaseModel):
    dora: list[TileCode]
