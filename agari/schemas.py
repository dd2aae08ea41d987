from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from agari.context import Direction, Lizhi
from agari.form import FormKind


class JudgeRequest(BaseModel):
    tilesets: str = Field(description="e.g. '1p1p1p2p2p2p3p3p3p5p ポン4p4p4p ツモ5P ドラ3p'")
    place: Direction = Direction.EAST
    player: Direction = Direction.EAST
    lizhi: Lizhi = Lizhi.NONE
    lucky_forms: list[FormKind] = Field(default_factory=list)
    player_name: str | None = None

    @field_validator("place", "player", mode="before")
    @classmethod
    def parse_direction(cls, value: object) -> object:
        # accepts 東 as well as East or EAST
        if isinstance(value, str):
            return Direction.parse(value)
        return value


class FormItem(BaseModel):
    name: str
    fan: int
    yakuman: int = 0


class FuBreakdownItem(BaseModel):
    name: str
    fu: int


class JudgeResult(BaseModel):
    fan: int
    fu: int
    yakuman: int = 0
    is_yakuman: bool = False
    value: int
    point_label: str | None = None
    is_parent: bool
    machi: str | None = None
    decomposition: str | None = None
    forms: list[FormItem] = Field(default_factory=list)
    fu_breakdown: list[FuBreakdownItem] = Field(default_factory=list)
    text: str


class JudgeResponse(BaseModel):
    judge_id: UUID
    status: Literal["ok"]
    won: bool
    result: JudgeResult | None = None


class JudgmentGetResponse(BaseModel):
    judge_id: UUID
    created_at: datetime
    expires_at: datetime
    request: JudgeRequest
    won: bool
    result: JudgeResult | None = None
