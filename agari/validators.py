from __future__ import annotations

from fastapi import HTTPException

from agari.config import settings
from agari.context import Context, Direction
from agari.form import LUCKY_KINDS, FormKind
from agari.schemas import JudgeRequest
from agari.tilesets import Tilesets


def build_context(req: JudgeRequest) -> Context:
    for kind in req.lucky_forms:
        if kind not in LUCKY_KINDS:
            raise HTTPException(status_code=422, detail=f"{kind.value} cannot be declared")
    if len(set(req.lucky_forms)) != len(req.lucky_forms):
        raise HTTPException(status_code=422, detail="lucky_forms contains duplicates")

    name = req.player_name if req.player_name is not None else settings.default_player_name
    return Context(
        place=req.place,
        player=req.player,
        lizhi=req.lizhi,
        lucky_forms=tuple(req.lucky_forms),
        player_name=name,
    )


def validate_lucky_forms(tilesets: Tilesets) -> None:
    declared = set(tilesets.context.lucky_forms)
    is_parent = tilesets.context.player == Direction.EAST

    if FormKind.HAIDI_MOYUE in declared and not tilesets.is_zimo:
        raise HTTPException(status_code=422, detail="海底摸月 cannot be declared on ron")
    if FormKind.HEDI_LAOYU in declared and tilesets.is_zimo:
        raise HTTPException(status_code=422, detail="河底撈魚 cannot be declared on tsumo")
    if FormKind.LINGSHANG_KAIHUA in declared and not tilesets.is_zimo:
        raise HTTPException(status_code=422, detail="嶺上開花 cannot be declared on ron")
    if FormKind.QIANGGANG in declared and tilesets.is_zimo:
        raise HTTPException(status_code=422, detail="槍槓 cannot be declared on tsumo")
    if {FormKind.TIANHE, FormKind.DIHE} <= declared:
        raise HTTPException(status_code=422, detail="天和 and 地和 cannot both be declared")
    if declared & {FormKind.TIANHE, FormKind.DIHE} and not tilesets.is_zimo:
        raise HTTPException(status_code=422, detail="天和/地和 require tsumo")
    if FormKind.TIANHE in declared and not is_parent:
        raise HTTPException(status_code=422, detail="天和 requires the east seat")
    if FormKind.DIHE in declared and is_parent:
        raise HTTPException(status_code=422, detail="地和 requires a non-east seat")


def validate_judge_request(req: JudgeRequest) -> Tilesets:
    context = build_context(req)
    try:
        tilesets = Tilesets.parse(req.tilesets, context)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    validate_lucky_forms(tilesets)
    return tilesets
