from __future__ import annotations

from uuid import UUID

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse

from agari.config import settings
from agari.judge import Judge, judge
from agari.logging import setup_logging
from agari.repository import Judgment, JudgmentRepository
from agari.schemas import (
    FormItem,
    FuBreakdownItem,
    JudgeRequest,
    JudgeResponse,
    JudgeResult,
    JudgmentGetResponse,
)
from agari.validators import validate_judge_request

setup_logging()
logger = structlog.get_logger()

app = FastAPI(title="Mahjong Hand Judge", version="0.1.0")
repo = JudgmentRepository(ttl_hours=settings.result_ttl_hours)


def to_result(judged: Judge) -> JudgeResult:
    point = judged.point
    return JudgeResult(
        fan=point.fan,
        fu=point.fu,
        yakuman=point.yakuman,
        is_yakuman=point.is_yakuman(),
        value=judged.value(),
        point_label=point.rank_label(),
        is_parent=judged.is_parent,
        machi=judged.agari.machi.value if judged.agari else None,
        decomposition=str(judged.agari) if judged.agari else None,
        forms=[
            FormItem(name=form.name, fan=form.point().fan, yakuman=form.point().yakuman)
            for form in judged.forms
        ],
        fu_breakdown=[FuBreakdownItem(name=item.name, fu=item.fu) for item in judged.fu_items],
        text=str(judged),
    )


@app.get("/")
def root() -> dict[str, str]:
    return {
        "message": "Mahjong Hand Judge API",
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/v1/judge", response_model=JudgeResponse)
def judge_hand(req: JudgeRequest) -> JudgeResponse:
    tilesets = validate_judge_request(req)
    previous = repo.find_same_request(req)
    if previous is not None:
        result = previous.result
        logger.info("judge reused", previous_id=str(previous.id))
    else:
        judged = judge(tilesets)
        result = to_result(judged) if judged else None
    judgment = repo.save(req, result)
    logger.info("judge stored", judge_id=str(judgment.id), won=judgment.won)
    return JudgeResponse(judge_id=judgment.id, status="ok", won=judgment.won, result=result)


def _get_judgment(judge_id: UUID) -> Judgment:
    judgment = repo.get(judge_id)
    if not judgment:
        raise HTTPException(status_code=404, detail="judgment not found or expired")
    return judgment


@app.get("/api/v1/results/{judge_id}", response_model=JudgmentGetResponse)
def get_result(judge_id: UUID) -> JudgmentGetResponse:
    judgment = _get_judgment(judge_id)
    return JudgmentGetResponse(
        judge_id=judgment.id,
        created_at=judgment.created_at,
        expires_at=judgment.expires_at,
        request=judgment.request,
        won=judgment.won,
        result=judgment.result,
    )


@app.get("/api/v1/results/{judge_id}/text", response_class=PlainTextResponse)
def get_result_text(judge_id: UUID) -> str:
    text = _get_judgment(judge_id).text()
    if text is None:
        raise HTTPException(status_code=404, detail="hand does not score")
    return text
