"""/v1/need-score - want/need questionnaire"""

import time
import logging
from datetime import datetime
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from broke_gateway.api.v1.schemas import (
    HistoryItem,
    HistoryResponse,
    NeedScoreRequest,
    NeedScoreResponse,
    QuestionSchema,
)
from broke_gateway.api.dependencies import get_now, get_request_id, get_settings
from broke_gateway.config import Settings
from broke_gateway.infrastructure.database.session import get_db
from broke_gateway.infrastructure.database.repositories import HistoryRepository
from broke_gateway.domain.history import dump_history
from broke_gateway.domain.models import HistoryEntry
from broke_gateway.domain.need_score import QUESTIONS, coerce_answers, score_answers, verdict_message
from broke_gateway.infrastructure.observability.metrics import record_need_score
from broke_gateway.infrastructure.observability.logging import log_need_score

router = APIRouter()


@router.get("/need-score/questions", response_model=List[QuestionSchema])
def list_questions():
    """Questions in the order answers must be given"""
    return [
        QuestionSchema(index=i, key=q.key, text=q.text, kind=q.kind.value, choices=list(q.choices))
        for i, q in enumerate(QUESTIONS)
    ]


@router.post("/need-score", response_model=NeedScoreResponse)
def create_need_score(
    request_body: NeedScoreRequest,
    request: Request,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
    app_settings: Settings = Depends(get_settings),
):
    """
    Score a purchase as a want or a need.

    Flow:
    1. Convert raw answers to the type each question expects
    2. Score the answered questions against the full question set
    3. Store the result in the bounded history
    """
    start_time = time.time()
    request_id = get_request_id(request)

    answers = coerce_answers(request_body.answers, QUESTIONS)
    result = score_answers(answers, QUESTIONS)

    try:
        HistoryRepository(db, limit=app_settings.history_limit).record(
            HistoryEntry(
                item_name=request_body.item_name,
                need_percent=result.need_percent,
                want_percent=result.want_percent,
                date=now,
            )
        )
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Failed to store questionnaire history: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_need_score(result.verdict)
    log_need_score(request_id, request_body.item_name, result.need_percent, result.verdict, len(answers), duration_ms)

    return NeedScoreResponse(
        item_name=request_body.item_name,
        need_percent=result.need_percent,
        want_percent=result.want_percent,
        verdict=result.verdict,
        message=verdict_message(request_body.item_name, result.verdict),
        total_score=result.total_score,
        max_score=result.max_score,
        answered=len(answers),
    )


@router.get("/need-score/history", response_model=HistoryResponse)
def get_history(
    db: Session = Depends(get_db),
    app_settings: Settings = Depends(get_settings),
):
    """Past results, newest first"""
    entries = HistoryRepository(db, limit=app_settings.history_limit).get_history()
    return HistoryResponse(
        entries=[
            HistoryItem(
                id=e.id,
                item_name=e.item_name,
                need_percent=e.need_percent,
                want_percent=e.want_percent,
                date=e.date,
            )
            for e in entries
        ]
    )


@router.get("/need-score/history/export")
def export_history(
    db: Session = Depends(get_db),
    app_settings: Settings = Depends(get_settings),
):
    """History as a flat JSON list with camelCase keys, newest first"""
    entries = HistoryRepository(db, limit=app_settings.history_limit).get_history()
    return Response(content=dump_history(entries), media_type="application/json")
