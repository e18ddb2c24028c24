"""GET /v1/insights - spending rollup for the insights screen"""

import time
from datetime import datetime
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from broke_gateway.api.v1.schemas import DailyPointSchema, InsightsResponse
from broke_gateway.api.dependencies import get_now, get_request_id
from broke_gateway.infrastructure.database.session import get_db
from broke_gateway.infrastructure.database.repositories import ExpenseRepository
from broke_gateway.domain.insights import daily_totals, summarize
from broke_gateway.domain.recurrence import expand_occurrences
from broke_gateway.infrastructure.observability.metrics import occurrences_histogram
from broke_gateway.infrastructure.observability.logging import log_insights

router = APIRouter()


@router.get("/insights", response_model=InsightsResponse)
def get_insights(
    request: Request,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """
    Summarize spending as of now.

    Flow:
    1. Load every stored expense
    2. Expand recurring expenses into monthly occurrences
    3. Bucket occurrences by day and build the rollup
    """
    start_time = time.time()

    repo = ExpenseRepository(db)
    expenses = [repo.to_domain(e) for e in repo.list_expenses()]
    occurrences = expand_occurrences(expenses, now=now)
    summary = summarize(occurrences, now)
    days = daily_totals(occurrences)

    duration_ms = (time.time() - start_time) * 1000
    occurrences_histogram.observe(len(occurrences))
    log_insights(get_request_id(request), len(expenses), len(occurrences), summary.trend_percent, duration_ms)

    biggest_day = None
    if summary.biggest_day is not None:
        biggest_day = DailyPointSchema(date=summary.biggest_day.date, total=summary.biggest_day.total)

    return InsightsResponse(
        total_all_time=summary.total_all_time,
        last30_total=summary.last30_total,
        average_daily_last30=summary.average_daily_last30,
        top_category=summary.top_category,
        top_category_total=summary.top_category_total,
        biggest_day=biggest_day,
        last7_total=summary.last7_total,
        previous7_total=summary.previous7_total,
        trend_percent=summary.trend_percent,
        daily_totals=[DailyPointSchema(date=d.date, total=d.total) for d in days],
    )
