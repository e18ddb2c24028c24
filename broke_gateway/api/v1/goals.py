"""/v1/goals - savings goals and their plans"""

import logging
from dataclasses import asdict
from datetime import datetime
from decimal import Decimal
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from broke_gateway.api.v1._ids import parse_id
from broke_gateway.api.v1.schemas import (
    GoalCreate,
    GoalFromScoreRequest,
    GoalPlanResponse,
    GoalResponse,
    GoalUpdate,
    SavingsPlanSchema,
    TimeToGoalSchema,
)
from broke_gateway.api.dependencies import get_now, get_request_id, get_settings
from broke_gateway.config import Settings
from broke_gateway.infrastructure.database.session import get_db
from broke_gateway.infrastructure.database.repositories import GoalRepository
from broke_gateway.domain.models import Goal
from broke_gateway.domain.goals import goal_from_need_score, plan_for_target_date, plan_without_date, weekly_savings
from broke_gateway.domain.need_score import QUESTIONS, coerce_answers
from broke_gateway.infrastructure.observability.metrics import goal_created_counter

router = APIRouter()


def _store_goal(db: Session, goal: Goal, source: str, request_id: str):
    try:
        db_goal = GoalRepository(db).create_goal(goal)
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Failed to store goal: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    goal_created_counter.labels(source=source).inc()
    return db_goal


@router.post("/goals", response_model=GoalResponse, status_code=201)
def create_goal(
    request_body: GoalCreate,
    request: Request,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    goal = Goal(
        title=request_body.title.strip(),
        target_amount=request_body.target_amount,
        target_date=request_body.target_date,
        created_at=now,
        weekly_income=request_body.weekly_income,
        savings_rate=request_body.savings_rate,
    )
    return _store_goal(db, goal, "manual", get_request_id(request))


@router.post("/goals/from-score", response_model=GoalResponse, status_code=201)
def create_goal_from_score(
    request_body: GoalFromScoreRequest,
    request: Request,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
    app_settings: Settings = Depends(get_settings),
):
    """Create a goal named after the item, targeting the price given in the questionnaire"""
    goal = goal_from_need_score(
        request_body.item_name,
        coerce_answers(request_body.answers, QUESTIONS),
        QUESTIONS,
        now,
        weekly_income=Decimal(str(app_settings.default_weekly_income)),
        savings_rate=app_settings.default_savings_rate,
    )
    return _store_goal(db, goal, "need_score", get_request_id(request))


@router.get("/goals", response_model=List[GoalResponse])
def list_goals(db: Session = Depends(get_db)):
    return GoalRepository(db).list_goals()


@router.get("/goals/{goal_id}", response_model=GoalResponse)
def get_goal(goal_id: str, db: Session = Depends(get_db)):
    return GoalRepository(db).get_goal(parse_id(goal_id, "goal"))


@router.put("/goals/{goal_id}", response_model=GoalResponse)
def update_goal(goal_id: str, request_body: GoalUpdate, db: Session = Depends(get_db)):
    """Edit a goal; only fields present in the body change, an explicit null clears the target date"""
    changes = request_body.model_dump(exclude_unset=True)
    changes = {k: v for k, v in changes.items() if v is not None or k == "target_date"}
    db_goal = GoalRepository(db).update_goal(parse_id(goal_id, "goal"), **changes)
    db.commit()
    return db_goal


@router.delete("/goals/{goal_id}", status_code=204)
def delete_goal(goal_id: str, db: Session = Depends(get_db)):
    GoalRepository(db).delete_goal(parse_id(goal_id, "goal"))
    db.commit()
    return Response(status_code=204)


@router.get("/goals/{goal_id}/plan", response_model=GoalPlanResponse)
def get_goal_plan(
    goal_id: str,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """
    Savings plan for a goal.

    With a target date: weekly/monthly amounts needed and the shortfall
    against current savings. Without one: how many weeks current savings
    take to reach the target.
    """
    repo = GoalRepository(db)
    goal = repo.to_domain(repo.get_goal(parse_id(goal_id, "goal")))
    current = weekly_savings(float(goal.weekly_income), goal.savings_rate)

    response = GoalPlanResponse(goal_id=goal.id, weekly_savings=current)
    if goal.target_date is not None:
        plan = plan_for_target_date(goal.target_amount, goal.target_date, now, current)
        if plan is not None:
            response.plan = SavingsPlanSchema(**asdict(plan))
    else:
        eta = plan_without_date(goal.target_amount, current, now)
        if eta is not None:
            response.time_to_goal = TimeToGoalSchema(weeks=eta.weeks, estimated_date=eta.estimated_date)

    return response
