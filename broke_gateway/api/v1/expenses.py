"""/v1/expenses - expense records and their expanded occurrences"""

import logging
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from broke_gateway.api.v1._ids import parse_id
from broke_gateway.api.v1.schemas import (
    ExpenseCreate,
    ExpenseResponse,
    ExpenseUpdate,
    OccurrenceSchema,
    OccurrencesResponse,
)
from broke_gateway.api.dependencies import get_now, get_request_id, get_settings
from broke_gateway.config import Settings
from broke_gateway.infrastructure.database.session import get_db
from broke_gateway.infrastructure.database.repositories import ExpenseRepository
from broke_gateway.domain.models import Expense
from broke_gateway.domain.recurrence import expand_occurrences, expansion_cutoff
from broke_gateway.infrastructure.observability.metrics import occurrences_histogram, record_expense_created
from broke_gateway.utils.date_utils import to_local_naive

router = APIRouter()


@router.post("/expenses", response_model=ExpenseResponse, status_code=201)
def create_expense(
    request_body: ExpenseCreate,
    request: Request,
    db: Session = Depends(get_db),
):
    """Record an expense; recurring ones repeat monthly from their date"""
    request_id = get_request_id(request)
    try:
        db_expense = ExpenseRepository(db).create_expense(
            Expense(
                title=request_body.title.strip(),
                amount=request_body.amount,
                date=request_body.date,
                category=request_body.category.strip(),
                is_recurring=request_body.is_recurring,
            )
        )
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Failed to store expense: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_expense_created(request_body.is_recurring)
    return db_expense


@router.get("/expenses", response_model=List[ExpenseResponse])
def list_expenses(db: Session = Depends(get_db)):
    """All expenses, newest first"""
    return ExpenseRepository(db).list_expenses()


@router.get("/expenses/occurrences", response_model=OccurrencesResponse)
def list_occurrences(
    through: Optional[datetime] = Query(None, description="Expand recurring expenses up to this moment"),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
    app_settings: Settings = Depends(get_settings),
):
    """
    Expenses expanded into dated occurrences.

    Without `through`, recurring expenses are expanded up to the later of
    now and the newest expense date.
    """
    repo = ExpenseRepository(db)
    expenses = [repo.to_domain(e) for e in repo.list_expenses()]

    cutoff = to_local_naive(through, app_settings.timezone) if through else expansion_cutoff(expenses, now)
    occurrences = expand_occurrences(expenses, through=cutoff)
    occurrences_histogram.observe(len(occurrences))

    return OccurrencesResponse(
        through=cutoff,
        occurrences=[
            OccurrenceSchema(
                date=o.date,
                amount=o.amount,
                category=o.category,
                title=o.title,
                is_recurring=o.is_recurring,
            )
            for o in sorted(occurrences, key=lambda o: o.date)
        ],
    )


@router.get("/expenses/{expense_id}", response_model=ExpenseResponse)
def get_expense(expense_id: str, db: Session = Depends(get_db)):
    return ExpenseRepository(db).get_expense(parse_id(expense_id, "expense"))


@router.put("/expenses/{expense_id}", response_model=ExpenseResponse)
def update_expense(expense_id: str, request_body: ExpenseUpdate, db: Session = Depends(get_db)):
    """Edit an expense; only fields present in the body change"""
    changes = request_body.model_dump(exclude_unset=True, exclude_none=True)
    db_expense = ExpenseRepository(db).update_expense(parse_id(expense_id, "expense"), **changes)
    db.commit()
    return db_expense


@router.delete("/expenses/{expense_id}", status_code=204)
def delete_expense(expense_id: str, db: Session = Depends(get_db)):
    ExpenseRepository(db).delete_expense(parse_id(expense_id, "expense"))
    db.commit()
    return Response(status_code=204)
