"""Data access layer for expenses, goals and questionnaire history"""

import uuid
from typing import Any, List
from sqlalchemy import func
from sqlalchemy.orm import Session
from broke_gateway.infrastructure.database.models import ExpenseRecord, GoalRecord, NeedScoreHistoryRecord
from broke_gateway.domain.exceptions import ExpenseNotFoundError, GoalNotFoundError
from broke_gateway.domain.history import MAX_HISTORY_ENTRIES, record_result
from broke_gateway.domain.models import Expense, Goal, HistoryEntry


class ExpenseRepository:
    """Repository for expenses"""

    def __init__(self, db: Session):
        self.db = db

    def create_expense(self, expense: Expense) -> ExpenseRecord:
        """Persist a new expense"""
        db_expense = ExpenseRecord(
            title=expense.title,
            amount=expense.amount,
            date=expense.date,
            category=expense.category,
            is_recurring=expense.is_recurring,
        )
        self.db.add(db_expense)
        self.db.flush()  # Get ID without committing
        return db_expense

    def list_expenses(self) -> List[ExpenseRecord]:
        """All expenses, newest first"""
        return self.db.query(ExpenseRecord).order_by(ExpenseRecord.date.desc()).all()

    def get_expense(self, expense_id: uuid.UUID) -> ExpenseRecord:
        db_expense = self.db.query(ExpenseRecord).filter(ExpenseRecord.id == expense_id).first()
        if db_expense is None:
            raise ExpenseNotFoundError(f"Expense {expense_id} not found")
        return db_expense

    def update_expense(self, expense_id: uuid.UUID, **changes: Any) -> ExpenseRecord:
        """Apply field changes to an existing expense"""
        db_expense = self.get_expense(expense_id)
        for name, value in changes.items():
            setattr(db_expense, name, value)
        self.db.flush()
        return db_expense

    def delete_expense(self, expense_id: uuid.UUID) -> None:
        self.db.delete(self.get_expense(expense_id))
        self.db.flush()

    @staticmethod
    def to_domain(db_expense: ExpenseRecord) -> Expense:
        return Expense(
            id=db_expense.id,
            title=db_expense.title,
            amount=db_expense.amount,
            date=db_expense.date,
            category=db_expense.category,
            is_recurring=db_expense.is_recurring,
        )


class GoalRepository:
    """Repository for savings goals"""

    def __init__(self, db: Session):
        self.db = db

    def create_goal(self, goal: Goal) -> GoalRecord:
        """Persist a new savings goal"""
        db_goal = GoalRecord(
            title=goal.title,
            target_amount=goal.target_amount,
            target_date=goal.target_date,
            created_at=goal.created_at,
            weekly_income=goal.weekly_income,
            savings_rate=goal.savings_rate,
        )
        self.db.add(db_goal)
        self.db.flush()
        return db_goal

    def list_goals(self) -> List[GoalRecord]:
        """All goals, oldest first"""
        return self.db.query(GoalRecord).order_by(GoalRecord.created_at.asc()).all()

    def get_goal(self, goal_id: uuid.UUID) -> GoalRecord:
        db_goal = self.db.query(GoalRecord).filter(GoalRecord.id == goal_id).first()
        if db_goal is None:
            raise GoalNotFoundError(f"Goal {goal_id} not found")
        return db_goal

    def update_goal(self, goal_id: uuid.UUID, **changes: Any) -> GoalRecord:
        db_goal = self.get_goal(goal_id)
        for name, value in changes.items():
            setattr(db_goal, name, value)
        self.db.flush()
        return db_goal

    def delete_goal(self, goal_id: uuid.UUID) -> None:
        self.db.delete(self.get_goal(goal_id))
        self.db.flush()

    @staticmethod
    def to_domain(db_goal: GoalRecord) -> Goal:
        return Goal(
            id=db_goal.id,
            title=db_goal.title,
            target_amount=db_goal.target_amount,
            target_date=db_goal.target_date,
            created_at=db_goal.created_at,
            weekly_income=db_goal.weekly_income,
            savings_rate=db_goal.savings_rate,
        )


class HistoryRepository:
    """Repository for the bounded questionnaire history"""

    def __init__(self, db: Session, limit: int = MAX_HISTORY_ENTRIES):
        self.db = db
        self.limit = limit

    def _rows(self) -> List[NeedScoreHistoryRecord]:
        return self.db.query(NeedScoreHistoryRecord).order_by(NeedScoreHistoryRecord.sequence.desc()).all()

    def get_history(self) -> List[HistoryEntry]:
        """Stored results, newest first"""
        return [
            HistoryEntry(
                id=row.id,
                item_name=row.item_name,
                need_percent=row.need_percent,
                want_percent=row.want_percent,
                date=row.date,
            )
            for row in self._rows()
        ]

    def record(self, entry: HistoryEntry) -> List[HistoryEntry]:
        """
        Store a result, applying the repeat-skip and eviction rules.

        Returns the history as it stands afterwards, newest first.
        """
        current = self.get_history()
        updated = record_result(current, entry, limit=self.limit)
        kept_ids = {e.id for e in updated}

        if entry.id in kept_ids:
            last_sequence = self.db.query(func.max(NeedScoreHistoryRecord.sequence)).scalar() or 0
            self.db.add(
                NeedScoreHistoryRecord(
                    id=entry.id,
                    item_name=entry.item_name,
                    need_percent=entry.need_percent,
                    want_percent=entry.want_percent,
                    date=entry.date,
                    sequence=last_sequence + 1,
                )
            )

        for row in self._rows():
            if row.id not in kept_ids:
                self.db.delete(row)

        self.db.flush()
        return updated
