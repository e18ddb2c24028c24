"""SQLAlchemy ORM models for expenses, goals and questionnaire history"""

import uuid
from sqlalchemy import Column, String, Boolean, Float, DateTime, Integer, Numeric, Text, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class ExpenseRecord(Base):
    """Stored expense; recurring ones repeat monthly from their date"""

    __tablename__ = "expense"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(Text, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    date = Column(DateTime, nullable=False, index=True)
    category = Column(String(64), nullable=False, default="General")
    is_recurring = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class GoalRecord(Base):
    """Savings goal for a planned purchase"""

    __tablename__ = "savings_goal"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(Text, nullable=False)
    target_amount = Column(Numeric(12, 2), nullable=False)
    target_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False)
    weekly_income = Column(Numeric(12, 2), nullable=False, default=0)
    savings_rate = Column(Float, nullable=False, default=0.2)


class NeedScoreHistoryRecord(Base):
    """One past questionnaire result"""

    __tablename__ = "need_score_history"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    item_name = Column(Text, nullable=False)
    need_percent = Column(Integer, nullable=False)
    want_percent = Column(Integer, nullable=False)
    date = Column(DateTime, nullable=False, index=True)
    sequence = Column(Integer, nullable=False, index=True)  # insertion order, newest is highest
