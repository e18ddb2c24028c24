"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Callable, Optional, Tuple, Union
import uuid


@dataclass
class Expense:
    """Stored expense record; amount stays an exact Decimal"""

    title: str
    amount: Decimal
    date: datetime
    category: str = "General"
    is_recurring: bool = False
    id: Optional[uuid.UUID] = None


@dataclass(frozen=True)
class Occurrence:
    """One dated cash-flow instance derived from an expense"""

    date: datetime
    amount: float
    category: str
    title: str
    is_recurring: bool


@dataclass(frozen=True)
class DailyPoint:
    """Total spent on one calendar day"""

    date: datetime  # start of day
    total: float


@dataclass(frozen=True)
class InsightsSummary:
    """Rollup of spending used by the insights screen"""

    total_all_time: float
    last30_total: float
    average_daily_last30: float
    top_category: Optional[str]
    top_category_total: float
    biggest_day: Optional[DailyPoint]
    last7_total: float
    previous7_total: float
    trend_percent: Optional[float]


# Questionnaire answers: a tagged union instead of untyped values


@dataclass(frozen=True)
class BoolAnswer:
    value: bool


@dataclass(frozen=True)
class NumberAnswer:
    value: float


@dataclass(frozen=True)
class ChoiceAnswer:
    index: int


Answer = Union[BoolAnswer, NumberAnswer, ChoiceAnswer]


class QuestionKind(str, Enum):
    BOOLEAN = "boolean"
    NUMBER = "number"
    CHOICE = "choice"


@dataclass(frozen=True)
class Question:
    """Questionnaire entry with its scoring rule"""

    key: str
    text: str
    kind: QuestionKind
    score: Callable[[Answer], int]
    choices: Tuple[str, ...] = ()


@dataclass(frozen=True)
class NeedScore:
    """Output of the want/need questionnaire"""

    need_percent: int
    want_percent: int
    verdict: str  # "NEED" | "BORDERLINE" | "WANT"
    total_score: int
    max_score: int


@dataclass(frozen=True)
class HistoryEntry:
    """Past questionnaire result kept in the bounded history"""

    item_name: str
    need_percent: int
    want_percent: int
    date: datetime
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass
class Goal:
    """Savings goal record"""

    title: str
    target_amount: Decimal
    target_date: Optional[datetime] = None
    created_at: datetime = field(default_factory=datetime.now)
    weekly_income: Decimal = Decimal("0")
    savings_rate: float = 0.2
    id: Optional[uuid.UUID] = None


@dataclass(frozen=True)
class SavingsPlan:
    """Weekly/monthly amounts needed to reach a goal by its target date"""

    weeks: int
    months: int
    required_weekly: float
    required_monthly: float
    extra_weekly: float
    on_track: bool


@dataclass(frozen=True)
class TimeToGoal:
    """How long current savings take to reach a goal with no target date"""

    weeks: int
    estimated_date: datetime
