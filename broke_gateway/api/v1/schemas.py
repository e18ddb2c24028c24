"""Pydantic schemas for API request/response validation"""

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, List, Optional
import uuid

from broke_gateway.config import settings
from broke_gateway.utils.amounts import require_amount
from broke_gateway.utils.date_utils import to_local_naive


def _amount(value: Any) -> Any:
    return None if value is None else require_amount(value)


def _local(value: Optional[datetime]) -> Optional[datetime]:
    return None if value is None else to_local_naive(value, settings.timezone)


# Accepts numbers or text like "$1,234.50"
Amount = Annotated[Decimal, BeforeValidator(_amount)]

# Aware datetimes are converted to wall-clock time in the configured timezone
LocalDatetime = Annotated[datetime, AfterValidator(_local)]


# Expenses


class ExpenseCreate(BaseModel):
    """Request body for POST /v1/expenses"""

    title: str = Field(..., min_length=1, description="What the money was spent on")
    amount: Amount = Field(..., gt=0, description="Amount, number or text such as '$1,234.50'")
    date: LocalDatetime
    category: str = Field("General", min_length=1)
    is_recurring: bool = False


class ExpenseUpdate(BaseModel):
    """Request body for PUT /v1/expenses/{expense_id}; omitted fields stay unchanged"""

    title: Optional[Annotated[str, Field(min_length=1)]] = None
    amount: Optional[Annotated[Amount, Field(gt=0)]] = None
    date: Optional[LocalDatetime] = None
    category: Optional[Annotated[str, Field(min_length=1)]] = None
    is_recurring: Optional[bool] = None


class ExpenseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    amount: Decimal
    date: datetime
    category: str
    is_recurring: bool


class OccurrenceSchema(BaseModel):
    date: datetime
    amount: float
    category: str
    title: str
    is_recurring: bool


class OccurrencesResponse(BaseModel):
    """Response for GET /v1/expenses/occurrences"""

    through: datetime
    occurrences: List[OccurrenceSchema]


# Insights


class DailyPointSchema(BaseModel):
    date: datetime
    total: float


class InsightsResponse(BaseModel):
    """Response for GET /v1/insights"""

    total_all_time: float
    last30_total: float
    average_daily_last30: float
    top_category: Optional[str] = None
    top_category_total: float
    biggest_day: Optional[DailyPointSchema] = None
    last7_total: float
    previous7_total: float
    trend_percent: Optional[float] = None
    daily_totals: List[DailyPointSchema]


# Want/need questionnaire


class QuestionSchema(BaseModel):
    index: int
    key: str
    text: str
    kind: str
    choices: List[str] = []


class NeedScoreRequest(BaseModel):
    """Request body for POST /v1/need-score"""

    item_name: str = Field(..., min_length=1, description="Item being considered")
    answers: List[Any] = Field(default_factory=list, description="Answers in question order")

    @field_validator("item_name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("item_name must not be blank")
        return value


class NeedScoreResponse(BaseModel):
    """Response for POST /v1/need-score"""

    item_name: str
    need_percent: int
    want_percent: int
    verdict: str
    message: str
    total_score: int
    max_score: int
    answered: int


class HistoryItem(BaseModel):
    """Single past questionnaire result"""

    id: uuid.UUID
    item_name: str
    need_percent: int
    want_percent: int
    date: datetime


class HistoryResponse(BaseModel):
    """Response for GET /v1/need-score/history"""

    entries: List[HistoryItem]


# Goals


class GoalCreate(BaseModel):
    """Request body for POST /v1/goals"""

    title: str = Field(..., min_length=1)
    target_amount: Amount = Field(..., gt=0)
    target_date: Optional[LocalDatetime] = None
    weekly_income: Amount = Field(default_factory=lambda: Decimal(str(settings.default_weekly_income)), ge=0)
    savings_rate: float = Field(default_factory=lambda: settings.default_savings_rate, ge=0, le=0.8)


class GoalUpdate(BaseModel):
    """Request body for PUT /v1/goals/{goal_id}; omitted fields stay unchanged"""

    title: Optional[Annotated[str, Field(min_length=1)]] = None
    target_amount: Optional[Annotated[Amount, Field(gt=0)]] = None
    target_date: Optional[LocalDatetime] = None
    weekly_income: Optional[Annotated[Amount, Field(ge=0)]] = None
    savings_rate: Optional[Annotated[float, Field(ge=0, le=0.8)]] = None


class GoalFromScoreRequest(BaseModel):
    """Request body for POST /v1/goals/from-score"""

    item_name: str = Field(..., min_length=1)
    answers: List[Any] = Field(default_factory=list)

    @field_validator("item_name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("item_name must not be blank")
        return value


class GoalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    target_amount: Decimal
    target_date: Optional[datetime] = None
    created_at: datetime
    weekly_income: Decimal
    savings_rate: float


class SavingsPlanSchema(BaseModel):
    weeks: int
    months: int
    required_weekly: float
    required_monthly: float
    extra_weekly: float
    on_track: bool


class TimeToGoalSchema(BaseModel):
    weeks: int
    estimated_date: datetime


class GoalPlanResponse(BaseModel):
    """Response for GET /v1/goals/{goal_id}/plan"""

    goal_id: uuid.UUID
    weekly_savings: float
    plan: Optional[SavingsPlanSchema] = None
    time_to_goal: Optional[TimeToGoalSchema] = None


# Settings


class SettingsResponse(BaseModel):
    """Response for GET /v1/settings"""

    accent_choice: str
    sound_enabled: bool
    haptics_enabled: bool
    default_weekly_income: float
    default_savings_rate: float
    timezone: str
