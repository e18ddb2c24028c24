"""Savings plan generation for purchase goals"""

import math
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from broke_gateway.domain.models import Answer, Goal, NumberAnswer, Question, QuestionKind, SavingsPlan, TimeToGoal
from broke_gateway.utils.date_utils import shift_days, start_of_day


def weekly_savings(weekly_income: float, savings_rate: float) -> float:
    """Amount put aside each week; never negative"""
    return max(0.0, weekly_income * savings_rate)


def plan_for_target_date(
    amount: Decimal,
    target_date: datetime,
    today: datetime,
    current_weekly_savings: float = 0.0,
) -> Optional[SavingsPlan]:
    """
    Work out how much to save per week/month to reach amount by target_date.

    Requirements:
    - Whole calendar days between today and the target date
    - Partial weeks/months count as whole ones, at least one of each
    - extra_weekly is what must be added on top of current savings

    Returns None when the target date is today or in the past.

    Example:
        $300 due in 20 days → 3 weeks ($100/week), 1 month ($300/month)
    """
    day_count = (start_of_day(target_date) - start_of_day(today)).days
    if day_count <= 0:
        return None

    weeks = max(1, math.ceil(day_count / 7))
    months = max(1, math.ceil(day_count / 30))

    amount_value = float(amount)
    required_weekly = amount_value / weeks
    required_monthly = amount_value / months
    extra_weekly = max(0.0, required_weekly - current_weekly_savings)

    return SavingsPlan(
        weeks=weeks,
        months=months,
        required_weekly=required_weekly,
        required_monthly=required_monthly,
        extra_weekly=extra_weekly,
        on_track=extra_weekly == 0,
    )


def plan_without_date(amount: Decimal, current_weekly_savings: float, today: datetime) -> Optional[TimeToGoal]:
    """Weeks until current savings cover amount; None when nothing is being saved"""
    if current_weekly_savings <= 0:
        return None

    weeks = max(1, math.ceil(float(amount) / current_weekly_savings))
    return TimeToGoal(weeks=weeks, estimated_date=shift_days(today, weeks * 7))


def goal_from_need_score(
    item_name: str,
    answers: Sequence[Answer],
    questions: Sequence[Question],
    now: datetime,
    weekly_income: Decimal = Decimal("0"),
    savings_rate: float = 0.2,
) -> Goal:
    """
    Prefill a savings goal from a questionnaire.

    The target amount is the answer given to the price question, or 0 when
    that question was not answered. Negative prices are floored at 0.
    """
    target_amount = Decimal("0")
    for question, answer in zip(questions, answers):
        if question.kind == QuestionKind.NUMBER and isinstance(answer, NumberAnswer) and math.isfinite(answer.value):
            target_amount = max(Decimal("0"), Decimal(str(answer.value)).quantize(Decimal("0.01")))
            break

    return Goal(
        title=item_name.strip(),
        target_amount=target_amount,
        created_at=now,
        weekly_income=weekly_income,
        savings_rate=savings_rate,
    )
