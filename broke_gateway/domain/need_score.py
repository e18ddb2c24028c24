"""Want/need questionnaire scoring - core business logic for purchase decisions"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Dict, List, Sequence

from broke_gateway.domain.exceptions import InvalidQuestionError
from broke_gateway.domain.models import (
    Answer,
    BoolAnswer,
    ChoiceAnswer,
    NeedScore,
    NumberAnswer,
    Question,
    QuestionKind,
)
from broke_gateway.utils.amounts import parse_amount

logger = logging.getLogger(__name__)

NEED = "NEED"
BORDERLINE = "BORDERLINE"
WANT = "WANT"


def _yes_no(yes_points: int, no_points: int) -> Callable[[Answer], int]:
    # Anything other than an explicit "yes" scores as "no"
    def score(answer: Answer) -> int:
        return yes_points if answer == BoolAnswer(True) else no_points

    return score


def _price_points(answer: Answer) -> int:
    if not isinstance(answer, NumberAnswer):
        return 0
    if answer.value < 50:
        return 6
    if answer.value < 200:
        return 3
    return 0


def _choice_points(points_by_index: Dict[int, int]) -> Callable[[Answer], int]:
    def score(answer: Answer) -> int:
        if not isinstance(answer, ChoiceAnswer):
            return 0
        return points_by_index.get(answer.index, 0)

    return score


# Answers are matched to these by position, so order is part of the contract.
QUESTIONS: List[Question] = [
    Question(
        key="essential",
        text="Is this item essential for your daily life?",
        kind=QuestionKind.BOOLEAN,
        score=_yes_no(10, 0),
    ),
    Question(
        key="health_or_safety",
        text="Will not having it negatively impact your health or safety?",
        kind=QuestionKind.BOOLEAN,
        score=_yes_no(10, 0),
    ),
    Question(
        key="price",
        text="What is the price of this item? (in your currency)",
        kind=QuestionKind.NUMBER,
        score=_price_points,
    ),
    Question(
        key="affordable",
        text="Can you afford it right now without debt or sacrificing essentials?",
        kind=QuestionKind.BOOLEAN,
        score=_yes_no(8, 0),
    ),
    Question(
        key="usage_duration",
        text="How long will you realistically use it?",
        kind=QuestionKind.CHOICE,
        score=_choice_points({1: 4, 2: 8}),
        choices=("<1 month", "1-6 months", ">6 months"),
    ),
    Question(
        key="cheaper_alternative",
        text="Is there a cheaper or better alternative?",
        kind=QuestionKind.BOOLEAN,
        score=_yes_no(0, 5),
    ),
    Question(
        key="already_own_similar",
        text="Do you already own something similar?",
        kind=QuestionKind.BOOLEAN,
        score=_yes_no(0, 5),
    ),
    Question(
        key="pay_double",
        text="Would you buy this if it cost twice as much?",
        kind=QuestionKind.BOOLEAN,
        score=_yes_no(5, 0),
    ),
    Question(
        key="important_goal",
        text="Does it help you achieve an important goal?",
        kind=QuestionKind.BOOLEAN,
        score=_yes_no(9, 0),
    ),
    Question(
        key="loses_value",
        text="Will it lose most of its value quickly?",
        kind=QuestionKind.BOOLEAN,
        score=_yes_no(0, 5),
    ),
    Question(
        key="impulse",
        text="Is this an impulse purchase?",
        kind=QuestionKind.BOOLEAN,
        score=_yes_no(0, 4),
    ),
]


def best_answer(question: Question) -> Answer:
    """
    The answer counted toward the maximum score.

    - boolean: "yes", including inverted questions where "yes" scores 0
    - number:  0.0, the lowest price
    - choice:  the last option
    """
    if question.kind == QuestionKind.BOOLEAN:
        return BoolAnswer(True)
    if question.kind == QuestionKind.NUMBER:
        return NumberAnswer(0.0)
    return ChoiceAnswer(max(len(question.choices) - 1, 0))


def max_score(questions: Sequence[Question]) -> int:
    """Sum of best-answer scores over every question, answered or not"""
    return sum(q.score(best_answer(q)) for q in questions)


def classify(need_percent: int) -> str:
    """
    Map a need percentage to a verdict.

    Verdicts are short codes; verdict_message supplies the wording shown
    to users (BORDERLINE reads as "borderline, consider carefully").

    Bands (boundaries fall to the lower tier):
    - 71-100: NEED
    - 41-70:  BORDERLINE
    - 0-40:   WANT
    """
    if need_percent > 70:
        return NEED
    elif need_percent > 40:
        return BORDERLINE
    else:
        return WANT


def verdict_message(item_name: str, verdict: str) -> str:
    """Human-readable explanation of a verdict"""
    if verdict == NEED:
        return f"{item_name} is quite likely a NEED. This purchase seems justified."
    if verdict == BORDERLINE:
        return f"{item_name} is borderline, somewhere between a want and a need. Consider carefully."
    return f"{item_name} is more of a WANT. Think twice before buying."


def score_answers(answers: Sequence[Answer], questions: Sequence[Question] = QUESTIONS) -> NeedScore:
    """
    Score a (possibly partial) set of answers.

    Answers are paired with questions by position. Extra answers, or
    questions left unanswered, are ignored for the total; the maximum is
    always taken over the full question list.

    "No" on an inverted question earns points that the maximum does not
    count, so the total can exceed it; need% is clamped to [0, 100].

    need% is rounded half up; with no attainable points it is 0.
    """
    total = sum(q.score(a) for q, a in zip(questions, answers))
    best = max_score(questions)

    need_percent = 0
    if best > 0:
        ratio = Decimal(total) * 100 / Decimal(best)
        need_percent = int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        need_percent = min(100, max(0, need_percent))

    return NeedScore(
        need_percent=need_percent,
        want_percent=100 - need_percent,
        verdict=classify(need_percent),
        total_score=total,
        max_score=best,
    )


_PRICE_SAMPLES = (-1.0, 0.0, 49.99, 50.0, 199.99, 200.0, 1_000_000.0)


def validate_questions(questions: Sequence[Question]) -> None:
    """
    Check each question's scoring against its best answer.

    Yes/no questions where "no" outscores "yes" are inverted; they are
    logged and the overflow is absorbed by the clamp in score_answers.
    Number and choice questions that can beat their best answer, and
    choice questions without options, raise InvalidQuestionError.
    """
    for question in questions:
        ceiling = question.score(best_answer(question))

        if question.kind == QuestionKind.BOOLEAN:
            no_points = question.score(BoolAnswer(False))
            if no_points > ceiling:
                logger.info(
                    "Inverted yes/no question",
                    extra={"question": question.key, "yes_points": ceiling, "no_points": no_points},
                )
            continue

        if question.kind == QuestionKind.NUMBER:
            candidates: List[Answer] = [NumberAnswer(p) for p in _PRICE_SAMPLES]
        else:
            if not question.choices:
                raise InvalidQuestionError(f"Choice question '{question.key}' has no options")
            candidates = [ChoiceAnswer(i) for i in range(len(question.choices))]

        for candidate in candidates:
            if question.score(candidate) > ceiling:
                raise InvalidQuestionError(
                    f"Question '{question.key}' scores {question.score(candidate)} for {candidate}, above its best {ceiling}"
                )


def coerce_number(raw: Any) -> float:
    """Numeric answer from loosely typed input; anything unparseable is 0"""
    if isinstance(raw, bool) or raw is None:
        return 0.0
    if isinstance(raw, (int, float)):
        return float(raw)
    parsed = parse_amount(str(raw))
    return float(parsed) if parsed is not None else 0.0


def coerce_answer(question: Question, raw: Any) -> Answer:
    """Convert a raw JSON answer into the answer type the question expects"""
    if question.kind == QuestionKind.BOOLEAN:
        if isinstance(raw, str):
            return BoolAnswer(raw.strip().lower() in ("yes", "y", "true", "1"))
        return BoolAnswer(raw is True)
    if question.kind == QuestionKind.NUMBER:
        return NumberAnswer(coerce_number(raw))

    if isinstance(raw, int) and not isinstance(raw, bool):
        return ChoiceAnswer(raw)
    if isinstance(raw, str) and raw.strip().isdigit():
        return ChoiceAnswer(int(raw.strip()))
    if isinstance(raw, str) and raw in question.choices:
        return ChoiceAnswer(question.choices.index(raw))
    return ChoiceAnswer(0)


def coerce_answers(raw_answers: Sequence[Any], questions: Sequence[Question] = QUESTIONS) -> List[Answer]:
    """Positional conversion; answers beyond the question list are dropped"""
    return [coerce_answer(q, raw) for q, raw in zip(questions, raw_answers)]


validate_questions(QUESTIONS)
