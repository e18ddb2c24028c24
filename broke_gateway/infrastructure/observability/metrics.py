"""Prometheus metrics for questionnaire verdicts, expense activity and request latency"""

from prometheus_client import Counter, Histogram

# Questionnaire metrics
need_score_counter = Counter(
    "broke_need_score_total",
    "Want/need questionnaires scored",
    ["verdict"],  # NEED | BORDERLINE | WANT
)

# Expense metrics
expense_created_counter = Counter(
    "broke_expenses_created_total",
    "Expenses recorded",
    ["recurring"],  # true | false
)

occurrences_histogram = Histogram(
    "broke_occurrences_expanded",
    "Occurrences produced per expansion",
    buckets=[0, 10, 50, 100, 500, 1000, 5000],
)

# Goal metrics
goal_created_counter = Counter(
    "broke_goals_created_total",
    "Savings goals created",
    ["source"],  # manual | need_score
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_need_score(verdict: str) -> None:
    """Record one questionnaire verdict"""
    need_score_counter.labels(verdict=verdict).inc()


def record_expense_created(is_recurring: bool) -> None:
    expense_created_counter.labels(recurring="true" if is_recurring else "false").inc()
