"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from broke_gateway.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_need_score(
    request_id: str,
    item_name: str,
    need_percent: int,
    verdict: str,
    answered: int,
    duration_ms: float,
) -> None:
    """Log structured questionnaire outcome"""
    logging.info(
        "Need score computed",
        extra={
            "request_id": request_id,
            "step": "need_score_complete",
            "item_name": item_name,
            "need_percent": need_percent,
            "verdict": verdict,
            "answered": answered,
            "duration_ms": duration_ms,
        },
    )


def log_insights(
    request_id: str,
    expense_count: int,
    occurrence_count: int,
    trend_percent: Optional[float],
    duration_ms: float,
) -> None:
    """Log structured insights computation"""
    logging.info(
        "Insights computed",
        extra={
            "request_id": request_id,
            "step": "insights_complete",
            "expense_count": expense_count,
            "occurrence_count": occurrence_count,
            "trend_percent": trend_percent,
            "duration_ms": duration_ms,
        },
    )
