"""Dependency injection for FastAPI endpoints"""

from datetime import datetime
from fastapi import Request
from broke_gateway.config import Settings, settings
from broke_gateway.utils.date_utils import local_now


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_settings() -> Settings:
    """Provide application settings"""
    return settings


def get_now() -> datetime:
    """Current wall-clock time in the configured timezone"""
    return local_now(settings.timezone)
