"""GET /v1/settings - client preferences and planning defaults"""

from fastapi import APIRouter, Depends

from broke_gateway.api.v1.schemas import SettingsResponse
from broke_gateway.api.dependencies import get_settings
from broke_gateway.config import Settings

router = APIRouter()


@router.get("/settings", response_model=SettingsResponse)
def read_settings(app_settings: Settings = Depends(get_settings)):
    return SettingsResponse(
        accent_choice=app_settings.accent_choice,
        sound_enabled=app_settings.sound_enabled,
        haptics_enabled=app_settings.haptics_enabled,
        default_weekly_income=app_settings.default_weekly_income,
        default_savings_rate=app_settings.default_savings_rate,
        timezone=app_settings.timezone,
    )
