"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./broke.db"

    # Service
    service_name: str = "broke-gateway"
    log_level: str = "INFO"

    # Calendar used for "now" and start-of-day bucketing
    timezone: str = "UTC"

    # Want/need questionnaire
    history_limit: int = 20

    # Savings planning defaults
    default_weekly_income: float = 0.0
    default_savings_rate: float = 0.2

    # Presentation preferences (read by clients, never by the core)
    accent_choice: str = "green"
    sound_enabled: bool = True
    haptics_enabled: bool = True


settings = Settings()
