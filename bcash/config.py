"""Application configuration."""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_ENV: str = "development"
    API_V1_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    # Frontend
    FRONTEND_URL: str = "http://localhost:3000"

    # Forecast defaults
    DEFAULT_STARTING_BALANCE: int = 1_000_000
    DEFAULT_FORECAST_MONTHS: int = 12
    MAX_FORECAST_MONTHS: int = 60

    # Scenario weighting
    WORST_CASE_PROBABILITY_CUTOFF: int = 80  # "very likely" and above

    # Critical month flagging
    CRITICAL_REVENUE_THRESHOLD: int = 500_000
    HIGH_IMPACT_REVENUE_THRESHOLD: int = 1_000_000

    # Runway warning shown by the dashboard
    LOW_RUNWAY_WARNING_MONTHS: int = 6

    # CORS
    @property
    def ALLOWED_ORIGINS(self) -> List[str]:
        if self.APP_ENV == "development":
            return ["*"]  # Allow all origins in development
        return [self.FRONTEND_URL, "http://localhost:3000"]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True
    )


settings = Settings()
