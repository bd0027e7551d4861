from datetime import time
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env from the project root so it loads regardless of cwd
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(str(_ENV_FILE), ".env", "../.env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # CORS
    cors_origins: str = "http://localhost:3000"

    # Clinic-local timezone used to place appointment starts on calendar days
    clinic_timezone: str = "UTC"

    # Aggregation rules
    daily_slot_capacity: int = 16  # 8-hour day of 30-min slots
    overbook_marker: str = "OVERBOOK"
    high_risk_threshold: float = 0.6
    max_period_days: int = 366  # longest range a single call may bucket

    # Timeline view
    slot_duration_minutes: int = 30
    timeline_start_hour: int = 8
    timeline_end_hour: int = 18  # inclusive, last slot starts at 18:00
    week_starts_on: int = 6  # date.weekday() numbering, 6 = Sunday

    # Insight thresholds (percent)
    low_utilization_threshold: float = 60.0
    high_no_show_rate_threshold: float = 15.0

    # Env
    env: str = "development"

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def timeline_start(self) -> time:
        return time(self.timeline_start_hour, 0)

    @property
    def timeline_end(self) -> time:
        return time(self.timeline_end_hour, 0)


settings = Settings()
