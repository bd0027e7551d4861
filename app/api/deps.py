from functools import lru_cache

from app.core.config import settings
from app.services.schedule_service import ScheduleAggregator


@lru_cache
def get_aggregator() -> ScheduleAggregator:
    """Aggregator built from settings; stateless, so one instance is shared."""
    return ScheduleAggregator.from_settings(settings)
