from datetime import date, time
from typing import Any, Literal

from pydantic import BaseModel, model_validator

from app.models.appointment import ScheduleFilters
from app.models.schedule import DayBucket, Insight, ScheduleRollup, TimeSlotBucket


class CalendarRequest(BaseModel):
    # Raw rows; validated by parse_records so a bad row reports its id
    records: list[dict[str, Any]] = []
    period_start: date | None = None
    period_end: date | None = None
    view: Literal["week", "month"] | None = None
    anchor: date | None = None
    # Step the anchor one view back or forward before resolving the period
    direction: Literal["prev", "next"] | None = None
    filters: ScheduleFilters | None = None
    today: date | None = None

    @model_validator(mode="after")
    def _range_or_view(self) -> "CalendarRequest":
        if (self.period_start is None) != (self.period_end is None):
            raise ValueError("period_start and period_end must be given together")
        has_range = self.period_start is not None and self.period_end is not None
        has_view = self.view is not None and self.anchor is not None
        if not has_range and not has_view:
            raise ValueError("Provide period_start and period_end, or view and anchor")
        return self


class CalendarResponse(BaseModel):
    anchor: date | None = None
    period_start: date
    period_end: date
    days: list[DayBucket]


class TimelineRequest(BaseModel):
    records: list[dict[str, Any]] = []
    day: date
    slot_times: list[time] | None = None
    filters: ScheduleFilters | None = None


class TimelineResponse(BaseModel):
    day: date
    booked_count: int
    slots: list[TimeSlotBucket]


class RollupRequest(BaseModel):
    records: list[dict[str, Any]] = []
    period_start: date
    period_end: date
    filters: ScheduleFilters | None = None
    today: date | None = None


class RollupResponse(BaseModel):
    rollup: ScheduleRollup
    insights: list[Insight]
