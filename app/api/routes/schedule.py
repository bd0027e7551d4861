from fastapi import APIRouter, Depends

from app.api.deps import get_aggregator
from app.api.schemas.schedule import (
    CalendarRequest,
    CalendarResponse,
    RollupRequest,
    RollupResponse,
    TimelineRequest,
    TimelineResponse,
)
from app.services.insight_service import build_insights
from app.services.period_service import navigate, resolve_period
from app.services.schedule_service import ScheduleAggregator

router = APIRouter(prefix="/schedule", tags=["schedule"])


@router.post("/calendar", response_model=CalendarResponse)
def calendar_days(
    body: CalendarRequest,
    aggregator: ScheduleAggregator = Depends(get_aggregator),
) -> CalendarResponse:
    """Day buckets for an explicit range, or for the week/month view around an anchor date."""
    anchor = body.anchor
    reference_month = None
    if body.period_start is not None and body.period_end is not None:
        start, end = body.period_start, body.period_end
    else:
        if body.direction is not None:
            anchor = navigate(anchor, body.view, body.direction)
        start, end = resolve_period(body.view, anchor, grid=True)
        if body.view == "month":
            reference_month = anchor
    days = aggregator.bucket_by_day(
        body.records,
        start,
        end,
        body.filters,
        today=body.today,
        reference_month=reference_month,
    )
    return CalendarResponse(anchor=anchor, period_start=start, period_end=end, days=days)


@router.post("/timeline", response_model=TimelineResponse)
def timeline_slots(
    body: TimelineRequest,
    aggregator: ScheduleAggregator = Depends(get_aggregator),
) -> TimelineResponse:
    slots = aggregator.bucket_by_time_slot(body.records, body.day, body.slot_times, body.filters)
    return TimelineResponse(
        day=body.day,
        booked_count=sum(1 for s in slots if not s.is_available),
        slots=slots,
    )


@router.post("/rollup", response_model=RollupResponse)
def schedule_rollup(
    body: RollupRequest,
    aggregator: ScheduleAggregator = Depends(get_aggregator),
) -> RollupResponse:
    """Rollup over every record in the period; average utilization comes from the filtered day buckets."""
    in_period = aggregator.select_period(body.records, body.period_start, body.period_end)
    days = aggregator.bucket_by_day(
        in_period, body.period_start, body.period_end, body.filters, today=body.today
    )
    rollup = aggregator.compute_rollup(in_period, days)
    return RollupResponse(rollup=rollup, insights=build_insights(rollup))
