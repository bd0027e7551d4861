from datetime import date, datetime, time, timedelta
from typing import Literal

from dateutil.relativedelta import relativedelta

from app.core.config import settings
from app.core.exceptions import InvalidRangeError

View = Literal["week", "month"]
Direction = Literal["prev", "next"]


def week_range(anchor: date, week_starts_on: int | None = None) -> tuple[date, date]:
    """Return the inclusive 7-day week containing anchor. week_starts_on uses date.weekday() numbering."""
    first = settings.week_starts_on if week_starts_on is None else week_starts_on
    offset = (anchor.weekday() - first) % 7
    try:
        start = anchor - timedelta(days=offset)
        end = start + timedelta(days=6)
    except OverflowError as e:
        raise InvalidRangeError(
            anchor, anchor, f"Week containing {anchor.isoformat()} falls outside the supported calendar"
        ) from e
    return start, end


def month_range(anchor: date) -> tuple[date, date]:
    return anchor + relativedelta(day=1), anchor + relativedelta(day=31)


def month_grid_range(anchor: date, week_starts_on: int | None = None) -> tuple[date, date]:
    """Whole weeks covering anchor's month, as shown by a month calendar grid."""
    first, last = month_range(anchor)
    return week_range(first, week_starts_on)[0], week_range(last, week_starts_on)[1]


def resolve_period(
    view: View,
    anchor: date,
    week_starts_on: int | None = None,
    grid: bool = False,
) -> tuple[date, date]:
    """Inclusive range shown by a week or month view; grid pads a month to whole weeks."""
    if view == "week":
        return week_range(anchor, week_starts_on)
    if view == "month":
        return month_grid_range(anchor, week_starts_on) if grid else month_range(anchor)
    raise ValueError(f"Unknown calendar view: {view!r}")


def navigate(anchor: date, view: View, direction: Direction) -> date:
    """Shift anchor one week or one month back or forward (Jan 31 -> Feb 28)."""
    step = 1 if direction == "next" else -1
    if view == "week":
        delta = relativedelta(weeks=step)
    elif view == "month":
        delta = relativedelta(months=step)
    else:
        raise ValueError(f"Unknown calendar view: {view!r}")
    try:
        return anchor + delta
    except (OverflowError, ValueError) as e:
        raise InvalidRangeError(
            anchor, anchor, f"Cannot move {direction} from {anchor.isoformat()}: outside the supported calendar"
        ) from e


def default_slot_times(
    start: time | None = None,
    end: time | None = None,
    step_minutes: int | None = None,
) -> list[time]:
    """Slot start times from start to end inclusive, every step_minutes."""
    start = settings.timeline_start if start is None else start
    end = settings.timeline_end if end is None else end
    step_minutes = settings.slot_duration_minutes if step_minutes is None else step_minutes
    if step_minutes <= 0:
        raise InvalidRangeError(start, end, f"Slot step must be positive, got {step_minutes}")
    if start > end:
        raise InvalidRangeError(start, end)
    slots: list[time] = []
    current = datetime.combine(date.min, start)
    stop = datetime.combine(date.min, end)
    delta = timedelta(minutes=step_minutes)
    while current <= stop:
        slots.append(current.time())
        current += delta
    return slots
