import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date, datetime, time, timedelta
from typing import Any
from zoneinfo import ZoneInfo

from app.core.config import Settings, settings
from app.core.exceptions import InvalidRangeError
from app.models.appointment import (
    AppointmentRecord,
    AppointmentStatus,
    ScheduleFilters,
    parse_records,
)
from app.models.schedule import DayBucket, ScheduleRollup, TimeSlotBucket
from app.services.insight_service import utilization_level
from app.services.period_service import default_slot_times

logger = logging.getLogger(__name__)


def _rate(count: int | float, total: int | float) -> float:
    """Percentage of count over total; 0 when total is 0."""
    return (count / total) * 100 if total > 0 else 0.0


def _display_time(t: time) -> str:
    """12-hour label for a slot, e.g. 08:30 -> '8:30 AM'."""
    hour = t.hour % 12 or 12
    suffix = "AM" if t.hour < 12 else "PM"
    return f"{hour}:{t.minute:02d} {suffix}"


class ScheduleAggregator:
    """Turns fetched appointment records into calendar, timeline and rollup views.

    Holds configuration only; every call is a pure function of its arguments.
    """

    def __init__(
        self,
        daily_slot_capacity: int = 16,
        overbook_marker: str = "OVERBOOK",
        high_risk_threshold: float = 0.6,
        timezone: str = "UTC",
        max_period_days: int = 366,
    ) -> None:
        if daily_slot_capacity < 0:
            raise ValueError("daily_slot_capacity must not be negative")
        self.daily_slot_capacity = daily_slot_capacity
        self.overbook_marker = overbook_marker
        self.high_risk_threshold = high_risk_threshold
        self.max_period_days = max_period_days
        self.tz = ZoneInfo(timezone)

    @classmethod
    def from_settings(cls, cfg: Settings = settings) -> "ScheduleAggregator":
        return cls(
            daily_slot_capacity=cfg.daily_slot_capacity,
            overbook_marker=cfg.overbook_marker,
            high_risk_threshold=cfg.high_risk_threshold,
            timezone=cfg.clinic_timezone,
            max_period_days=cfg.max_period_days,
        )

    def local_start(self, record: AppointmentRecord) -> datetime:
        """Clinic-local naive start; naive inputs are already clinic-local."""
        start = record.start_time
        if start.tzinfo is not None:
            return start.astimezone(self.tz).replace(tzinfo=None)
        return start

    def is_overbook(self, record: AppointmentRecord) -> bool:
        return bool(record.notes) and self.overbook_marker in record.notes

    def matches(self, record: AppointmentRecord, filters: ScheduleFilters | None) -> bool:
        if filters is None:
            return True
        if filters.search_text:
            needle = filters.search_text.lower()
            haystack = (
                record.patient_name,
                record.appointment_type,
                record.notes,
                record.provider_name,
                record.provider_specialty,
            )
            if not any(field and needle in field.lower() for field in haystack):
                return False
        if filters.status is not None and record.status != filters.status:
            return False
        if filters.provider_name is not None and record.provider_name != filters.provider_name:
            return False
        return True

    def select_period(
        self, records: Iterable[Any], period_start: date, period_end: date
    ) -> list[AppointmentRecord]:
        """Records whose clinic-local start date falls in [period_start, period_end]."""
        if period_start > period_end:
            raise InvalidRangeError(period_start, period_end)
        return [
            r
            for r in parse_records(records)
            if period_start <= self.local_start(r).date() <= period_end
        ]

    def _period_length(self, period_start: date, period_end: date) -> int:
        if period_start > period_end:
            raise InvalidRangeError(period_start, period_end)
        days = (period_end - period_start).days + 1
        if days > self.max_period_days:
            raise InvalidRangeError(
                period_start,
                period_end,
                f"Range of {days} days exceeds the limit of {self.max_period_days}",
            )
        return days

    def _group_by_date(self, records: Iterable[AppointmentRecord]) -> dict[date, list[AppointmentRecord]]:
        by_date: dict[date, list[AppointmentRecord]] = defaultdict(list)
        for record in records:
            by_date[self.local_start(record).date()].append(record)
        return by_date

    def bucket_by_day(
        self,
        records: Iterable[Any],
        period_start: date,
        period_end: date,
        filters: ScheduleFilters | None = None,
        *,
        today: date | None = None,
        reference_month: date | None = None,
    ) -> list[DayBucket]:
        """One DayBucket per calendar date in [period_start, period_end], ascending.

        reference_month marks which buckets belong to the displayed month in a
        month grid; without it every bucket counts as current period.
        """
        day_count = self._period_length(period_start, period_end)
        parsed = parse_records(records)
        if today is None:
            today = datetime.now(self.tz).date()
        by_date = self._group_by_date(parsed)

        buckets: list[DayBucket] = []
        for offset in range(day_count):
            current = period_start + timedelta(days=offset)
            day_records = [r for r in by_date.get(current, ()) if self.matches(r, filters)]
            buckets.append(self._day_bucket(current, day_records, today, reference_month))

        logger.debug(
            "Bucketed %d record(s) into %d day(s) from %s to %s",
            sum(b.total_count for b in buckets),
            len(buckets),
            period_start,
            period_end,
        )
        return buckets

    def _day_bucket(
        self,
        day: date,
        records: list[AppointmentRecord],
        today: date,
        reference_month: date | None,
    ) -> DayBucket:
        total = len(records)
        capacity = self.daily_slot_capacity
        rate = _rate(total, capacity)
        is_current = reference_month is None or (
            day.year == reference_month.year and day.month == reference_month.month
        )
        return DayBucket(
            date=day,
            is_current_period=is_current,
            is_today=day == today,
            appointments=records,
            total_count=total,
            confirmed_count=sum(1 for r in records if r.status == AppointmentStatus.CONFIRMED),
            pending_count=sum(1 for r in records if r.status == AppointmentStatus.PENDING),
            overbook_count=sum(1 for r in records if self.is_overbook(r)),
            available_slot_count=max(0, capacity - total),
            utilization_rate=rate,
            utilization_level=utilization_level(rate),
        )

    def bucket_by_time_slot(
        self,
        records: Iterable[Any],
        day: date,
        slot_times: Sequence[time] | None = None,
        filters: ScheduleFilters | None = None,
    ) -> list[TimeSlotBucket]:
        """One TimeSlotBucket per slot time, in the given order.

        An appointment lands in a slot only when its start, truncated to the
        minute, equals the slot start exactly. Slots are never truncated, so a
        slot carrying seconds stays empty.
        """
        if slot_times is None:
            slot_times = default_slot_times()
        parsed = parse_records(records)

        by_slot: dict[time, list[AppointmentRecord]] = defaultdict(list)
        for record in parsed:
            start = self.local_start(record)
            if start.date() != day or not self.matches(record, filters):
                continue
            by_slot[start.time().replace(second=0, microsecond=0)].append(record)

        buckets: list[TimeSlotBucket] = []
        for slot in slot_times:
            slot_records = by_slot.get(slot, [])
            overbook = sum(1 for r in slot_records if self.is_overbook(r))
            buckets.append(
                TimeSlotBucket(
                    slot_start=slot,
                    display_time=_display_time(slot),
                    appointments=list(slot_records),
                    is_available=len(slot_records) - overbook == 0,
                    overbook_count=overbook,
                )
            )
        logger.debug("Built %d time slot(s) for %s", len(buckets), day)
        return buckets

    def compute_rollup(
        self,
        records: Iterable[Any],
        day_buckets: Sequence[DayBucket] = (),
    ) -> ScheduleRollup:
        parsed = parse_records(records)
        total = len(parsed)
        by_status = {status: 0 for status in AppointmentStatus}
        for record in parsed:
            by_status[record.status] += 1
        average_utilization = (
            sum(b.utilization_rate for b in day_buckets) / len(day_buckets) if day_buckets else 0.0
        )
        return ScheduleRollup(
            total=total,
            by_status=by_status,
            overbook_count=sum(1 for r in parsed if self.is_overbook(r)),
            high_risk_count=sum(
                1 for r in parsed if (r.no_show_risk_score or 0) > self.high_risk_threshold
            ),
            average_utilization=average_utilization,
            confirmation_rate=_rate(by_status[AppointmentStatus.CONFIRMED], total),
            no_show_rate=_rate(by_status[AppointmentStatus.NO_SHOW], total),
        )
