from app.models.appointment import (
    AppointmentRecord,
    AppointmentStatus,
    ScheduleFilters,
    parse_records,
)
from app.models.schedule import (
    DayBucket,
    Insight,
    ScheduleRollup,
    TimeSlotBucket,
    UtilizationLevel,
)

__all__ = [
    "AppointmentRecord",
    "AppointmentStatus",
    "ScheduleFilters",
    "parse_records",
    "DayBucket",
    "Insight",
    "ScheduleRollup",
    "TimeSlotBucket",
    "UtilizationLevel",
]
