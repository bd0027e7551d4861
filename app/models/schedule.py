import datetime as dt
from enum import Enum

from sqlmodel import SQLModel

from app.models.appointment import AppointmentRecord, AppointmentStatus


class UtilizationLevel(str, Enum):
    LOW = "low"
    OPTIMAL = "optimal"
    HIGH = "high"
    CRITICAL = "critical"


class DayBucket(SQLModel):
    date: dt.date
    is_current_period: bool = True
    is_today: bool = False
    appointments: list[AppointmentRecord] = []
    total_count: int = 0
    confirmed_count: int = 0
    pending_count: int = 0
    overbook_count: int = 0
    available_slot_count: int = 0
    utilization_rate: float = 0.0
    utilization_level: UtilizationLevel = UtilizationLevel.LOW


class TimeSlotBucket(SQLModel):
    slot_start: dt.time
    display_time: str
    appointments: list[AppointmentRecord] = []
    is_available: bool = True
    overbook_count: int = 0


class ScheduleRollup(SQLModel):
    total: int = 0
    by_status: dict[AppointmentStatus, int] = {}
    overbook_count: int = 0
    high_risk_count: int = 0
    average_utilization: float = 0.0
    confirmation_rate: float = 0.0
    no_show_rate: float = 0.0


class Insight(SQLModel):
    kind: str
    title: str
    message: str
