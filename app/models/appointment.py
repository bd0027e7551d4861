import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import ValidationError, field_validator
from sqlmodel import Field, SQLModel

from app.core.exceptions import MalformedRecordError

logger = logging.getLogger(__name__)


class AppointmentStatus(str, Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    NO_SHOW = "No-Show"


class AppointmentRecord(SQLModel):
    """An appointment as delivered by the fetch layer, joined with patient and provider display fields."""

    id: str
    start_time: datetime
    duration_minutes: int = Field(default=30, gt=0)
    status: AppointmentStatus
    patient_name: str
    provider_name: str | None = None
    provider_specialty: str | None = None
    appointment_type: str | None = None
    notes: str | None = None
    no_show_risk_score: float | None = Field(default=0.0, ge=0, le=1)

    @field_validator("id", mode="before")
    @classmethod
    def _numeric_id_to_str(cls, value: Any) -> Any:
        # Backends with serial keys send integer ids
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class ScheduleFilters(SQLModel):
    search_text: str | None = None
    status: AppointmentStatus | None = None
    provider_name: str | None = None


def _record_label(item: Any, index: int) -> str:
    if isinstance(item, Mapping):
        rid = item.get("id")
        if rid not in (None, ""):
            return str(rid)
    return f"#{index}"


def _summarize(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "record"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def parse_records(raw: Iterable[Any]) -> list[AppointmentRecord]:
    """Validate fetched rows into AppointmentRecord instances.

    Fails on the first row that does not match the schema instead of
    dropping it, so the caller decides whether to filter upstream.
    """
    records: list[AppointmentRecord] = []
    for index, item in enumerate(raw):
        if isinstance(item, AppointmentRecord):
            records.append(item)
            continue
        try:
            records.append(AppointmentRecord.model_validate(item))
        except ValidationError as e:
            label = _record_label(item, index)
            logger.warning("Rejected appointment record %s", label)
            raise MalformedRecordError(label, _summarize(e)) from e
    return records
