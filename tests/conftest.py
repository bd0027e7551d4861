from datetime import date, datetime

import pytest

from app.services.schedule_service import ScheduleAggregator


@pytest.fixture
def aggregator() -> ScheduleAggregator:
    return ScheduleAggregator(daily_slot_capacity=16, overbook_marker="OVERBOOK", high_risk_threshold=0.6)


@pytest.fixture
def make_record():
    """Factory for raw appointment rows as the fetch layer returns them."""
    counter = {"n": 0}

    def _make(start: datetime, status: str = "Confirmed", **overrides) -> dict:
        counter["n"] += 1
        row = {
            "id": f"apt-{counter['n']}",
            "start_time": start.isoformat(),
            "duration_minutes": 30,
            "status": status,
            "patient_name": "Jane Doe",
            "provider_name": "Dr. Smith",
            "provider_specialty": "Cardiology",
            "appointment_type": "Consultation",
            "notes": None,
            "no_show_risk_score": 0.1,
        }
        row.update(overrides)
        return row

    return _make


@pytest.fixture
def monday() -> date:
    return date(2025, 1, 6)
