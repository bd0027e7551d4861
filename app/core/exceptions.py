from datetime import date, time


class ScheduleError(Exception):
    """Base class for errors raised while aggregating schedule data."""


class InvalidRangeError(ScheduleError):
    def __init__(self, start: date | time, end: date | time, reason: str | None = None) -> None:
        self.start = start
        self.end = end
        message = reason or f"Range start {start.isoformat()} is after end {end.isoformat()}"
        super().__init__(message)


class MalformedRecordError(ScheduleError):
    """A fetched appointment record failed schema validation.

    ``record_id`` is the record's own id when it has one, otherwise its
    position in the input list (e.g. ``"#3"``).
    """

    def __init__(self, record_id: str, detail: str) -> None:
        self.record_id = record_id
        self.detail = detail
        super().__init__(f"Malformed appointment record {record_id}: {detail}")
