from __future__ import annotations

from datetime import date, datetime, time

from tempora.domain.errors import IncompleteSchedule
from tempora.domain.schemas.event import TimeSlot

DAY_START = time(0, 0, 0)
DAY_END = time(23, 59, 59)

# half-hour grid offered by the time pickers: "00:00", "00:30", ... "23:30"
TIME_OPTIONS: tuple[str, ...] = tuple(
    f"{i // 2:02d}:{'00' if i % 2 == 0 else '30'}" for i in range(48)
)


def parse_time(value: str | None, field: str) -> time:
    if not value:
        raise IncompleteSchedule([field])
    try:
        parsed = datetime.strptime(value.strip(), "%H:%M")
    except ValueError as exc:
        raise IncompleteSchedule([field]) from exc
    return parsed.time()


def resolve(
    start_date: date | None,
    start_time: str | None,
    end_date: date | None,
    end_time: str | None,
    all_day: bool,
) -> TimeSlot:
    missing = []
    if start_date is None:
        missing.append("start_date")
    if end_date is None:
        missing.append("end_date")
    if not all_day:
        if not start_time:
            missing.append("start_time")
        if not end_time:
            missing.append("end_time")
    if missing:
        raise IncompleteSchedule(missing)

    if all_day:
        # single-day semantics: the end date is ignored
        return TimeSlot(
            start_at=datetime.combine(start_date, DAY_START),
            end_at=datetime.combine(start_date, DAY_END),
        )

    return TimeSlot(
        start_at=datetime.combine(start_date, parse_time(start_time, "start_time")),
        end_at=datetime.combine(end_date, parse_time(end_time, "end_time")),
    )
