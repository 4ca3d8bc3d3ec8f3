# seat_rotation/domain/workdays.py
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import AbstractSet, List, Optional

from dateutil import tz

from seat_rotation.config import CalendarConfig
from seat_rotation.validation.validator import MalformedInput, NoWorkingDayFound

logger = logging.getLogger(__name__)

DEFAULT_CALENDAR = CalendarConfig()


def today_in(timezone_name: Optional[str]) -> date:
    # gettz(None) falls back to the host's local zone
    zone = tz.gettz(timezone_name)
    if timezone_name and zone is None:
        raise MalformedInput(f"Unknown time zone: {timezone_name!r}")
    return datetime.now(tz=zone).date()


def is_working_day(d: date, non_working_days: AbstractSet[date], cal: CalendarConfig = DEFAULT_CALENDAR) -> bool:
    if d.weekday() in cal.weekend_days:
        return False
    return d not in non_working_days


def next_working_day_on_or_after(
    d: date,
    non_working_days: AbstractSet[date],
    cal: CalendarConfig = DEFAULT_CALENDAR,
) -> date:
    """Earliest working day >= d, searching at most cal.max_search_days days."""
    cur = d
    for _ in range(cal.max_search_days):
        if is_working_day(cur, non_working_days, cal):
            return cur
        cur += timedelta(days=1)
    raise NoWorkingDayFound(
        f"No working day found within {cal.max_search_days} days from {d.isoformat()}.",
        start=d,
        searched_days=cal.max_search_days,
    )


def search_start(latest: Optional[date], today: date) -> date:
    """Day after the latest record, but never before today."""
    if latest is None:
        return today
    start = latest + timedelta(days=1)
    if start < today:
        start = today
    return start


def determine_next_working_day(
    latest: Optional[date],
    non_working_days: AbstractSet[date],
    today: date,
    cal: CalendarConfig = DEFAULT_CALENDAR,
) -> date:
    start = search_start(latest, today)
    nxt = next_working_day_on_or_after(start, non_working_days, cal)
    logger.debug("Next working day: latest=%s today=%s start=%s -> %s", latest, today, start, nxt)
    return nxt


def skipped_days(start: date, end: date, non_working_days: AbstractSet[date]) -> List[date]:
    """Explicit non-working days in [start, end) (weekends are not listed)."""
    out: List[date] = []
    d = start
    while d < end:
        if d in non_working_days:
            out.append(d)
        d += timedelta(days=1)
    return out
