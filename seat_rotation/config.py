# seat_rotation/config.py
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class CalendarConfig:
    """Working-day rules"""
    weekend_days: Tuple[int, ...] = (5, 6)  # date.weekday(): 5=Sat, 6=Sun
    max_search_days: int = 3650             # upper bound for the next-working-day search


@dataclass(frozen=True)
class HistoryConfig:
    # False: unparsable dates are skipped with a warning
    strict_dates: bool = False


@dataclass(frozen=True)
class ExportConfig:
    history_sheet: str = "history"
    next_sheet: str = "next"
    fairness_sheet: str = "fairness"


@dataclass(frozen=True)
class AppConfig:
    # "today" is evaluated in this zone (None = host local zone)
    timezone_name: Optional[str] = None

    calendar: CalendarConfig = CalendarConfig()
    history: HistoryConfig = HistoryConfig()
    export: ExportConfig = ExportConfig()


DEFAULT_CONFIG = AppConfig()
