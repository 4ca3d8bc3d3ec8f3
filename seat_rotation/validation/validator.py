# seat_rotation/validation/validator.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, Sequence, Tuple

from dateutil.parser import isoparse

logger = logging.getLogger(__name__)

ISO_DAY = re.compile(r"\d{4}-\d{2}-\d{2}")


@dataclass(eq=False)
class SchedulingError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False)
class NoWorkingDayFound(SchedulingError):
    start: Optional[date] = None
    searched_days: int = 0


@dataclass(eq=False)
class RotationError(SchedulingError):
    pass


@dataclass(eq=False)
class ParticipantCountMismatch(RotationError):
    participants: int = 0
    seats: int = 0


@dataclass(eq=False)
class DuplicateParticipant(RotationError):
    participant_id: str = ""
    seats: Tuple[str, ...] = ()
    record_date: Optional[date] = None


@dataclass(eq=False)
class InputError(SchedulingError):
    pass


@dataclass(eq=False)
class UnparsableDate(InputError):
    value: object = None
    source: str = ""


@dataclass(eq=False)
class MalformedInput(InputError):
    pass


@dataclass(frozen=True)
class ValidationWarning:
    message: str
    source: str = field(default="", compare=False)


def parse_iso_day(value: object, source: str = "") -> date:
    """Strings must be exactly 'YYYY-MM-DD'; date/datetime objects pass through as a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip() if value is not None else ""
    if not ISO_DAY.fullmatch(text):
        raise UnparsableDate(f"Not an ISO date (YYYY-MM-DD): {value!r} in {source}", value=value, source=source)
    try:
        return isoparse(text).date()
    except ValueError:
        raise UnparsableDate(
            f"Not a valid calendar date: {value!r} in {source}", value=value, source=source
        ) from None


def skip_or_raise(err: UnparsableDate, strict: bool, warnings: List[ValidationWarning]) -> None:
    # strict: unparsable dates are fatal; otherwise skip-and-warn
    if strict:
        raise err
    logger.warning("Skipping entry: %s", err.message)
    warnings.append(ValidationWarning(f"Skipped: {err.message}", source=err.source))


def validate_roster(participant_ids: Sequence[str], seats: Sequence[str]) -> None:
    if not seats:
        raise MalformedInput("No seats configured.")
    for s in seats:
        if not str(s).strip():
            raise MalformedInput("Seat names must not be blank.")
    if len(set(seats)) != len(seats):
        dup = sorted({s for s in seats if list(seats).count(s) > 1})
        raise MalformedInput(f"Duplicate seat names: {', '.join(dup)}")

    for pid in participant_ids:
        if not str(pid).strip():
            raise MalformedInput("Participant ids must not be blank.")
    if len(set(participant_ids)) != len(participant_ids):
        dup = sorted({p for p in participant_ids if list(participant_ids).count(p) > 1})
        raise MalformedInput(f"Duplicate participant ids: {', '.join(dup)}")

    if len(participant_ids) != len(seats):
        raise ParticipantCountMismatch(
            f"{len(participant_ids)} participants cannot fill {len(seats)} seats; "
            "the roster size must equal the seat count.",
            participants=len(participant_ids),
            seats=len(seats),
        )
