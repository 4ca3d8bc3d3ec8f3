# seat_rotation/rotation/engine.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence

from seat_rotation.domain.models import Arrangement, ArrangementRecord, Participant
from seat_rotation.history.analyzer import OccupancyCounts, latest_record, occupancy_counts
from seat_rotation.validation.validator import DuplicateParticipant, ValidationWarning, validate_roster

logger = logging.getLogger(__name__)


class RotationMode(str, Enum):
    """How the new arrangement was derived."""
    ROTATED = "rotated"          # cyclic shift of the latest arrangement
    COLD_START = "cold_start"    # no usable history
    REASSIGNED = "reassigned"    # latest arrangement no longer fits roster/seats


@dataclass(frozen=True)
class RotationOutcome:
    arrangement: Arrangement
    mode: RotationMode
    previous: Optional[ArrangementRecord] = None
    warnings: List[ValidationWarning] = field(default_factory=list)


def check_duplicate_occupants(record: ArrangementRecord) -> None:
    seats_by_pid: Dict[str, List[str]] = {}
    for seat, pid in record.seats.items():
        seats_by_pid.setdefault(pid, []).append(seat)
    for pid, taken in seats_by_pid.items():
        if len(taken) >= 2:
            raise DuplicateParticipant(
                f"Arrangement on {record.day.isoformat()} assigns {pid} to several seats: {', '.join(taken)}",
                participant_id=pid,
                seats=tuple(taken),
                record_date=record.day,
            )


def rotate(seats: Sequence[str], previous_occupants: Sequence[str]) -> Arrangement:
    """
    Shift everyone forward one seat: seat i gets the previous occupant of seat i-1,
    the occupant of the last seat wraps around to the first.
    """
    n = len(seats)
    if len(previous_occupants) != n:
        raise ValueError("previous_occupants must list one occupant per seat")
    return {seats[i]: previous_occupants[(i - 1) % n] for i in range(n)}


def cold_start(
    participants: Sequence[Participant],
    seats: Sequence[str],
    counts: Optional[OccupancyCounts] = None,
) -> Arrangement:
    """
    Seat by seat (in seat order) pick the remaining participant who has sat there
    the fewest times, ties broken by id. Without history this is plain id order.
    """
    counts = counts or {}
    remaining = sorted(p.pid for p in participants)
    out: Arrangement = {}
    for seat in seats:
        pick = min(remaining, key=lambda pid: (counts.get(pid, {}).get(seat, 0), pid))
        out[seat] = pick
        remaining.remove(pick)
    return out


def _mismatch_reason(record: ArrangementRecord, roster: Mapping[str, Participant], seats: Sequence[str]) -> Optional[str]:
    rec_seats = set(record.seats)
    if rec_seats != set(seats):
        missing = [s for s in seats if s not in rec_seats]
        extra = sorted(rec_seats - set(seats))
        parts = []
        if missing:
            parts.append(f"missing seats {', '.join(missing)}")
        if extra:
            parts.append(f"unknown seats {', '.join(extra)}")
        return "; ".join(parts)
    strangers = sorted({pid for pid in record.seats.values() if pid not in roster})
    if strangers:
        return f"participants not in the roster: {', '.join(strangers)}"
    return None


def compute_arrangement(
    participants: Sequence[Participant],
    seats: Sequence[str],
    history: Mapping[date, ArrangementRecord],
) -> RotationOutcome:
    validate_roster([p.pid for p in participants], seats)

    latest = latest_record(history)
    if latest is None:
        logger.info("No history: cold start over %d seats", len(seats))
        return RotationOutcome(cold_start(participants, seats), RotationMode.COLD_START)

    check_duplicate_occupants(latest)

    roster = {p.pid: p for p in participants}
    reason = _mismatch_reason(latest, roster, seats)
    if reason is not None:
        msg = (
            f"Arrangement on {latest.day.isoformat()} does not match the current group ({reason}); "
            "seats were reassigned by past occupancy."
        )
        logger.warning(msg)
        counts = occupancy_counts(history, participants, seats)
        return RotationOutcome(
            cold_start(participants, seats, counts),
            RotationMode.REASSIGNED,
            previous=latest,
            warnings=[ValidationWarning(msg, source="history")],
        )

    previous = [latest.seats[s] for s in seats]
    logger.info("Rotating arrangement of %s", latest.day.isoformat())
    return RotationOutcome(rotate(seats, previous), RotationMode.ROTATED, previous=latest)
