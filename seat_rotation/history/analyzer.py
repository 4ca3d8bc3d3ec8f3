# seat_rotation/history/analyzer.py
from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Mapping, Optional, Sequence

from seat_rotation.domain.models import ArrangementRecord, Participant

logger = logging.getLogger(__name__)

# pid -> seat -> count
OccupancyCounts = Dict[str, Dict[str, int]]


def latest_record(history: Mapping[date, ArrangementRecord]) -> Optional[ArrangementRecord]:
    """
    Record with the greatest date, or None for empty history.
    Entries with unparsable dates never reach this point; the request reader
    skips them (with a warning) when the history is built.
    """
    if not history:
        return None
    return history[max(history)]


def history_sorted(history: Mapping[date, ArrangementRecord]) -> List[ArrangementRecord]:
    return [history[d] for d in sorted(history)]


def occupancy_counts(
    history: Mapping[date, ArrangementRecord],
    participants: Sequence[Participant],
    seats: Sequence[str],
) -> OccupancyCounts:
    counts: OccupancyCounts = {p.pid: {s: 0 for s in seats} for p in participants}
    ignored = 0
    for rec in history.values():
        for seat, pid in rec.seats.items():
            # people who left the group / seats that were renamed are not counted
            if pid in counts and seat in counts[pid]:
                counts[pid][seat] += 1
            else:
                ignored += 1
    if ignored:
        logger.debug("Occupancy counts ignored %d assignment(s) outside the current roster/seats", ignored)
    return counts


def total_assignments(history: Mapping[date, ArrangementRecord]) -> int:
    return sum(len(rec.seats) for rec in history.values())
