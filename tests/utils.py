"""Builders shared by the scheduler tests."""
from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, Mapping, Optional, Sequence

from seat_rotation.domain.models import ArrangementRecord, Participant, RotationRequest

SEATS: Sequence[str] = ("S1", "S2", "S3")

NAMES: Mapping[str, str] = {"a1": "Alice", "b1": "Bob", "c1": "Charlie", "d1": "Dana"}


def d(text: str) -> date:
    return date.fromisoformat(text)


def people(*pids: str) -> list:
    return [Participant(pid=p, name=NAMES.get(p, "")) for p in pids]


def record(day: str, occupants: Iterable[str], seats: Sequence[str] = SEATS) -> ArrangementRecord:
    return ArrangementRecord(day=d(day), seats=dict(zip(seats, occupants)))


def history_of(*records: ArrangementRecord) -> Dict[date, ArrangementRecord]:
    return {r.day: r for r in records}


def make_request(
    pids: Sequence[str] = ("a1", "b1", "c1"),
    seats: Sequence[str] = SEATS,
    records: Sequence[ArrangementRecord] = (),
    non_working: Iterable[str] = (),
    events: Optional[Mapping[str, str]] = None,
) -> RotationRequest:
    return RotationRequest(
        participants=people(*pids),
        seats=list(seats),
        history=history_of(*records),
        non_working_days={d(x) for x in non_working},
        special_events={d(k): v for k, v in (events or {}).items()},
    )


def payload(**overrides) -> dict:
    base = {
        "participants": [
            {"id": "a1", "displayName": "Alice"},
            {"id": "b1", "displayName": "Bob"},
            {"id": "c1", "displayName": "Charlie"},
        ],
        "seats": list(SEATS),
        "history": [],
        "nonWorkingDays": [],
        "specialEvents": {},
    }
    base.update(overrides)
    return base
