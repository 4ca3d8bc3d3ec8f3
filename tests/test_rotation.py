from __future__ import annotations

import pytest

from seat_rotation.rotation.engine import RotationMode, cold_start, compute_arrangement, rotate
from seat_rotation.validation.validator import DuplicateParticipant, MalformedInput, ParticipantCountMismatch, RotationError
from seat_rotation.domain.models import ArrangementRecord
from tests.utils import SEATS, d, history_of, people, record


def test_rotate_moves_everyone_forward_one_seat() -> None:
    assert rotate(SEATS, ["A", "B", "C"]) == {"S1": "C", "S2": "A", "S3": "B"}


def test_rotate_full_cycle_returns_to_start() -> None:
    occupants = ["a1", "b1", "c1", "d1"]
    seats = ["S1", "S2", "S3", "S4"]
    arr = dict(zip(seats, occupants))
    for _ in range(len(seats)):
        arr = rotate(seats, [arr[s] for s in seats])
    assert arr == dict(zip(seats, occupants))


def test_cold_start_sorts_by_identifier() -> None:
    assert cold_start(people("b1", "a1", "c1"), SEATS) == {"S1": "a1", "S2": "b1", "S3": "c1"}


def test_cold_start_prefers_least_occupied_seat() -> None:
    counts = {"a1": {"S1": 3, "S2": 0, "S3": 1}, "b1": {"S1": 0, "S2": 2, "S3": 1}, "c1": {"S1": 1, "S2": 1, "S3": 0}}
    assert cold_start(people("a1", "b1", "c1"), SEATS, counts) == {"S1": "b1", "S2": "a1", "S3": "c1"}


def test_compute_arrangement_rotates_latest_record() -> None:
    h = history_of(
        record("2024-12-23", ["c1", "a1", "b1"]),
        record("2024-12-24", ["a1", "b1", "c1"]),
    )
    out = compute_arrangement(people("a1", "b1", "c1"), SEATS, h)
    assert out.mode is RotationMode.ROTATED
    assert out.previous.day == d("2024-12-24")
    assert out.arrangement == {"S1": "c1", "S2": "a1", "S3": "b1"}
    assert out.warnings == []


def test_compute_arrangement_without_history_is_cold_start() -> None:
    out = compute_arrangement(people("b1", "a1", "c1"), SEATS, {})
    assert out.mode is RotationMode.COLD_START
    assert out.arrangement == {"S1": "a1", "S2": "b1", "S3": "c1"}


def test_result_is_a_bijection() -> None:
    h = history_of(record("2024-12-24", ["b1", "c1", "a1"]))
    out = compute_arrangement(people("a1", "b1", "c1"), SEATS, h)
    assert set(out.arrangement) == set(SEATS)
    assert sorted(out.arrangement.values()) == ["a1", "b1", "c1"]


def test_participant_count_mismatch() -> None:
    with pytest.raises(ParticipantCountMismatch) as excinfo:
        compute_arrangement(people("a1", "b1"), SEATS, {})
    assert isinstance(excinfo.value, RotationError)
    assert (excinfo.value.participants, excinfo.value.seats) == (2, 3)


def test_duplicate_participant_in_latest_record_is_fatal() -> None:
    h = history_of(record("2024-12-24", ["a1", "a1", "c1"]))
    with pytest.raises(DuplicateParticipant) as excinfo:
        compute_arrangement(people("a1", "b1", "c1"), SEATS, h)
    assert excinfo.value.participant_id == "a1"
    assert excinfo.value.seats == ("S1", "S2")
    assert excinfo.value.record_date == d("2024-12-24")


def test_duplicate_seat_names_are_rejected() -> None:
    with pytest.raises(MalformedInput):
        compute_arrangement(people("a1", "b1", "c1"), ["S1", "S1", "S3"], {})


def test_roster_change_falls_back_to_fair_reassignment() -> None:
    # d1 replaced c1: the old arrangement cannot be rotated
    h = history_of(
        record("2024-12-23", ["c1", "a1", "b1"]),
        record("2024-12-24", ["a1", "b1", "c1"]),
    )
    out = compute_arrangement(people("a1", "b1", "d1"), SEATS, h)
    assert out.mode is RotationMode.REASSIGNED
    # S1: b1 and d1 never sat there, tie goes to b1; S2: d1 over a1
    assert out.arrangement == {"S1": "b1", "S2": "d1", "S3": "a1"}
    assert len(out.warnings) == 1
    assert "c1" in out.warnings[0].message


def test_renamed_seat_falls_back_to_fair_reassignment() -> None:
    h = {d("2024-12-24"): ArrangementRecord(day=d("2024-12-24"), seats={"S1": "a1", "S2": "b1", "Window": "c1"})}
    out = compute_arrangement(people("a1", "b1", "c1"), SEATS, h)
    assert out.mode is RotationMode.REASSIGNED
    assert "S3" in out.warnings[0].message
    assert sorted(out.arrangement.values()) == ["a1", "b1", "c1"]
