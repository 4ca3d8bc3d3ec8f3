# seat_rotation/reporting/report.py
from __future__ import annotations

from datetime import date
from typing import Mapping, Optional, Sequence

import pandas as pd

from seat_rotation.domain.models import ArrangementRecord, Participant, RotationResult
from seat_rotation.history.analyzer import history_sorted, occupancy_counts, total_assignments


def build_history_table(
    history: Mapping[date, ArrangementRecord],
    seats: Sequence[str],
    proposed: Optional[RotationResult] = None,
) -> pd.DataFrame:
    """One row per day, one column per seat (participant ids), oldest first."""
    rows = []
    for rec in history_sorted(history):
        row = dict(date=rec.day.isoformat(), source="history")
        for s in seats:
            row[s] = rec.seats.get(s, "")
        rows.append(row)

    if proposed is not None:
        row = dict(date=proposed.next_working_day.isoformat(), source="proposed")
        for s in seats:
            row[s] = proposed.arrangement.get(s, "")
        rows.append(row)

    return pd.DataFrame(rows, columns=["date", "source", *seats])


def build_next_table(result: RotationResult, seats: Sequence[str], names: Mapping[str, str]) -> pd.DataFrame:
    rows = []
    for s in seats:
        pid = result.arrangement[s]
        rows.append(dict(
            date=result.next_working_day.isoformat(),
            seat=s,
            participant_id=pid,
            display_name=names.get(pid, pid),
            special_event=result.special_event or "",
        ))
    return pd.DataFrame(rows)


def build_fairness_table(
    history: Mapping[date, ArrangementRecord],
    participants: Sequence[Participant],
    seats: Sequence[str],
) -> pd.DataFrame:
    """How often each participant has had each seat (current roster and seats only)."""
    counts = occupancy_counts(history, participants, seats)
    rows = []
    for p in participants:
        row = dict(participant_id=p.pid, display_name=p.display_name)
        row.update(counts[p.pid])
        row["total"] = sum(counts[p.pid].values())
        rows.append(row)
    df = pd.DataFrame(rows, columns=["participant_id", "display_name", *seats, "total"])
    if not df.empty:
        df = df.sort_values(["display_name", "participant_id"]).reset_index(drop=True)
    return df


def fairness_summary(history: Mapping[date, ArrangementRecord], fairness_df: pd.DataFrame) -> str:
    """One-line summary: total assignments and the spread of per-person totals."""
    total = total_assignments(history)
    if fairness_df.empty:
        return f"{total} total assignments"
    spread = int(fairness_df["total"].max() - fairness_df["total"].min())
    return f"{total} total assignments; per-person totals differ by at most {spread}"
