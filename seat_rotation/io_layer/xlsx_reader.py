# seat_rotation/io_layer/xlsx_reader.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Mapping, Sequence, Tuple

import pandas as pd

from seat_rotation.config import AppConfig
from seat_rotation.domain.models import ArrangementRecord
from seat_rotation.validation.validator import (
    MalformedInput,
    UnparsableDate,
    ValidationWarning,
    parse_iso_day,
    skip_or_raise,
)


@dataclass(frozen=True)
class XlsxHistoryReader:
    cfg: AppConfig

    def read_history(
        self,
        file_path: str,
        seats: Sequence[str],
        include_proposed: bool = False,
    ) -> Tuple[Dict[date, ArrangementRecord], List[ValidationWarning]]:
        """
        Re-import the history sheet written by export_result_xlsx.
        Expected columns: date, then one column per seat holding the participant id.
        Empty cells leave the seat out of that day's record. Rows whose source
        column says "proposed" were never committed and are skipped unless
        include_proposed is set.
        """
        sheet = self.cfg.export.history_sheet
        df = pd.read_excel(file_path, sheet_name=sheet, dtype=str)
        if "date" not in df.columns:
            raise MalformedInput(f"{file_path}:{sheet} has no 'date' column.")

        seat_cols = [s for s in seats if s in df.columns]
        warnings: List[ValidationWarning] = []
        missing = [s for s in seats if s not in df.columns]
        if missing:
            warnings.append(ValidationWarning(
                f"{file_path}:{sheet} has no column for seat(s): {', '.join(missing)}", source=file_path
            ))

        out: Dict[date, ArrangementRecord] = {}
        for i, row in df.iterrows():
            raw_day = row["date"]
            if pd.isna(raw_day):
                continue
            if not include_proposed and "source" in df.columns and row["source"] == "proposed":
                continue
            try:
                text = str(raw_day).strip()
                # real date cells come back as "YYYY-MM-DD 00:00:00"
                if text.endswith(" 00:00:00"):
                    text = text[: -len(" 00:00:00")]
                d = parse_iso_day(text, source=f"{file_path}:{sheet} row {i + 2}")
            except UnparsableDate as e:
                skip_or_raise(e, self.cfg.history.strict_dates, warnings)
                continue
            occupants = {s: str(row[s]).strip() for s in seat_cols if pd.notna(row[s]) and str(row[s]).strip()}
            out[d] = ArrangementRecord(day=d, seats=occupants)
        return out, warnings


def merge_history(*histories: Mapping[date, ArrangementRecord]) -> Dict[date, ArrangementRecord]:
    """Merge several histories; on the same date the later source wins."""
    merged: Dict[date, ArrangementRecord] = {}
    for h in histories:
        for d, rec in h.items():
            merged[d] = rec
    return merged
