# seat_rotation/reporting/export_xlsx.py
from __future__ import annotations

from pathlib import Path

import pandas as pd

from seat_rotation.config import ExportConfig


def export_result_xlsx(
    out_path: str,
    history_df: pd.DataFrame,
    next_df: pd.DataFrame,
    fairness_df: pd.DataFrame,
    cfg: ExportConfig = ExportConfig(),
) -> str:
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(out_path, engine="openpyxl") as w:
        # the history sheet is what XlsxHistoryReader reads back
        history_df.to_excel(w, sheet_name=cfg.history_sheet, index=False)
        next_df.to_excel(w, sheet_name=cfg.next_sheet, index=False)
        fairness_df.to_excel(w, sheet_name=cfg.fairness_sheet, index=False)
    return out_path
