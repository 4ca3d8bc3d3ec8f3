# seat_rotation/main_cli.py
from __future__ import annotations

import argparse
import json
import logging
from dataclasses import replace

from seat_rotation.assembly.assembler import compute_next_arrangement
from seat_rotation.config import DEFAULT_CONFIG
from seat_rotation.domain.workdays import today_in
from seat_rotation.io_layer.request_reader import load_request
from seat_rotation.io_layer.xlsx_reader import XlsxHistoryReader, merge_history
from seat_rotation.reporting.export_xlsx import export_result_xlsx
from seat_rotation.reporting.report import build_fairness_table, build_history_table, build_next_table, fairness_summary
from seat_rotation.validation.validator import SchedulingError, parse_iso_day


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Propose the next fair seat rotation")
    p.add_argument("--request", required=True, help="Request JSON (participants, seats, history, nonWorkingDays, specialEvents)")
    p.add_argument("--history-xlsx", nargs="*", default=[], help="Previously exported workbooks to read history from")
    p.add_argument("--today", default=None, help="Override today's date (YYYY-MM-DD)")
    p.add_argument("--timezone", default=None, help="IANA zone used for today (default: local)")
    p.add_argument("--strict-dates", action="store_true", help="Fail on unparsable dates instead of skipping them")
    p.add_argument("--out", default=None, help="Write history/next/fairness sheets to this xlsx")
    p.add_argument("--json", action="store_true", help="Print the result as JSON")
    p.add_argument("--log-level", default="WARNING", type=str.upper,
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    cfg = DEFAULT_CONFIG
    if args.timezone:
        cfg = replace(cfg, timezone_name=args.timezone)
    if args.strict_dates:
        cfg = replace(cfg, history=replace(cfg.history, strict_dates=True))

    try:
        today = parse_iso_day(args.today, source="--today") if args.today else today_in(cfg.timezone_name)
        request, warnings = load_request(args.request, cfg)

        reader = XlsxHistoryReader(cfg=cfg)
        for path in args.history_xlsx:
            extra, w = reader.read_history(path, request.seats)
            warnings.extend(w)
            # workbook first, request JSON wins on the same date
            request.history = merge_history(extra, request.history)

        result = compute_next_arrangement(request, cfg, today, warnings)
    except SchedulingError as e:
        print(f"[ERROR] {e.message}")
        return 1

    if args.json:
        # warnings are part of the JSON document
        print(json.dumps(result.to_dict(include_diagnostics=True), ensure_ascii=False, indent=2))
    else:
        for w in result.warnings:
            print(f"[WARN] {w.message}")
        print(f"[RESULT] {result.next_working_day.isoformat()}")
        for seat in request.seats:
            pid = result.arrangement[seat]
            print(f"  {seat}: {request.participant_names().get(pid, pid)}")
        print(result.reasoning)

    if args.out:
        history_df = build_history_table(request.history, request.seats, proposed=result)
        next_df = build_next_table(result, request.seats, request.participant_names())
        fairness_df = build_fairness_table(request.history, request.participants, request.seats)
        out_path = export_result_xlsx(args.out, history_df, next_df, fairness_df, cfg.export)
        if not args.json:
            print(f"[RESULT] {fairness_summary(request.history, fairness_df)}")
            print(f"[RESULT] OK: {out_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
