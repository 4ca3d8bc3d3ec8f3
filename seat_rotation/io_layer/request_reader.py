# seat_rotation/io_layer/request_reader.py
from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Set, Tuple

from seat_rotation.config import AppConfig, DEFAULT_CONFIG
from seat_rotation.domain.models import ArrangementRecord, Participant, RotationRequest
from seat_rotation.validation.validator import (
    MalformedInput,
    UnparsableDate,
    ValidationWarning,
    parse_iso_day,
    skip_or_raise,
)

logger = logging.getLogger(__name__)


def _warn(warnings: List[ValidationWarning], message: str, source: str = "history") -> None:
    logger.warning(message)
    warnings.append(ValidationWarning(message, source=source))


def _ident(value: Any) -> str:
    """Participant ids and seat names: any scalar, compared as trimmed text."""
    return str(value).strip()


def _is_scalar_id(value: Any) -> bool:
    return isinstance(value, (str, int)) and not isinstance(value, bool)


def _require_list(payload: Mapping[str, Any], key: str) -> list:
    if key not in payload:
        raise MalformedInput(f"Request is missing '{key}'.")
    value = payload[key]
    if not isinstance(value, list):
        raise MalformedInput(f"'{key}' must be a list.")
    return value


def read_participants(raw: Iterable[Any]) -> List[Participant]:
    out: List[Participant] = []
    for i, item in enumerate(raw):
        if not isinstance(item, Mapping) or "id" not in item:
            raise MalformedInput(f"participants[{i}] must be an object with an 'id'.")
        if not _is_scalar_id(item["id"]):
            raise MalformedInput(f"participants[{i}].id must be a string or an integer.")
        pid = _ident(item["id"])
        name = str(item.get("displayName") or "").strip()
        out.append(Participant(pid=pid, name=name))
    return out


def read_seats(raw: Iterable[Any]) -> List[str]:
    seats = []
    for i, s in enumerate(raw):
        if not isinstance(s, str):
            raise MalformedInput(f"seats[{i}] must be a string.")
        seats.append(_ident(s))
    return seats


def _history_entries(raw: Any) -> List[Tuple[Any, Any]]:
    """History as a list of {date, seats} objects, or as a {date: {seats}} mapping."""
    if raw is None:
        return []
    if isinstance(raw, Mapping):
        entries = []
        for d, rec in raw.items():
            seats = rec.get("seats") if isinstance(rec, Mapping) else None
            entries.append((d, seats))
        return entries
    if isinstance(raw, list):
        return [
            (item.get("date"), item.get("seats")) if isinstance(item, Mapping) else (None, None)
            for item in raw
        ]
    raise MalformedInput("'history' must be a list or an object keyed by date.")


def read_history(
    raw: Any,
    cfg: AppConfig,
    warnings: List[ValidationWarning],
) -> Dict[date, ArrangementRecord]:
    entries = _history_entries(raw)
    history: Dict[date, ArrangementRecord] = {}
    for i, (raw_day, seats) in enumerate(entries):
        try:
            d = parse_iso_day(raw_day, source=f"history[{i}]")
        except UnparsableDate as e:
            skip_or_raise(e, cfg.history.strict_dates, warnings)
            continue

        if not isinstance(seats, Mapping) or not all(_is_scalar_id(v) for v in seats.values()):
            _warn(warnings, f"Skipped history[{i}] ({d.isoformat()}): 'seats' must map seat names to participant ids.")
            continue

        if d in history:
            # dates are unique keys: the later entry wins
            _warn(warnings, f"Duplicate history date {d.isoformat()}; the later entry replaces the earlier one.")
        history[d] = ArrangementRecord(day=d, seats={_ident(k): _ident(v) for k, v in seats.items()})

    if entries and not history:
        _warn(warnings, f"History has {len(entries)} entries but none are usable; treating it as empty.")
    return history


def read_non_working_days(raw: Iterable[Any], cfg: AppConfig, warnings: List[ValidationWarning]) -> Set[date]:
    out: Set[date] = set()
    for i, v in enumerate(raw):
        try:
            out.add(parse_iso_day(v, source=f"nonWorkingDays[{i}]"))
        except UnparsableDate as e:
            skip_or_raise(e, cfg.history.strict_dates, warnings)
    return out


def read_special_events(raw: Mapping[Any, Any], cfg: AppConfig, warnings: List[ValidationWarning]) -> Dict[date, str]:
    out: Dict[date, str] = {}
    for k, desc in raw.items():
        try:
            d = parse_iso_day(k, source="specialEvents")
        except UnparsableDate as e:
            skip_or_raise(e, cfg.history.strict_dates, warnings)
            continue
        out[d] = str(desc)
    return out


def parse_request(
    payload: Mapping[str, Any],
    cfg: AppConfig = DEFAULT_CONFIG,
) -> Tuple[RotationRequest, List[ValidationWarning]]:
    if not isinstance(payload, Mapping):
        raise MalformedInput("Request must be a JSON object.")
    warnings: List[ValidationWarning] = []

    participants = read_participants(_require_list(payload, "participants"))
    seats = read_seats(_require_list(payload, "seats"))
    history = read_history(payload.get("history"), cfg, warnings)

    nwd_raw = payload.get("nonWorkingDays") or []
    if not isinstance(nwd_raw, list):
        raise MalformedInput("'nonWorkingDays' must be a list.")
    ev_raw = payload.get("specialEvents") or {}
    if not isinstance(ev_raw, Mapping):
        raise MalformedInput("'specialEvents' must be an object keyed by date.")

    req = RotationRequest(
        participants=participants,
        seats=seats,
        history=history,
        non_working_days=read_non_working_days(nwd_raw, cfg, warnings),
        special_events=read_special_events(ev_raw, cfg, warnings),
    )
    return req, warnings


def load_request(path: str | Path, cfg: AppConfig = DEFAULT_CONFIG) -> Tuple[RotationRequest, List[ValidationWarning]]:
    with open(path, "r", encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            raise MalformedInput(f"{path} is not valid JSON: {e}") from e
    return parse_request(payload, cfg)
