# seat_rotation/assembly/assembler.py
from __future__ import annotations

import logging
from datetime import date
from typing import Any, List, Mapping, Optional, Sequence

from seat_rotation.config import AppConfig, DEFAULT_CONFIG
from seat_rotation.domain.models import Arrangement, RotationRequest, RotationResult
from seat_rotation.domain.workdays import determine_next_working_day, search_start, skipped_days, today_in
from seat_rotation.history.analyzer import latest_record
from seat_rotation.io_layer.request_reader import parse_request
from seat_rotation.rotation.engine import RotationMode, RotationOutcome, compute_arrangement
from seat_rotation.validation.validator import ValidationWarning

logger = logging.getLogger(__name__)


def describe_seating(arrangement: Arrangement, seats: Sequence[str], names: Mapping[str, str]) -> str:
    return ", ".join(f"{s}: {names.get(arrangement[s], arrangement[s])}" for s in seats)


def build_reasoning(
    outcome: RotationOutcome,
    next_day: date,
    seats: Sequence[str],
    names: Mapping[str, str],
    skipped: Sequence[date] = (),
    special_event: Optional[str] = None,
) -> str:
    parts: List[str] = []
    if outcome.mode is RotationMode.ROTATED:
        parts.append(
            f"Rotated from previous arrangement on {outcome.previous.day.isoformat()}; "
            "each participant advanced one seat."
        )
    elif outcome.mode is RotationMode.REASSIGNED:
        parts.append(
            f"Previous arrangement on {outcome.previous.day.isoformat()} no longer matches the group; "
            "each seat went to the participant who had sat there least often (ties by identifier)."
        )
    else:
        parts.append("No previous arrangement found; participants were assigned to seats in identifier order.")

    parts.append(f"Seating for {next_day.isoformat()}: {describe_seating(outcome.arrangement, seats, names)}.")

    if skipped:
        parts.append(f"Skipped non-working day(s): {', '.join(d.isoformat() for d in skipped)}.")
    if special_event:
        parts.append(f"Special event on {next_day.isoformat()}: {special_event}. The event does not change the rotation.")
    return " ".join(parts)


def compute_next_arrangement(
    request: RotationRequest,
    cfg: AppConfig = DEFAULT_CONFIG,
    today: Optional[date] = None,
    input_warnings: Sequence[ValidationWarning] = (),
) -> RotationResult:
    """
    Next working day, the rotated seat map for it, and a templated explanation.
    Pure: nothing is read or written; the caller commits the result.
    """
    if today is None:
        today = today_in(cfg.timezone_name)

    latest = latest_record(request.history)
    latest_day = latest.day if latest is not None else None
    next_day = determine_next_working_day(latest_day, request.non_working_days, today, cfg.calendar)

    outcome = compute_arrangement(request.participants, request.seats, request.history)

    event = request.special_events.get(next_day)
    skipped = skipped_days(search_start(latest_day, today), next_day, request.non_working_days)
    reasoning = build_reasoning(
        outcome, next_day, request.seats, request.participant_names(), skipped, event
    )

    warnings = list(input_warnings) + list(outcome.warnings)
    logger.info("Proposed %s arrangement for %s", outcome.mode.value, next_day.isoformat())
    return RotationResult(
        arrangement=outcome.arrangement,
        next_working_day=next_day,
        reasoning=reasoning,
        special_event=event,
        warnings=warnings,
    )


def compute_from_payload(
    payload: Mapping[str, Any],
    cfg: AppConfig = DEFAULT_CONFIG,
    today: Optional[date] = None,
) -> RotationResult:
    """Same as compute_next_arrangement, starting from the JSON-shaped request."""
    request, warnings = parse_request(payload, cfg)
    return compute_next_arrangement(request, cfg, today, warnings)
