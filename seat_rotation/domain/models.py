# seat_rotation/domain/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Mapping, Optional, Set

from seat_rotation.validation.validator import ValidationWarning

# seat -> participant id
Arrangement = Dict[str, str]


@dataclass(frozen=True)
class Participant:
    """Identity is pid only; name is for explanation text."""
    pid: str
    name: str = field(compare=False)

    @property
    def display_name(self) -> str:
        return self.name or self.pid


@dataclass(frozen=True)
class ArrangementRecord:
    day: date
    seats: Mapping[str, str]  # seat -> pid


@dataclass
class RotationRequest:
    participants: List[Participant]
    seats: List[str]                              # ordered
    history: Dict[date, ArrangementRecord]        # day -> record
    non_working_days: Set[date] = field(default_factory=set)
    special_events: Dict[date, str] = field(default_factory=dict)

    def participant_names(self) -> Dict[str, str]:
        return {p.pid: p.display_name for p in self.participants}


@dataclass
class RotationResult:
    arrangement: Arrangement
    next_working_day: date
    reasoning: str
    special_event: Optional[str] = None
    warnings: List[ValidationWarning] = field(default_factory=list)

    def to_dict(self, include_diagnostics: bool = False) -> Dict[str, object]:
        out: Dict[str, object] = {
            "arrangement": dict(self.arrangement),
            "nextWorkingDay": self.next_working_day.isoformat(),
            "reasoning": self.reasoning,
        }
        if include_diagnostics:
            out["specialEvent"] = self.special_event
            out["warnings"] = [w.message for w in self.warnings]
        return out
