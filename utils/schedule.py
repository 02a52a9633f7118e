from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from models.entry import MemorizationEntry, MemorizationPhase
from utils.clock import Clock
from utils.due import needs_completion_on

PHASE1_REPETITIONS = [25, 20, 15, 10, 5]
PHASE1_MARKERS = ["25-", "20-", "15-", "10-", "5"]


class CompletionStatus(str, Enum):
    NOT_MANAGED = "not_managed"
    DUE_TODAY = "due_today"
    COMPLETED_TODAY = "completed_today"
    CURRENT = "current"

    @property
    def label(self) -> str:
        return {"due_today": "Due", "completed_today": "Done"}.get(self.value, "")


def phase1_repetitions(day: int) -> int:
    """Read-throughs expected on a given Phase 1 day (1-5)."""
    if 1 <= day <= len(PHASE1_REPETITIONS):
        return PHASE1_REPETITIONS[day - 1]
    return 0


def current_day_completion_text(entry: MemorizationEntry) -> str:
    if entry.current_phase is MemorizationPhase.PHASE1:
        day = entry.phase1.units_completed + 1
        repetitions = PHASE1_REPETITIONS[min(day, len(PHASE1_REPETITIONS)) - 1]
        return f"Complete Day {day} ({repetitions} repetitions)"
    if entry.current_phase is MemorizationPhase.PHASE2:
        day = entry.phase2.units_completed + 1
        return f"Complete Day {day} (1 repetition)"
    return "Complete Monthly Review (1 repetition)"


def phase_indicators(entry: MemorizationEntry) -> Dict[str, object]:
    markers: List[str] = PHASE1_MARKERS[: max(entry.phase1.units_completed, 0)]
    return {
        "phase1_markers": markers,
        "phase2_tally": entry.phase2.units_completed,
        "phase3_tally": entry.phase3.units_completed,
    }


def next_completion_date(entry: MemorizationEntry, clock: Optional[Clock] = None) -> datetime:
    clock = clock or Clock()
    today = clock.now()
    if entry.current_phase.is_monthly:
        if clock.same_month(entry.last_completion_date, today):
            return clock.add_months(today, 1)
        return today
    if clock.same_day(entry.last_completion_date, today):
        return clock.add_days(today, 1)
    return today


def estimated_phase_completion_date(
    entry: MemorizationEntry, clock: Optional[Clock] = None
) -> Optional[datetime]:
    phase = entry.current_phase
    if phase.target is None:
        return None
    clock = clock or Clock()
    remaining = phase.target - entry.progress_for(phase).units_completed
    return clock.add_days(clock.now(), remaining)


def is_ready_for_next_phase(entry: MemorizationEntry) -> bool:
    return entry.current_progress.is_complete(entry.current_phase)


def completion_status(
    entry: MemorizationEntry,
    clock: Optional[Clock] = None,
    system_enabled: bool = True,
) -> CompletionStatus:
    if not entry.is_system_managed:
        return CompletionStatus.NOT_MANAGED
    clock = clock or Clock()
    today = clock.now()
    if clock.same_day(entry.last_completion_date, today):
        return CompletionStatus.COMPLETED_TODAY
    if needs_completion_on(today, entry, clock, system_enabled=system_enabled):
        return CompletionStatus.DUE_TODAY
    return CompletionStatus.CURRENT


def schedule_summary(
    entry: MemorizationEntry,
    clock: Optional[Clock] = None,
    system_enabled: bool = True,
) -> Dict[str, object]:
    """Everything a detail view shows about where an entry stands."""
    clock = clock or Clock()
    status = completion_status(entry, clock, system_enabled=system_enabled)
    return {
        "phase_description": entry.current_phase.description,
        "status": status.value,
        "status_label": status.label,
        "day_text": current_day_completion_text(entry),
        "indicators": phase_indicators(entry),
        "next_completion_date": next_completion_date(entry, clock).isoformat(),
        "estimated_phase_completion_date": (
            estimated_phase_completion_date(entry, clock).isoformat()
            if entry.current_phase.target is not None
            else None
        ),
        "ready_for_next_phase": is_ready_for_next_phase(entry),
    }
