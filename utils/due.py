from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from models.entry import MemorizationEntry, MemorizationPhase
from utils.clock import Clock


def needs_completion_on(
    date: datetime,
    entry: MemorizationEntry,
    clock: Optional[Clock] = None,
    system_enabled: bool = True,
) -> bool:
    """Whether ``entry`` needs a unit logged on the calendar day of ``date``."""
    if not system_enabled or not entry.is_system_managed:
        return False
    clock = clock or Clock()
    if clock.same_day(entry.last_completion_date, date):
        return False
    phase = entry.current_phase
    if phase.is_monthly:
        return not clock.same_month(entry.last_completion_date, date)
    return entry.progress_for(phase).units_completed < phase.target


def verses_needing_completion(
    date: datetime,
    entries: Iterable[MemorizationEntry],
    clock: Optional[Clock] = None,
    system_enabled: bool = True,
) -> List[MemorizationEntry]:
    clock = clock or Clock()
    return [
        entry
        for entry in entries
        if entry.is_system_managed
        and needs_completion_on(date, entry, clock, system_enabled=system_enabled)
    ]


def verses_by_phase(
    entries: Iterable[MemorizationEntry],
    clock: Optional[Clock] = None,
    system_enabled: bool = True,
) -> Tuple[List[MemorizationEntry], List[MemorizationEntry], List[MemorizationEntry]]:
    """Today's due entries split into (phase1, phase2, phase3) lists."""
    clock = clock or Clock()
    due = verses_needing_completion(clock.now(), entries, clock, system_enabled=system_enabled)
    grouped = {phase: [] for phase in MemorizationPhase}
    for entry in due:
        grouped[entry.current_phase].append(entry)
    return (
        grouped[MemorizationPhase.PHASE1],
        grouped[MemorizationPhase.PHASE2],
        grouped[MemorizationPhase.PHASE3],
    )
