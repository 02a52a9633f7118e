from typing import Optional

from models.entry import MemorizationEntry, MemorizationPhase, PhaseProgress
from utils.clock import Clock
from utils.errors import InvalidBootstrapInput


def validate_completed_count(phase: MemorizationPhase, completed_count: int) -> None:
    """Reject declared progress that a phase could never hold."""
    if completed_count < 0:
        raise InvalidBootstrapInput(f"completed count must not be negative, got {completed_count}")
    target = phase.target
    if target is not None and completed_count > target:
        raise InvalidBootstrapInput(
            f"{phase.description} allows at most {target} completed days, got {completed_count}"
        )


def configure_existing_entry(
    entry: MemorizationEntry,
    phase: MemorizationPhase,
    completed_count: int,
    has_completed_today: bool,
    clock: Optional[Clock] = None,
) -> MemorizationEntry:
    """Seed ``entry`` with progress the user reports from before they started tracking.

    Phases before ``phase`` are marked finished, ``phase`` gets
    ``completed_count`` units and later phases stay empty. The count is not
    range-checked here; see validate_completed_count.
    """
    clock = clock or Clock()
    now = clock.now()
    phases = list(MemorizationPhase)
    declared_index = phases.index(phase)

    for index, each in enumerate(phases):
        if index < declared_index:
            units = each.target
        elif index == declared_index:
            units = completed_count
        else:
            units = 0
        entry.set_progress(
            each,
            PhaseProgress(units_completed=units, start_date=now if units > 0 else None),
        )

    entry.current_phase = phase
    if has_completed_today:
        entry.last_completion_date = now
        entry.current_progress.last_completion_date = now
    return entry
