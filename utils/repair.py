"""Self-healing pass over stored entries.

Phase rules enforced:

* Phase 2 needs Phase 1's 5 days.
* Phase 3 needs Phase 1's 5 days and Phase 2's 45 days.
* Any phase with progress has a start date.

Entries in a phase they haven't earned are demoted to the earliest
unfinished phase. A missing start date is backfilled with the entry's
``date_added``, which is only an approximation of the real start.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from db.entries import EntryStore
from models.entry import MemorizationEntry, MemorizationPhase
from utils.errors import PersistenceError

logger = logging.getLogger(__name__)

PHASE1_TARGET = MemorizationPhase.PHASE1.target
PHASE2_TARGET = MemorizationPhase.PHASE2.target


@dataclass
class RepairReport:
    checked: int = 0
    repaired: List[str] = field(default_factory=list)
    failed: Dict[str, PersistenceError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


def find_violations(entry: MemorizationEntry) -> List[str]:
    problems: List[str] = []
    phase1_units = entry.phase1.units_completed
    phase2_units = entry.phase2.units_completed
    if entry.current_phase is MemorizationPhase.PHASE2 and phase1_units < PHASE1_TARGET:
        problems.append(f"phase2 with only {phase1_units} phase1 days")
    if entry.current_phase is MemorizationPhase.PHASE3:
        if phase1_units < PHASE1_TARGET:
            problems.append(f"phase3 with only {phase1_units} phase1 days")
        if phase2_units < PHASE2_TARGET:
            problems.append(f"phase3 with only {phase2_units} phase2 days")
    for phase in MemorizationPhase:
        progress = entry.progress_for(phase)
        if progress.units_completed > 0 and progress.start_date is None:
            problems.append(f"{phase.value} has progress but no start date")
    return problems


def fix_entry(entry: MemorizationEntry) -> bool:
    """Repair ``entry`` in place. Returns True if anything changed."""
    changed = False
    phase1_done = entry.phase1.units_completed >= PHASE1_TARGET
    phase2_done = entry.phase2.units_completed >= PHASE2_TARGET

    if entry.current_phase is MemorizationPhase.PHASE2 and not phase1_done:
        entry.current_phase = MemorizationPhase.PHASE1
        changed = True
    elif entry.current_phase is MemorizationPhase.PHASE3 and not (phase1_done and phase2_done):
        entry.current_phase = MemorizationPhase.PHASE1 if not phase1_done else MemorizationPhase.PHASE2
        changed = True

    for phase in MemorizationPhase:
        progress = entry.progress_for(phase)
        if progress.units_completed > 0 and progress.start_date is None:
            progress.start_date = entry.date_added
            changed = True
    return changed


def validate_and_fix_entries(entries: Iterable[MemorizationEntry], store: EntryStore) -> RepairReport:
    """Repair every system-managed entry, saving each changed one on its own.

    A failed save is logged and reported; the remaining entries are still
    processed.
    """
    report = RepairReport()
    for entry in entries:
        if not entry.is_system_managed:
            continue
        report.checked += 1
        violations = find_violations(entry)
        if not fix_entry(entry):
            continue
        logger.info("Repaired entry %s: %s", entry.id, "; ".join(violations))
        try:
            store.save(entry)
        except Exception as exc:
            error = exc if isinstance(exc, PersistenceError) else PersistenceError(entry.id, exc)
            logger.warning("Could not save repaired entry %s: %s", entry.id, exc)
            report.failed[entry.id] = error
            continue
        report.repaired.append(entry.id)
    return report
