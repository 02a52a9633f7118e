"""Completion processing: the phase state machine.

Logging a unit bumps the active phase's counter and may move the entry
forward one phase (Phase 1 -> Phase 2 at 5 days, Phase 2 -> Phase 3 at 45
days). Phase 3 never advances. Counters are never reset by a transition.

The caller must not process the same entry concurrently; the read, bump and
save below are not locked.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from db.entries import EntryStore
from models.entry import MemorizationEntry, MemorizationPhase
from utils.clock import Clock
from utils.errors import PersistenceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletionResult:
    entry: MemorizationEntry
    logged: bool
    previous_phase: MemorizationPhase
    advanced_to: Optional[MemorizationPhase] = None

    @property
    def advanced(self) -> bool:
        return self.advanced_to is not None


def _save(store: EntryStore, entry: MemorizationEntry) -> None:
    try:
        store.save(entry)
    except PersistenceError:
        raise
    except Exception as exc:
        raise PersistenceError(entry.id, exc) from exc


def advance_to_next_phase(entry: MemorizationEntry, date: datetime) -> Optional[MemorizationPhase]:
    """Move ``entry`` to the phase after its current one, if there is one."""
    destination = entry.current_phase.next_phase
    if destination is None:
        return None
    entry.current_phase = destination
    progress = entry.progress_for(destination)
    if progress.start_date is None:
        progress.start_date = date
    return destination


def process_completion(
    entry: MemorizationEntry,
    store: EntryStore,
    date: Optional[datetime] = None,
    clock: Optional[Clock] = None,
) -> CompletionResult:
    """Log one practice unit for ``entry`` on ``date`` and persist it.

    A second call on the same calendar day is a silent no-op. This guard is
    per day for every phase, Phase 3 included, so two monthly reviews on
    different days of one month both count.

    Raises PersistenceError if the store rejects the save; the in-memory
    changes are kept.
    """
    clock = clock or Clock()
    date = clock.localize(date) if date is not None else clock.now()
    phase = entry.current_phase

    if clock.same_day(entry.last_completion_date, date):
        logger.debug("Entry %s already completed on %s", entry.id, clock.local_date(date))
        return CompletionResult(entry=entry, logged=False, previous_phase=phase)

    progress = entry.progress_for(phase)
    progress.units_completed += 1
    progress.last_completion_date = date
    if progress.start_date is None:
        progress.start_date = date
    entry.last_completion_date = date

    advanced_to = None
    if progress.is_complete(phase):
        advanced_to = advance_to_next_phase(entry, date)
        logger.info("Entry %s advanced from %s to %s", entry.id, phase.value, advanced_to.value)

    _save(store, entry)
    return CompletionResult(
        entry=entry,
        logged=True,
        previous_phase=phase,
        advanced_to=advanced_to,
    )


def record_review(
    entry: MemorizationEntry,
    store: EntryStore,
    date: Optional[datetime] = None,
    clock: Optional[Clock] = None,
) -> MemorizationEntry:
    """Plain review tracking for when phase scheduling is off.

    Only the last completion date moves; no counters or phases change.
    """
    clock = clock or Clock()
    entry.last_completion_date = clock.localize(date) if date is not None else clock.now()
    _save(store, entry)
    return entry
