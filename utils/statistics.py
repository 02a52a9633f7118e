from typing import Iterable, Optional

from models.entry import MemorizationEntry, MemorizationPhase
from models.statistics import MemorizationStatistics
from utils.clock import Clock
from utils.due import verses_needing_completion


def get_statistics(
    entries: Iterable[MemorizationEntry],
    clock: Optional[Clock] = None,
    system_enabled: bool = True,
) -> MemorizationStatistics:
    """Phase counts and today's due total over system-managed entries."""
    clock = clock or Clock()
    managed = [entry for entry in entries if entry.is_system_managed]
    counts = {phase: 0 for phase in MemorizationPhase}
    for entry in managed:
        counts[entry.current_phase] += 1
    due_today = verses_needing_completion(clock.now(), managed, clock, system_enabled=system_enabled)
    return MemorizationStatistics(
        total_verses=len(managed),
        phase1_count=counts[MemorizationPhase.PHASE1],
        phase2_count=counts[MemorizationPhase.PHASE2],
        phase3_count=counts[MemorizationPhase.PHASE3],
        due_today=len(due_today),
    )
