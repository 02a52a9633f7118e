from .entry import (
    EntryCreate,
    ExistingEntryCreate,
    ExistingProgress,
    MemorizationEntry,
    MemorizationPhase,
    PhaseProgress,
)
from .statistics import MemorizationStatistics

__all__ = [
    'EntryCreate',
    'ExistingEntryCreate',
    'ExistingProgress',
    'MemorizationEntry',
    'MemorizationPhase',
    'PhaseProgress',
    'MemorizationStatistics',
]
