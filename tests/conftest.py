import sqlite3
from datetime import datetime, timezone

import pytest

from models.entry import MemorizationEntry, MemorizationPhase, PhaseProgress
from utils.clock import FixedClock

NOW = datetime(2026, 3, 18, 9, 30, tzinfo=timezone.utc)


class RecordingStore:
    """In-memory stand-in for the host store; can be told to fail for some ids."""

    def __init__(self, fail_ids=()):
        self.saved = []
        self.fail_ids = set(fail_ids)

    def save(self, entry):
        if entry.id in self.fail_ids:
            raise sqlite3.OperationalError("database is locked")
        self.saved.append(entry.model_copy(deep=True))


def make_entry(
    phase=MemorizationPhase.PHASE1,
    phase1=0,
    phase2=0,
    phase3=0,
    last_completion=None,
    managed=True,
    reference="John 3:16",
    start=NOW,
):
    def progress(units):
        return PhaseProgress(units_completed=units, start_date=start if units else None)

    return MemorizationEntry(
        reference=reference,
        passage_text="For God so loved the world",
        date_added=datetime(2026, 1, 1, tzinfo=timezone.utc),
        is_system_managed=managed,
        current_phase=phase,
        phase1=progress(phase1),
        phase2=progress(phase2),
        phase3=progress(phase3),
        last_completion_date=last_completion,
    )


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def store():
    return RecordingStore()
