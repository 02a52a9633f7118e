from datetime import datetime, timedelta, timezone

import pytest

from models.entry import MemorizationPhase
from utils.clock import Clock
from utils.due import needs_completion_on, verses_by_phase, verses_needing_completion

from conftest import NOW, make_entry


def test_new_entry_is_due(clock):
    assert needs_completion_on(NOW, make_entry(), clock)


def test_unmanaged_entry_is_never_due(clock):
    assert not needs_completion_on(NOW, make_entry(managed=False), clock)


def test_system_switch_off_means_nothing_is_due(clock):
    entries = [make_entry(), make_entry(phase=MemorizationPhase.PHASE2, phase1=5)]
    assert not needs_completion_on(NOW, entries[0], clock, system_enabled=False)
    assert verses_needing_completion(NOW, entries, clock, system_enabled=False) == []


def test_completed_earlier_same_day_is_not_due(clock):
    entry = make_entry(phase1=2, last_completion=NOW.replace(hour=0, minute=5))
    assert not needs_completion_on(NOW.replace(hour=23), entry, clock)


def test_completed_yesterday_is_due(clock):
    entry = make_entry(phase1=2, last_completion=NOW - timedelta(days=1))
    assert needs_completion_on(NOW, entry, clock)


@pytest.mark.parametrize(
    "phase, phase1, phase2, expected",
    [
        (MemorizationPhase.PHASE1, 4, 0, True),
        (MemorizationPhase.PHASE1, 5, 0, False),
        (MemorizationPhase.PHASE2, 5, 44, True),
        (MemorizationPhase.PHASE2, 5, 45, False),
    ],
)
def test_daily_phase_targets(clock, phase, phase1, phase2, expected):
    entry = make_entry(phase=phase, phase1=phase1, phase2=phase2, last_completion=NOW - timedelta(days=2))
    assert needs_completion_on(NOW, entry, clock) is expected


@pytest.mark.parametrize(
    "last_completion, expected",
    [
        (None, True),
        (datetime(2026, 3, 2, tzinfo=timezone.utc), False),
        (datetime(2026, 2, 28, tzinfo=timezone.utc), True),
    ],
)
def test_phase3_is_due_once_a_month(clock, last_completion, expected):
    entry = make_entry(phase=MemorizationPhase.PHASE3, phase1=5, phase2=45, phase3=1, last_completion=last_completion)
    assert needs_completion_on(NOW, entry, clock) is expected


def test_calendar_day_follows_clock_timezone():
    central = Clock(timezone(timedelta(hours=-5)))
    entry = make_entry(phase1=1, last_completion=datetime(2026, 3, 18, 3, 0, tzinfo=timezone.utc))
    probe = datetime(2026, 3, 18, 14, 0, tzinfo=timezone.utc)
    # Same UTC date, but Mar 17 vs Mar 18 locally.
    assert needs_completion_on(probe, entry, central)
    assert not needs_completion_on(probe, entry, Clock(timezone.utc))


def test_verses_needing_completion_filters(clock):
    due = make_entry(reference="Psalm 23:1")
    done_today = make_entry(phase1=1, last_completion=NOW)
    unmanaged = make_entry(managed=False)
    assert verses_needing_completion(NOW, [due, done_today, unmanaged], clock) == [due]


def test_verses_by_phase_groups_without_mutating(clock):
    p1 = make_entry()
    p2 = make_entry(phase=MemorizationPhase.PHASE2, phase1=5, phase2=3)
    p3 = make_entry(phase=MemorizationPhase.PHASE3, phase1=5, phase2=45)
    p3_done = make_entry(
        phase=MemorizationPhase.PHASE3, phase1=5, phase2=45, phase3=1, last_completion=NOW - timedelta(days=3)
    )
    entries = [p1, p2, p3, p3_done]
    before = [entry.model_dump() for entry in entries]

    phase1, phase2, phase3 = verses_by_phase(entries, clock)

    assert phase1 == [p1]
    assert phase2 == [p2]
    assert phase3 == [p3]
    assert [entry.model_dump() for entry in entries] == before


def test_only_phase3_is_monthly():
    assert [phase for phase in MemorizationPhase if phase.is_monthly] == [MemorizationPhase.PHASE3]
