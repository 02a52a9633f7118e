from datetime import datetime, timedelta, timezone

from models.entry import MemorizationEntry, MemorizationPhase
from utils.schedule import (
    CompletionStatus,
    completion_status,
    current_day_completion_text,
    estimated_phase_completion_date,
    is_ready_for_next_phase,
    next_completion_date,
    phase1_repetitions,
    phase_indicators,
    schedule_summary,
)

from conftest import NOW, make_entry


def test_phase1_repetitions_taper():
    assert [phase1_repetitions(day) for day in range(0, 7)] == [0, 25, 20, 15, 10, 5, 0]


def test_day_text_per_phase():
    assert current_day_completion_text(make_entry(phase1=2)) == "Complete Day 3 (15 repetitions)"
    assert current_day_completion_text(make_entry(phase=MemorizationPhase.PHASE2, phase1=5, phase2=9)) == "Complete Day 10 (1 repetition)"
    assert current_day_completion_text(make_entry(phase=MemorizationPhase.PHASE3, phase1=5, phase2=45)) == "Complete Monthly Review (1 repetition)"


def test_indicators():
    entry = make_entry(phase=MemorizationPhase.PHASE2, phase1=5, phase2=12)
    assert phase_indicators(entry) == {
        "phase1_markers": ["25-", "20-", "15-", "10-", "5"],
        "phase2_tally": 12,
        "phase3_tally": 0,
    }


def test_next_completion_date(clock):
    assert next_completion_date(make_entry(), clock) == NOW
    assert next_completion_date(make_entry(phase1=1, last_completion=NOW), clock) == NOW + timedelta(days=1)
    monthly = make_entry(
        phase=MemorizationPhase.PHASE3, phase1=5, phase2=45, phase3=1, last_completion=datetime(2026, 3, 1, tzinfo=timezone.utc)
    )
    assert next_completion_date(monthly, clock) == datetime(2026, 4, 18, 9, 30, tzinfo=timezone.utc)


def test_estimated_phase_completion(clock):
    assert estimated_phase_completion_date(make_entry(phase1=2), clock) == NOW + timedelta(days=3)
    assert estimated_phase_completion_date(make_entry(phase=MemorizationPhase.PHASE3, phase1=5, phase2=45), clock) is None


def test_ready_for_next_phase():
    assert is_ready_for_next_phase(make_entry(phase1=5))
    assert not is_ready_for_next_phase(make_entry(phase1=4))
    assert not is_ready_for_next_phase(make_entry(phase=MemorizationPhase.PHASE3, phase1=5, phase2=45, phase3=80))


def test_completion_status(clock):
    assert completion_status(make_entry(managed=False), clock) is CompletionStatus.NOT_MANAGED
    assert completion_status(make_entry(phase1=1, last_completion=NOW), clock) is CompletionStatus.COMPLETED_TODAY
    assert completion_status(make_entry(), clock) is CompletionStatus.DUE_TODAY
    assert completion_status(make_entry(phase1=5), clock) is CompletionStatus.CURRENT
    assert CompletionStatus.DUE_TODAY.label == "Due"
    assert CompletionStatus.CURRENT.label == ""


def test_display_text_prefers_individual_verses(clock):
    entry = MemorizationEntry(
        reference="John 3:16-17",
        passage_text="ignored",
        individual_verses={17: "For God did not send", 16: "For God so loved"},
    )
    assert entry.display_text == "16 For God so loved 17 For God did not send"
    assert entry.verse_numbers == [16, 17]
    summary = schedule_summary(entry, clock)
    assert summary["status"] == "due_today"
    assert summary["phase_description"] == "Phase 1 (5 intensive days)"
