from pydantic import BaseModel, Field, model_validator
from typing import Dict, Optional
from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4


class MemorizationPhase(str, Enum):
    PHASE1 = "phase1"
    PHASE2 = "phase2"
    PHASE3 = "phase3"

    @property
    def target(self) -> Optional[int]:
        """Units needed to finish the phase; Phase 3 is open-ended."""
        return PHASE_TARGETS[self]

    @property
    def next_phase(self) -> Optional["MemorizationPhase"]:
        if self is MemorizationPhase.PHASE1:
            return MemorizationPhase.PHASE2
        if self is MemorizationPhase.PHASE2:
            return MemorizationPhase.PHASE3
        return None

    @property
    def is_monthly(self) -> bool:
        return self is MemorizationPhase.PHASE3

    @property
    def description(self) -> str:
        return PHASE_DESCRIPTIONS[self]


PHASE_TARGETS = {
    MemorizationPhase.PHASE1: 5,
    MemorizationPhase.PHASE2: 45,
    MemorizationPhase.PHASE3: None,
}

PHASE_DESCRIPTIONS = {
    MemorizationPhase.PHASE1: "Phase 1 (5 intensive days)",
    MemorizationPhase.PHASE2: "Phase 2 (45 daily reviews)",
    MemorizationPhase.PHASE3: "Phase 3 (monthly reviews)",
}


class PhaseProgress(BaseModel):
    units_completed: int = 0  # days for Phase 1/2, months for Phase 3
    start_date: Optional[datetime] = None
    last_completion_date: Optional[datetime] = None

    def is_complete(self, phase: MemorizationPhase) -> bool:
        if phase.target is None:
            return False
        return self.units_completed >= phase.target


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EntryBase(BaseModel):
    reference: str
    passage_text: str = ""
    individual_verses: Dict[int, str] = Field(default_factory=dict)


class EntryCreate(EntryBase):
    is_system_managed: Optional[bool] = None  # None follows the configured system switch


class MemorizationEntry(EntryBase):
    id: str = Field(default_factory=lambda: uuid4().hex)
    date_added: datetime = Field(default_factory=_utcnow)
    is_system_managed: bool = True
    current_phase: MemorizationPhase = MemorizationPhase.PHASE1
    phase1: PhaseProgress = Field(default_factory=PhaseProgress)
    phase2: PhaseProgress = Field(default_factory=PhaseProgress)
    phase3: PhaseProgress = Field(default_factory=PhaseProgress)
    last_completion_date: Optional[datetime] = None

    class Config:
        from_attributes = True

    def progress_for(self, phase: MemorizationPhase) -> PhaseProgress:
        return getattr(self, phase.value)

    def set_progress(self, phase: MemorizationPhase, progress: PhaseProgress) -> None:
        setattr(self, phase.value, progress)

    @property
    def current_progress(self) -> PhaseProgress:
        return self.progress_for(self.current_phase)

    @property
    def display_text(self) -> str:
        """Flashcard text: numbered individual verses, else the passage text."""
        if not self.individual_verses:
            return self.passage_text
        return " ".join(
            f"{number} {text}" for number, text in sorted(self.individual_verses.items())
        )

    @property
    def verse_numbers(self) -> list:
        return sorted(self.individual_verses)


class ExistingProgress(BaseModel):
    phase: MemorizationPhase
    completed_count: int = 0
    has_completed_today: bool = False

    @model_validator(mode="after")
    def check_completed_count(self):
        # utils.bootstrap imports this module
        from utils.bootstrap import validate_completed_count

        validate_completed_count(self.phase, self.completed_count)
        return self


class ExistingEntryCreate(EntryCreate):
    progress: ExistingProgress
