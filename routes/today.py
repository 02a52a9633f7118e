import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from db.entries import SQLiteEntryStore
from models.entry import MemorizationEntry
from utils.clock import Clock
from utils.completion import process_completion, record_review
from utils.dependencies import (
    entry_lock,
    get_clock,
    get_entry_or_404,
    get_settings,
    get_store,
    persistence_http_error,
)
from utils.due import verses_by_phase
from utils.errors import PersistenceError
from utils.schedule import current_day_completion_text

router = APIRouter()
logger = logging.getLogger(__name__)


def _queue_item(entry: MemorizationEntry) -> Dict[str, Any]:
    return {
        "id": entry.id,
        "reference": entry.reference,
        "display_text": entry.display_text,
        "phase": entry.current_phase.value,
        "day_text": current_day_completion_text(entry),
    }


def build_today_queue(entries: List[MemorizationEntry], clock: Clock, system_enabled: bool) -> Dict[str, Any]:
    phase1, phase2, phase3 = verses_by_phase(entries, clock, system_enabled=system_enabled)
    return {
        "date": clock.today().isoformat(),
        "system_enabled": system_enabled,
        "phase1": [_queue_item(entry) for entry in phase1],
        "phase2": [_queue_item(entry) for entry in phase2],
        "phase3": [_queue_item(entry) for entry in phase3],
        "total_due": len(phase1) + len(phase2) + len(phase3),
    }


@router.get("/")
async def today_view(
    store: SQLiteEntryStore = Depends(get_store),
    settings: Dict[str, Any] = Depends(get_settings),
    clock: Clock = Depends(get_clock),
):
    entries = store.list_entries(system_managed_only=True)
    return build_today_queue(entries, clock, settings["system_enabled"])


@router.post("/{entry_id}/complete")
async def complete_entry(
    entry_id: str,
    store: SQLiteEntryStore = Depends(get_store),
    settings: Dict[str, Any] = Depends(get_settings),
    clock: Clock = Depends(get_clock),
):
    """Log today's repetition for an entry."""
    with entry_lock(entry_id):
        entry = get_entry_or_404(store, entry_id)
        try:
            if settings["system_enabled"] and entry.is_system_managed:
                result = process_completion(entry, store, clock=clock)
                return {
                    "entry": result.entry,
                    "logged": result.logged,
                    "previous_phase": result.previous_phase.value,
                    "advanced_to": result.advanced_to.value if result.advanced_to else None,
                }
            entry = record_review(entry, store, clock=clock)
            return {"entry": entry, "logged": True, "previous_phase": entry.current_phase.value, "advanced_to": None}
        except PersistenceError as exc:
            logger.error("Completion for %s not saved: %s", entry_id, exc.original)
            raise persistence_http_error(exc)
