import logging
import sqlite3
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from db.entries import SQLiteEntryStore
from models.entry import EntryCreate, ExistingEntryCreate, MemorizationEntry
from utils.bootstrap import configure_existing_entry
from utils.clock import Clock
from utils.dependencies import get_clock, get_entry_or_404, get_settings, get_store
from utils.schedule import schedule_summary

router = APIRouter()
logger = logging.getLogger(__name__)


def _new_entry(payload: EntryCreate, settings: Dict[str, Any], clock: Clock) -> MemorizationEntry:
    managed = payload.is_system_managed
    if managed is None:
        managed = settings["system_enabled"]
    passage_text = payload.passage_text
    if payload.individual_verses and not passage_text.strip():
        passage_text = " ".join(
            f"{number} {text}" for number, text in sorted(payload.individual_verses.items())
        )
    return MemorizationEntry(
        reference=payload.reference.strip(),
        passage_text=passage_text,
        individual_verses=payload.individual_verses,
        date_added=clock.now(),
        is_system_managed=managed,
    )


def _insert(store: SQLiteEntryStore, entry: MemorizationEntry) -> MemorizationEntry:
    try:
        return store.insert(entry)
    except sqlite3.IntegrityError:
        raise HTTPException(status_code=400, detail="Entry with this id already exists")


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_entry(
    payload: EntryCreate,
    store: SQLiteEntryStore = Depends(get_store),
    settings: Dict[str, Any] = Depends(get_settings),
    clock: Clock = Depends(get_clock),
):
    """Add a passage starting at Phase 1 with no progress."""
    if not payload.reference or not payload.reference.strip():
        raise HTTPException(status_code=400, detail="Reference is required")
    entry = _insert(store, _new_entry(payload, settings, clock))
    logger.info("Added entry %s (%s)", entry.id, entry.reference)
    return entry


@router.post("/existing", status_code=status.HTTP_201_CREATED)
async def create_existing_entry(
    payload: ExistingEntryCreate,
    store: SQLiteEntryStore = Depends(get_store),
    settings: Dict[str, Any] = Depends(get_settings),
    clock: Clock = Depends(get_clock),
):
    """Add a passage the user was already memorizing, with their reported progress."""
    if not payload.reference or not payload.reference.strip():
        raise HTTPException(status_code=400, detail="Reference is required")
    entry = _new_entry(payload, settings, clock)
    if settings["system_enabled"] and entry.is_system_managed:
        progress = payload.progress
        configure_existing_entry(
            entry,
            progress.phase,
            progress.completed_count,
            progress.has_completed_today,
            clock=clock,
        )
    entry = _insert(store, entry)
    logger.info("Added existing entry %s at %s", entry.id, entry.current_phase.value)
    return entry


@router.get("/")
async def list_entries(store: SQLiteEntryStore = Depends(get_store)):
    return store.list_entries()


@router.get("/{entry_id}")
async def entry_detail(
    entry_id: str,
    store: SQLiteEntryStore = Depends(get_store),
    settings: Dict[str, Any] = Depends(get_settings),
    clock: Clock = Depends(get_clock),
):
    entry = get_entry_or_404(store, entry_id)
    return {
        "entry": entry,
        "display_text": entry.display_text,
        "schedule": schedule_summary(entry, clock, system_enabled=settings["system_enabled"]),
    }
