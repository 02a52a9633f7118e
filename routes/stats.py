from typing import Any, Dict

from fastapi import APIRouter, Depends

from db.entries import SQLiteEntryStore
from utils.clock import Clock
from utils.dependencies import get_clock, get_settings, get_store
from utils.statistics import get_statistics
from utils.streak import calculate_completion_streak

router = APIRouter()


@router.get("/")
async def memorization_stats(
    store: SQLiteEntryStore = Depends(get_store),
    settings: Dict[str, Any] = Depends(get_settings),
    clock: Clock = Depends(get_clock),
):
    """Stats dashboard: phase counts, due today, completion rate and streak."""
    entries = store.list_entries(system_managed_only=True)
    enabled = settings["system_enabled"]
    statistics = get_statistics(entries, clock, system_enabled=enabled)
    streak = calculate_completion_streak(
        entries,
        clock,
        max_days=settings["streak_lookback_days"],
        system_enabled=enabled,
    )
    return {**statistics.model_dump(), "streak": streak}
