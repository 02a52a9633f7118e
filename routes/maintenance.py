import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from config import set_system_enabled
from db.entries import SQLiteEntryStore
from utils.dependencies import get_store
from utils.repair import validate_and_fix_entries

router = APIRouter()
logger = logging.getLogger(__name__)


class SystemToggle(BaseModel):
    enabled: bool


@router.post("/repair")
async def repair_entries(store: SQLiteEntryStore = Depends(get_store)):
    """Self-heal entries whose phase or start dates break the phase rules."""
    report = validate_and_fix_entries(store.list_entries(), store)
    if not report.ok:
        logger.warning("Repair left %d entries unsaved", len(report.failed))
    return {
        "checked": report.checked,
        "repaired": report.repaired,
        "failed": {entry_id: str(error) for entry_id, error in report.failed.items()},
    }


@router.post("/system")
async def toggle_system(payload: SystemToggle):
    """Turn phase scheduling on or off."""
    set_system_enabled(payload.enabled)
    logger.info("Memorization system %s", "enabled" if payload.enabled else "disabled")
    return {"system_enabled": payload.enabled}
