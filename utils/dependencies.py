import threading
import weakref
from contextlib import contextmanager
from typing import Any, Dict

from fastapi import Depends, HTTPException, status

from config import load_config
from db.database import get_db
from db.entries import SQLiteEntryStore
from models.entry import MemorizationEntry
from utils.clock import Clock, clock_from_config
from utils.errors import PersistenceError

PERSISTENCE_FAILURE_DETAIL = "Progress not saved - will retry"

# A lock lives only while some request holds a reference to it.
_entry_locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()
_entry_locks_guard = threading.Lock()


def get_settings() -> Dict[str, Any]:
    """FastAPI dependency returning the memorization config section."""
    return load_config()["memorization"]


def get_clock() -> Clock:
    return clock_from_config(load_config())


def get_store(conn=Depends(get_db)) -> SQLiteEntryStore:
    return SQLiteEntryStore(conn)


def get_entry_or_404(store: SQLiteEntryStore, entry_id: str) -> MemorizationEntry:
    entry = store.get(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Entry not found")
    return entry


@contextmanager
def entry_lock(entry_id: str):
    """Serialize read-modify-write of a single entry across worker threads."""
    with _entry_locks_guard:
        lock = _entry_locks.get(entry_id)
        if lock is None:
            lock = threading.Lock()
            _entry_locks[entry_id] = lock
    with lock:
        yield


def persistence_http_error(exc: PersistenceError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail={"message": PERSISTENCE_FAILURE_DETAIL, "entry_id": exc.entry_id},
    )
