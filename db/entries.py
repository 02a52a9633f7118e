from __future__ import annotations

import json
import sqlite3
from datetime import datetime
from typing import List, Optional, Protocol

from models.entry import MemorizationEntry, MemorizationPhase, PhaseProgress

PHASES = ("phase1", "phase2", "phase3")

COLUMNS = [
    "id",
    "reference",
    "passage_text",
    "individual_verses",
    "date_added",
    "is_system_managed",
    "current_phase",
    "phase1_units",
    "phase1_start_date",
    "phase1_last_completion_date",
    "phase2_units",
    "phase2_start_date",
    "phase2_last_completion_date",
    "phase3_units",
    "phase3_start_date",
    "phase3_last_completion_date",
    "last_completion_date",
]


class EntryStore(Protocol):
    """What the engine needs from the host's persistence layer."""

    def save(self, entry: MemorizationEntry) -> None:
        ...


def _to_ts(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _from_ts(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value)


def entry_to_row(entry: MemorizationEntry) -> dict:
    row = {
        "id": entry.id,
        "reference": entry.reference,
        "passage_text": entry.passage_text,
        "individual_verses": json.dumps({str(k): v for k, v in entry.individual_verses.items()}),
        "date_added": _to_ts(entry.date_added),
        "is_system_managed": int(entry.is_system_managed),
        "current_phase": entry.current_phase.value,
        "last_completion_date": _to_ts(entry.last_completion_date),
    }
    for phase in PHASES:
        progress: PhaseProgress = getattr(entry, phase)
        row[f"{phase}_units"] = progress.units_completed
        row[f"{phase}_start_date"] = _to_ts(progress.start_date)
        row[f"{phase}_last_completion_date"] = _to_ts(progress.last_completion_date)
    return row


def row_to_entry(row) -> MemorizationEntry:
    data = dict(row)
    verses = json.loads(data.get("individual_verses") or "{}")
    progress = {
        phase: PhaseProgress(
            units_completed=int(data[f"{phase}_units"] or 0),
            start_date=_from_ts(data[f"{phase}_start_date"]),
            last_completion_date=_from_ts(data.get(f"{phase}_last_completion_date")),
        )
        for phase in PHASES
    }
    return MemorizationEntry(
        id=data["id"],
        reference=data["reference"],
        passage_text=data["passage_text"] or "",
        individual_verses={int(k): v for k, v in verses.items()},
        date_added=_from_ts(data["date_added"]),
        is_system_managed=bool(data["is_system_managed"]),
        current_phase=MemorizationPhase(data["current_phase"]),
        last_completion_date=_from_ts(data["last_completion_date"]),
        **progress,
    )


class SQLiteEntryStore:
    """Entry persistence on the ``memorization_entries`` table.

    Every write commits immediately so one failed save never holds back
    another entry's.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def insert(self, entry: MemorizationEntry) -> MemorizationEntry:
        row = entry_to_row(entry)
        placeholders = ", ".join("?" for _ in COLUMNS)
        self.conn.execute(
            f"INSERT INTO memorization_entries ({', '.join(COLUMNS)}) VALUES ({placeholders})",
            [row[column] for column in COLUMNS],
        )
        self.conn.commit()
        return entry

    def save(self, entry: MemorizationEntry) -> None:
        row = entry_to_row(entry)
        assignments = ", ".join(f"{column} = ?" for column in COLUMNS if column != "id")
        cursor = self.conn.execute(
            f"UPDATE memorization_entries SET {assignments} WHERE id = ?",
            [row[column] for column in COLUMNS if column != "id"] + [entry.id],
        )
        if cursor.rowcount == 0:
            raise LookupError(f"Entry {entry.id} does not exist")
        self.conn.commit()

    def get(self, entry_id: str) -> Optional[MemorizationEntry]:
        cursor = self.conn.execute(
            "SELECT * FROM memorization_entries WHERE id = ?",
            (entry_id,),
        )
        row = cursor.fetchone()
        return row_to_entry(row) if row else None

    def list_entries(self, system_managed_only: bool = False) -> List[MemorizationEntry]:
        query = "SELECT * FROM memorization_entries"
        if system_managed_only:
            query += " WHERE is_system_managed = 1"
        query += " ORDER BY date_added ASC, id ASC"
        return [row_to_entry(row) for row in self.conn.execute(query).fetchall()]
