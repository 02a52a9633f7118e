# SQL schema for VerseTrack database

SCHEMA_VERSION = 2

SCHEMA_SQL = """
-- Memorized passages with per-phase progress
CREATE TABLE IF NOT EXISTS memorization_entries (
    id TEXT PRIMARY KEY,
    reference TEXT NOT NULL,
    passage_text TEXT NOT NULL DEFAULT '',
    individual_verses TEXT NOT NULL DEFAULT '{}',
    date_added TEXT NOT NULL,
    is_system_managed INTEGER NOT NULL DEFAULT 1,
    current_phase TEXT NOT NULL DEFAULT 'phase1' CHECK(current_phase IN ('phase1', 'phase2', 'phase3')),
    phase1_units INTEGER NOT NULL DEFAULT 0,
    phase1_start_date TEXT,
    phase1_last_completion_date TEXT,
    phase2_units INTEGER NOT NULL DEFAULT 0,
    phase2_start_date TEXT,
    phase2_last_completion_date TEXT,
    phase3_units INTEGER NOT NULL DEFAULT 0,
    phase3_start_date TEXT,
    phase3_last_completion_date TEXT,
    last_completion_date TEXT
);
"""

# Indexes for performance
INDEXES_SQL = """
CREATE INDEX IF NOT EXISTS idx_entries_phase ON memorization_entries (current_phase);
CREATE INDEX IF NOT EXISTS idx_entries_managed ON memorization_entries (is_system_managed);
CREATE INDEX IF NOT EXISTS idx_entries_date_added ON memorization_entries (date_added);
"""
