from typing import List, Optional, Sequence

from models.entry import MemorizationEntry
from utils.clock import Clock
from utils.due import verses_needing_completion

DEFAULT_LOOKBACK_DAYS = 365


def calculate_completion_streak(
    entries: Sequence[MemorizationEntry],
    clock: Optional[Clock] = None,
    max_days: int = DEFAULT_LOOKBACK_DAYS,
    system_enabled: bool = True,
) -> int:
    """Count consecutive days, walking back from today, where due work was done.

    A day with nothing due is skipped without breaking the streak. A day with
    due entries and no completions ends it. An entry completed on a day is
    never due that same day, so "all done" compares counts rather than
    membership. At most ``max_days`` days are examined.
    """
    clock = clock or Clock()
    managed: List[MemorizationEntry] = [entry for entry in entries if entry.is_system_managed]
    today = clock.now()
    streak = 0
    for offset in range(max_days):
        day = clock.add_days(today, -offset)
        due = verses_needing_completion(day, managed, clock, system_enabled=system_enabled)
        if not due:
            continue
        completed = [
            entry for entry in managed if clock.same_day(entry.last_completion_date, day)
        ]
        if not completed:
            break
        if len(completed) >= len(due):
            streak += 1
    return streak
