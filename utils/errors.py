from typing import Optional


class MemorizationError(Exception):
    """Base class for memorization engine errors."""


class PersistenceError(MemorizationError):
    """A progress change was made in memory but the store failed to save it.

    The in-memory entry is left as mutated; the caller decides whether to
    retry the save or discard the entry.
    """

    def __init__(self, entry_id: Optional[str], original: BaseException):
        self.entry_id = entry_id
        self.original = original
        super().__init__(f"Failed to save entry {entry_id}: {original}")


class InvalidBootstrapInput(MemorizationError, ValueError):
    """Declared progress for an imported entry is outside the phase's range."""
