"""Session-wide error slot."""

from typing import Optional

from tradejournal.editor.observable import Observable


# User-facing messages reported by editor operations
CREATE_FAILED = "Failed to create new entry"
SAVE_FAILED = "Failed to save changes"
DELETE_FAILED = "Failed to delete entry"
LOAD_FAILED = "Failed to load journal data"
ENTRY_LOAD_FAILED = "Failed to load journal entry"
ENTRY_NOT_FOUND = "Journal entry not found"
SUMMARY_FAILED = "Failed to load trading summary"


class ErrorSlot(Observable[Optional[str]]):
    """Holds the last user-facing error until it is explicitly cleared."""

    def __init__(self) -> None:
        super().__init__()
        self._message: Optional[str] = None

    @property
    def message(self) -> Optional[str]:
        """Current error message, None when clear."""
        return self._message

    def snapshot(self) -> Optional[str]:
        return self._message

    def set(self, message: str) -> None:
        """Report an error, replacing any previous one."""
        self._message = message
        self._notify()

    def clear(self) -> None:
        """Clear the slot."""
        if self._message is not None:
            self._message = None
            self._notify()

    def __bool__(self) -> bool:
        return self._message is not None
