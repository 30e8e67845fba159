"""Editing-state coordinator.

Tracks the single (entry, field, panel) cell in edit mode. Opening a
cell always wins: whatever was active before is closed implicitly.
"""

import logging
from typing import Optional

from tradejournal.editor.observable import Observable
from tradejournal.models import EditingTarget

logger = logging.getLogger(__name__)


class EditingCoordinator(Observable[Optional[EditingTarget]]):
    """State machine over ``EditingTarget | None``."""

    def __init__(self) -> None:
        super().__init__()
        self._active: Optional[EditingTarget] = None

    @property
    def active(self) -> Optional[EditingTarget]:
        """Cell currently in edit mode, if any."""
        return self._active

    def snapshot(self) -> Optional[EditingTarget]:
        return self._active

    def open(self, target: EditingTarget) -> Optional[EditingTarget]:
        """Put a cell in edit mode.

        Args:
            target: Cell to edit.

        Returns:
            Target that was implicitly closed, if it differs.
        """
        previous = self._active
        if previous == target:
            return None
        self._active = target
        logger.debug("editing %s (closed %s)", target, previous)
        self._notify()
        return previous

    def close(self) -> Optional[EditingTarget]:
        """Leave edit mode.

        Returns:
            Target that was closed, if any.
        """
        previous = self._active
        if previous is None:
            return None
        self._active = None
        self._notify()
        return previous

    def close_if(self, target: EditingTarget) -> bool:
        """Close only when the given target is the active one.

        Returns:
            True if the target was active and is now closed.
        """
        if self._active != target:
            return False
        self.close()
        return True

    def is_editing(
        self,
        entry_id: str,
        field: str,
        sub_field: Optional[str] = None,
    ) -> bool:
        """Whether exactly this cell is in edit mode."""
        return self._active is not None and self._active.matches(entry_id, field, sub_field)
