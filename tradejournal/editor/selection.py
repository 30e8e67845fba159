"""Selection buffer for the multi-select editor.

While a multi-select editor is open, checkbox clicks only change the
pending selection held here. Nothing reaches the entry until the
selection is applied; cancelling or clicking outside discards it.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from tradejournal.codec import split_tags
from tradejournal.editor.observable import Observable
from tradejournal.editor.placement import Placement, Placer, Rect
from tradejournal.models import EditingTarget


class SelectionClosedError(RuntimeError):
    """Raised when toggling or applying while no selection is open."""


class SelectionSnapshot(BaseModel):
    """Immutable view of an open selection buffer."""

    target: EditingTarget = Field(..., description="Cell being edited")
    pending: tuple[str, ...] = Field(default=(), description="Pending tags in order")
    placement: Optional[Placement] = Field(default=None, description="Dropdown placement")

    model_config = {"frozen": True}


class SelectionBuffer(Observable[Optional[SelectionSnapshot]]):
    """Pending multi-value selection for one open editor.

    States are ``closed`` and ``open(pending, placement)``.
    """

    def __init__(self, placer: Optional[Placer] = None):
        """Initialize a closed buffer.

        Args:
            placer: Optional capability that places the dropdown for an
                anchor rectangle.
        """
        super().__init__()
        self._placer = placer
        self._target: Optional[EditingTarget] = None
        self._pending: list[str] = []
        self._placement: Optional[Placement] = None

    @property
    def is_open(self) -> bool:
        return self._target is not None

    @property
    def target(self) -> Optional[EditingTarget]:
        return self._target

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(self._pending)

    @property
    def placement(self) -> Optional[Placement]:
        return self._placement

    def snapshot(self) -> Optional[SelectionSnapshot]:
        if self._target is None:
            return None
        return SelectionSnapshot(
            target=self._target,
            pending=self.pending,
            placement=self._placement,
        )

    def _require_open(self) -> EditingTarget:
        if self._target is None:
            raise SelectionClosedError("No multi-select editor is open")
        return self._target

    def open(
        self,
        target: EditingTarget,
        current: Any,
        anchor: Optional[Rect] = None,
    ) -> None:
        """Open the buffer for a target, seeded from its current value.

        A selection already open for another target is discarded.

        Args:
            target: Cell being edited.
            current: Current display value of the field.
            anchor: Optional rectangle the dropdown opens from.
        """
        self._target = target
        self._pending = list(split_tags(current))
        self._placement = None
        if anchor is not None and self._placer is not None:
            self._placement = self._placer(anchor)
        self._notify()

    def is_selected(self, tag: str) -> bool:
        return tag.strip() in self._pending

    def toggle(self, tag: str) -> tuple[str, ...]:
        """Flip membership of a tag in the pending selection.

        Args:
            tag: Tag to add or remove.

        Returns:
            Pending selection after the toggle.
        """
        self._require_open()
        tag = tag.strip()
        if not tag:
            return self.pending
        if tag in self._pending:
            self._pending.remove(tag)
        else:
            self._pending.append(tag)
        self._notify()
        return self.pending

    def apply(self) -> tuple[str, ...]:
        """Close the buffer and hand back the pending selection.

        Returns:
            Selected tags in insertion order.
        """
        self._require_open()
        selected = self.pending
        self._close()
        return selected

    def cancel(self) -> None:
        """Discard the pending selection. No-op when closed."""
        if self._target is not None:
            self._close()

    def dismiss(self) -> None:
        """Outside-click dismissal; same as :meth:`cancel`."""
        self.cancel()

    def _close(self) -> None:
        self._target = None
        self._pending = []
        self._placement = None
        self._notify()
