"""Journal editing session.

Wires the editing coordinator, selection buffer, optimistic store and
filtered loader around one remote and one error slot, and routes cell
events between them:

* Single-line fields (text, number, date) open on click, take input
  through :meth:`JournalSession.update`, and commit once on blur.
* Multi-select fields open together with the selection buffer and close
  only through apply, cancel or outside dismissal.
"""

import logging
from typing import Any, Optional

from tradejournal.editor.editing import EditingCoordinator
from tradejournal.editor.errors import SUMMARY_FAILED, ErrorSlot
from tradejournal.editor.fields import display_value, is_multi_select, resolve_field, stored_value
from tradejournal.editor.loader import FilteredLoader
from tradejournal.editor.placement import Placer, Rect
from tradejournal.editor.selection import SelectionBuffer, SelectionClosedError
from tradejournal.editor.store import OptimisticEntryStore
from tradejournal.models import EditingTarget, JournalEntry, TradingSummary
from tradejournal.remote import BaseJournalRemote, RemoteError

logger = logging.getLogger(__name__)


class JournalSession:
    """State and operations for one journal editing session."""

    def __init__(self, remote: BaseJournalRemote, placer: Optional[Placer] = None):
        """Initialize the session with empty state.

        Args:
            remote: Persistence service.
            placer: Optional dropdown placement capability.
        """
        self.remote = remote
        self.errors = ErrorSlot()
        self.editing = EditingCoordinator()
        self.selection = SelectionBuffer(placer)
        self.store = OptimisticEntryStore(remote, self.errors)
        self.loader = FilteredLoader(remote, self.store, self.errors)

    @property
    def entries(self) -> tuple[JournalEntry, ...]:
        return self.store.entries

    async def start(self) -> bool:
        """Initial load of the current period."""
        return await self.loader.apply_filter()

    async def aclose(self) -> None:
        await self.remote.aclose()

    # ------------------------------------------------------------------
    # Cell editing
    # ------------------------------------------------------------------

    def open(
        self,
        entry_id: str,
        field: str,
        sub_field: Optional[str] = None,
        anchor: Optional[Rect] = None,
    ) -> EditingTarget:
        """Put a cell in edit mode.

        Any open selection is dismissed and the previously active cell is
        closed. For multi-select fields the selection buffer is seeded
        from the stored value of the exact field the panel writes to.

        Args:
            entry_id: Entry to edit.
            field: Logical field name.
            sub_field: Optional panel of a split field.
            anchor: Rectangle the dropdown opens from.

        Returns:
            The now active target.
        """
        name = resolve_field(field, sub_field)
        target = EditingTarget(entry_id=entry_id, field=field, sub_field=sub_field)

        self.selection.dismiss()
        self.editing.open(target)

        if is_multi_select(name):
            entry = self.store.get(entry_id)
            current = getattr(entry, name) if entry is not None else ()
            self.selection.open(target, current, anchor)
        return target

    def _target(self, target: Optional[EditingTarget]) -> EditingTarget:
        target = target or self.editing.active
        if target is None:
            raise ValueError("No field is being edited")
        return target

    def update(self, value: Any, target: Optional[EditingTarget] = None) -> Optional[JournalEntry]:
        """Apply typed input to a cell locally (no network call).

        Args:
            value: Latest input value.
            target: Cell being typed into; defaults to the active one.

        Returns:
            Updated entry, or None if the entry is not listed.
        """
        target = self._target(target)
        return self.store.update_ui_only(
            target.entry_id, target.field, value, target.sub_field
        )

    async def blur(self, target: Optional[EditingTarget] = None) -> Optional[JournalEntry]:
        """Focus left a single-line cell: close it and commit once.

        Multi-select cells ignore blur; they close through the selection
        buffer instead.

        Args:
            target: Cell that lost focus; defaults to the active one.

        Returns:
            Saved entry, or None if nothing was committed or the save failed.
        """
        target = target or self.editing.active
        if target is None or is_multi_select(resolve_field(target.field, target.sub_field)):
            return None

        self.editing.close_if(target)
        entry = self.store.get(target.entry_id)
        if entry is None:
            return None
        value = stored_value(entry, target.field, target.sub_field)
        return await self.store.commit(target.entry_id, target.field, value, target.sub_field)

    def toggle(self, tag: str) -> tuple[str, ...]:
        """Toggle a tag in the open selection (buffer only)."""
        return self.selection.toggle(tag)

    async def apply_selection(self) -> Optional[JournalEntry]:
        """Apply the open selection: local update, then commit.

        Returns:
            Saved entry, or None if the save failed.

        Raises:
            SelectionClosedError: If no selection is open.
        """
        target = self.selection.target
        if target is None:
            raise SelectionClosedError("No multi-select editor is open")

        values = self.selection.apply()
        self.editing.close_if(target)
        self.store.update_ui_only(target.entry_id, target.field, values, target.sub_field)
        return await self.store.commit(target.entry_id, target.field, values, target.sub_field)

    def cancel_selection(self) -> None:
        """Discard the open selection and close its cell."""
        target = self.selection.target
        self.selection.cancel()
        if target is not None:
            self.editing.close_if(target)

    def dismiss_selection(self) -> None:
        """Click outside the dropdown; same as cancelling."""
        self.cancel_selection()

    def display(self, entry_id: str, field: str, sub_field: Optional[str] = None) -> Any:
        """Value to render for a cell (phase emotions fall back to emotions)."""
        entry = self.store.get(entry_id)
        if entry is None:
            return None
        return display_value(entry, field, sub_field)

    def is_editing(self, entry_id: str, field: str, sub_field: Optional[str] = None) -> bool:
        return self.editing.is_editing(entry_id, field, sub_field)

    # ------------------------------------------------------------------
    # Entry and view operations
    # ------------------------------------------------------------------

    async def create(self) -> Optional[JournalEntry]:
        return await self.store.create()

    async def delete(self, entry_id: str) -> bool:
        active = self.editing.active
        if active is not None and active.entry_id == entry_id:
            self.cancel_selection()
            self.editing.close_if(active)
        return await self.store.delete(entry_id)

    async def load_entry(self, entry_id: str) -> Optional[JournalEntry]:
        return await self.store.fetch(entry_id)

    async def load_detail(self, entry_id: str) -> Optional[JournalEntry]:
        """Switch to a single-entry view of one fetched entry."""
        self.cancel_selection()
        if self.editing.active is not None:
            self.editing.close()
        return await self.store.load_detail(entry_id)

    async def summary(self) -> Optional[TradingSummary]:
        """Fetch the all-time summary with its monthly breakdown."""
        try:
            return await self.remote.get_summary()
        except RemoteError as e:
            logger.error(f"Failed to load trading summary: {e}")
            self.errors.set(SUMMARY_FAILED)
            return None

    async def apply_filter(
        self,
        month: Optional[int] = None,
        year: Optional[int] = None,
        show_all: bool = False,
    ) -> bool:
        return await self.loader.apply_filter(month, year, show_all)

    async def clear_filter(self) -> bool:
        return await self.loader.clear_filter()

    async def reload(self) -> bool:
        return await self.loader.reload()

    def clear_error(self) -> None:
        self.errors.clear()
