"""Optimistic entry store.

Local edits are applied immediately and synchronously; persistence
happens later through :meth:`OptimisticEntryStore.commit`. The server
response replaces the whole entry.

Known limitation: requests are neither sequenced nor cancelled. When two
commits for the same entry are in flight, whichever response arrives
last overwrites the in-memory record, even if it was issued first.
"""

import logging
from collections import Counter
from typing import Any, Iterable, Optional

from pydantic import BaseModel, Field

from tradejournal.codec import coerce_display, field_patch
from tradejournal.editor.errors import (
    CREATE_FAILED,
    DELETE_FAILED,
    ENTRY_LOAD_FAILED,
    ENTRY_NOT_FOUND,
    SAVE_FAILED,
    ErrorSlot,
)
from tradejournal.editor.fields import resolve_field
from tradejournal.editor.observable import Observable
from tradejournal.models import JournalEntry
from tradejournal.remote import BaseJournalRemote, EntryNotFoundError, RemoteError

logger = logging.getLogger(__name__)


# Pending marker used while an entry is being created
CREATING = "creating"


class StoreSnapshot(BaseModel):
    """Immutable view of the entry list and pending markers."""

    entries: tuple[JournalEntry, ...] = Field(default=(), description="Entries in display order")
    pending: frozenset[str] = Field(default=frozenset(), description="Ids with requests in flight")

    model_config = {"frozen": True}

    @property
    def creating(self) -> bool:
        return CREATING in self.pending


class OptimisticEntryStore(Observable[StoreSnapshot]):
    """In-memory entry list with optimistic edits and remote persistence."""

    def __init__(self, remote: BaseJournalRemote, errors: ErrorSlot):
        """Initialize an empty store.

        Args:
            remote: Persistence service.
            errors: Slot receiving user-facing failure messages.
        """
        super().__init__()
        self._remote = remote
        self._errors = errors
        self._entries: list[JournalEntry] = []
        self._pending: Counter[str] = Counter()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def entries(self) -> tuple[JournalEntry, ...]:
        return tuple(self._entries)

    @property
    def is_creating(self) -> bool:
        return self._pending[CREATING] > 0

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            entries=self.entries,
            pending=frozenset(key for key, count in self._pending.items() if count > 0),
        )

    def get(self, entry_id: str) -> Optional[JournalEntry]:
        """Get an entry by id, or None if it is not in the list."""
        index = self._index(entry_id)
        return self._entries[index] if index >= 0 else None

    def is_pending(self, entry_id: str) -> bool:
        """Whether a request for this entry is in flight."""
        return self._pending[entry_id] > 0

    def _index(self, entry_id: str) -> int:
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                return index
        return -1

    # ------------------------------------------------------------------
    # Local mutations
    # ------------------------------------------------------------------

    def reset(self, entries: Iterable[JournalEntry]) -> None:
        """Replace the whole list, keeping the given order."""
        self._entries = list(entries)
        self._notify()

    def reconcile(self, entry: JournalEntry) -> bool:
        """Replace an entry in place with a canonical record.

        Returns:
            False if the entry is no longer in the list.
        """
        index = self._index(entry.id)
        if index < 0:
            logger.debug("entry %s no longer listed, response dropped", entry.id)
            return False
        self._entries[index] = entry
        self._notify()
        return True

    def update_ui_only(
        self,
        entry_id: str,
        field: str,
        value: Any,
        sub_field: Optional[str] = None,
    ) -> Optional[JournalEntry]:
        """Apply an edit locally without any network call.

        Args:
            entry_id: Entry to edit.
            field: Logical field name.
            value: New value (display value or raw input).
            sub_field: Optional panel of a split field.

        Returns:
            The updated entry, or None if the id is not listed.

        Raises:
            ValueError: For unknown or read-only fields.
        """
        name = resolve_field(field, sub_field)
        display = coerce_display(name, value)
        index = self._index(entry_id)
        if index < 0:
            return None
        updated = self._entries[index].model_copy(update={name: display})
        self._entries[index] = updated
        self._notify()
        return updated

    def _mark(self, key: str) -> None:
        self._pending[key] += 1
        self._notify()

    def _unmark(self, key: str) -> None:
        self._pending[key] -= 1
        if self._pending[key] <= 0:
            del self._pending[key]
        self._notify()

    # ------------------------------------------------------------------
    # Remote operations
    # ------------------------------------------------------------------

    async def create(self) -> Optional[JournalEntry]:
        """Create an empty entry and put it at the top of the list.

        Returns:
            Created entry, or None on failure.
        """
        self._mark(CREATING)
        try:
            entry = await self._remote.create_entry()
        except RemoteError as e:
            logger.error(f"Failed to create entry: {e}")
            self._errors.set(CREATE_FAILED)
            return None
        finally:
            self._unmark(CREATING)

        self._entries.insert(0, entry)
        self._notify()
        return entry

    async def commit(
        self,
        entry_id: str,
        field: str,
        value: Any,
        sub_field: Optional[str] = None,
    ) -> Optional[JournalEntry]:
        """Persist one field.

        The entry stays pending while the request is in flight. On
        success the server record replaces the local entry; on failure
        the local (optimistic) value is left as it is.

        Args:
            entry_id: Entry to save.
            field: Logical field name.
            value: Value to persist.
            sub_field: Optional panel of a split field.

        Returns:
            Canonical entry returned by the server, or None on failure.
        """
        name = resolve_field(field, sub_field)
        patch = field_patch(name, value)

        self._mark(entry_id)
        try:
            entry = await self._remote.update_entry(entry_id, patch)
        except RemoteError as e:
            logger.error(f"Failed to update entry {entry_id} ({name}): {e}")
            self._errors.set(SAVE_FAILED)
            return None
        finally:
            self._unmark(entry_id)

        self.reconcile(entry)
        return entry

    async def delete(self, entry_id: str) -> bool:
        """Delete an entry; it leaves the list only once the server agrees.

        Returns:
            True if the entry was deleted.
        """
        self._mark(entry_id)
        try:
            await self._remote.delete_entry(entry_id)
        except RemoteError as e:
            logger.error(f"Failed to delete entry {entry_id}: {e}")
            self._errors.set(DELETE_FAILED)
            return False
        finally:
            self._unmark(entry_id)

        index = self._index(entry_id)
        if index >= 0:
            del self._entries[index]
            self._notify()
        return True

    async def _get(self, entry_id: str) -> Optional[JournalEntry]:
        try:
            return await self._remote.get_entry(entry_id)
        except EntryNotFoundError:
            logger.error(f"Journal entry {entry_id} not found")
            self._errors.set(ENTRY_NOT_FOUND)
        except RemoteError as e:
            logger.error(f"Failed to fetch entry {entry_id}: {e}")
            self._errors.set(ENTRY_LOAD_FAILED)
        return None

    async def fetch(self, entry_id: str) -> Optional[JournalEntry]:
        """Fetch one entry and reconcile it if it is listed.

        Returns:
            Canonical entry, or None on failure.
        """
        entry = await self._get(entry_id)
        if entry is not None:
            self.reconcile(entry)
        return entry

    async def load_detail(self, entry_id: str) -> Optional[JournalEntry]:
        """Fetch one entry and make it the only listed entry.

        Used by the single-entry detail view. On failure the list is
        left as it was.

        Returns:
            Canonical entry, or None on failure.
        """
        entry = await self._get(entry_id)
        if entry is not None:
            self.reset([entry])
        return entry
