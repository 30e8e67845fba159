"""Filtered loader and stats synchronizer.

Entries and stats for a filter are fetched concurrently and committed
together. A failure of either leaves the previous entries, stats and
filter untouched.
"""

import asyncio
import logging
from typing import Optional

from pydantic import BaseModel, Field

from tradejournal.editor.errors import LOAD_FAILED, ErrorSlot
from tradejournal.editor.observable import Observable
from tradejournal.editor.store import OptimisticEntryStore
from tradejournal.models import FilterState, TradingStats
from tradejournal.remote import BaseJournalRemote, RemoteError

logger = logging.getLogger(__name__)


class LoaderSnapshot(BaseModel):
    """Immutable view of the applied filter and its stats."""

    filter: FilterState = Field(default_factory=FilterState, description="Applied filter")
    stats: Optional[TradingStats] = Field(default=None, description="Stats for the filter")
    loading: bool = Field(default=False, description="A refresh is in flight")

    model_config = {"frozen": True}


class FilteredLoader(Observable[LoaderSnapshot]):
    """Owns the active filter and the stats snapshot."""

    def __init__(
        self,
        remote: BaseJournalRemote,
        store: OptimisticEntryStore,
        errors: ErrorSlot,
    ):
        """Initialize the loader.

        Args:
            remote: Persistence service.
            store: Store whose entry list is replaced on each load.
            errors: Slot receiving user-facing failure messages.
        """
        super().__init__()
        self._remote = remote
        self._store = store
        self._errors = errors
        self._filter = FilterState()
        self._stats: Optional[TradingStats] = None
        self._loading = 0

    @property
    def filter(self) -> FilterState:
        return self._filter

    @property
    def stats(self) -> Optional[TradingStats]:
        return self._stats

    @property
    def loading(self) -> bool:
        return self._loading > 0

    def snapshot(self) -> LoaderSnapshot:
        return LoaderSnapshot(filter=self._filter, stats=self._stats, loading=self.loading)

    async def apply_filter(
        self,
        month: Optional[int] = None,
        year: Optional[int] = None,
        show_all: bool = False,
    ) -> bool:
        """Load entries and stats for a filter as one refresh.

        Args:
            month: Month to show (needs year).
            year: Year of the month.
            show_all: Show the whole history, ignoring month/year.

        Returns:
            True if both requests succeeded and the view was replaced.

        Raises:
            ValueError: If month or year is out of range. Nothing is
                requested and the view is unchanged.
        """
        requested = FilterState.build(month, year, show_all)

        self._loading += 1
        self._notify()
        try:
            entries, stats = await asyncio.gather(
                self._remote.list_entries(requested),
                self._remote.get_stats(requested),
                return_exceptions=True,
            )
            for result in (entries, stats):
                if isinstance(result, RemoteError):
                    logger.error(f"Failed to load journal data for {requested}: {result}")
                    self._errors.set(LOAD_FAILED)
                    return False
                if isinstance(result, BaseException):
                    raise result

            self._store.reset(entries)
            self._stats = stats
            self._filter = requested
            return True
        finally:
            self._loading -= 1
            self._notify()

    async def clear_filter(self) -> bool:
        """Go back to the default (current period) view."""
        return await self.apply_filter()

    async def reload(self) -> bool:
        """Re-run the currently applied filter."""
        current = self._filter
        return await self.apply_filter(current.month, current.year, current.show_all)
