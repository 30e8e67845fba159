"""Base remote interface for the trading journal."""

from abc import ABC, abstractmethod
from typing import Any

from tradejournal.models import FilterState, JournalEntry, TradingStats, TradingSummary


class BaseJournalRemote(ABC):
    """Abstract base class for journal persistence services.

    Implementations (the REST API client, the in-memory sandbox) return
    entries already converted to display form and raise
    :class:`~tradejournal.remote.errors.RemoteError` subclasses on
    failure. Every call is a suspension point for the editor.
    """

    @abstractmethod
    async def list_entries(self, filter_state: FilterState) -> list[JournalEntry]:
        """List entries matching a filter.

        Args:
            filter_state: Month/year or show-all filter.

        Returns:
            Entries in the order the service returns them.
        """
        pass

    @abstractmethod
    async def get_entry(self, entry_id: str) -> JournalEntry:
        """Fetch a single entry.

        Args:
            entry_id: Entry identifier.

        Returns:
            Canonical entry.

        Raises:
            EntryNotFoundError: If the entry does not exist.
        """
        pass

    @abstractmethod
    async def create_entry(self) -> JournalEntry:
        """Create an entry with every field at its default.

        Returns:
            Created entry with server-assigned id and timestamps.
        """
        pass

    @abstractmethod
    async def update_entry(self, entry_id: str, patch: dict[str, Any]) -> JournalEntry:
        """Apply a partial update.

        Args:
            entry_id: Entry identifier.
            patch: Changed fields in wire encoding.

        Returns:
            Full canonical record after the update.
        """
        pass

    @abstractmethod
    async def delete_entry(self, entry_id: str) -> None:
        """Delete an entry.

        Args:
            entry_id: Entry identifier.
        """
        pass

    @abstractmethod
    async def get_stats(self, filter_state: FilterState) -> TradingStats:
        """Get aggregate statistics for a filter.

        Args:
            filter_state: Month/year or show-all filter.

        Returns:
            Stats snapshot.
        """
        pass

    @abstractmethod
    async def get_summary(self) -> TradingSummary:
        """Get the whole-history trading summary.

        Returns:
            Summary with monthly breakdown.
        """
        pass

    async def aclose(self) -> None:
        """Release any resources held by the remote."""
        return None

    async def __aenter__(self) -> "BaseJournalRemote":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
