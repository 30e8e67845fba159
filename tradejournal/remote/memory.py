"""In-memory journal remote for sandbox sessions and tests."""

import asyncio
import calendar
from datetime import date, datetime, timezone
from typing import Any, Callable, Optional

from tradejournal.codec import (
    FIELD_KINDS,
    entry_from_wire,
    new_entry_payload,
    parse_date,
    parse_number,
)
from tradejournal.models import (
    FilterState,
    JournalEntry,
    MonthlyBreakdown,
    StatsPeriod,
    TradingStats,
    TradingSummary,
)
from tradejournal.remote.base import BaseJournalRemote
from tradejournal.remote.errors import EntryNotFoundError, ResponseError


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _percent(part: int, whole: int) -> str:
    return f"{(part / whole * 100) if whole else 0.0:.2f}"


class InMemoryJournalRemote(BaseJournalRemote):
    """Journal remote that keeps wire records in memory.

    Behaves like the REST backend: assigns integer ids and timestamps,
    filters by month/year (default: current month) and computes stats.
    Nothing is persisted; a new instance starts empty.
    """

    def __init__(
        self,
        records: Optional[list[dict[str, Any]]] = None,
        today: Optional[Callable[[], date]] = None,
        latency: float = 0.0,
    ):
        """Initialize the in-memory remote.

        Args:
            records: Optional wire records to seed the store with.
            today: Callable returning the current date (defaults to
                ``date.today``), used for the default period.
            latency: Seconds to sleep in every call.
        """
        self._records: dict[int, dict[str, Any]] = {}
        self._next_id = 1
        self._today = today or date.today
        self._latency = latency

        for record in records or []:
            self._insert(record)

    def _insert(self, record: dict[str, Any]) -> dict[str, Any]:
        """Store a record, assigning id and timestamps when missing."""
        stored = new_entry_payload()
        stored.update({k: v for k, v in record.items() if k in FIELD_KINDS})

        entry_id = int(record.get("id") or self._next_id)
        self._next_id = max(self._next_id, entry_id + 1)

        now = _now_iso()
        stored["id"] = entry_id
        stored["created_at"] = record.get("created_at") or now
        stored["updated_at"] = record.get("updated_at") or now
        self._records[entry_id] = stored
        return stored

    async def _suspend(self) -> None:
        # Every remote call is a suspension point, even with zero latency
        await asyncio.sleep(self._latency)

    def _lookup(self, entry_id: str) -> dict[str, Any]:
        try:
            return self._records[int(entry_id)]
        except (KeyError, ValueError):
            raise EntryNotFoundError(entry_id) from None

    def _record_period(self, record: dict[str, Any]) -> Optional[tuple[int, int]]:
        """(year, month) of the trade date, else of the creation time."""
        day = parse_date(record.get("date")) or parse_date(record.get("created_at"))
        if day is None:
            return None
        return (day.year, day.month)

    def _period(self, filter_state: FilterState) -> Optional[tuple[int, int]]:
        if filter_state.show_all:
            return None
        if filter_state.month is not None and filter_state.year is not None:
            return (filter_state.year, filter_state.month)
        today = self._today()
        return (today.year, today.month)

    def _matching(self, filter_state: FilterState) -> list[dict[str, Any]]:
        period = self._period(filter_state)
        records = sorted(self._records.values(), key=lambda r: r["id"], reverse=True)
        if period is None:
            return records
        return [r for r in records if self._record_period(r) == period]

    async def list_entries(self, filter_state: FilterState) -> list[JournalEntry]:
        """List entries for a filter, newest first."""
        await self._suspend()
        return [entry_from_wire(r) for r in self._matching(filter_state)]

    async def get_entry(self, entry_id: str) -> JournalEntry:
        """Fetch one entry."""
        await self._suspend()
        return entry_from_wire(self._lookup(entry_id))

    async def create_entry(self) -> JournalEntry:
        """Create an entry with defaults."""
        await self._suspend()
        return entry_from_wire(self._insert(new_entry_payload()))

    async def update_entry(self, entry_id: str, patch: dict[str, Any]) -> JournalEntry:
        """Apply a partial update of known fields."""
        await self._suspend()
        try:
            record = self._lookup(entry_id)
        except EntryNotFoundError:
            raise ResponseError(404, "Not found.") from None
        unknown = [k for k in patch if k not in FIELD_KINDS]
        if unknown:
            raise ResponseError(400, f"Unknown fields: {', '.join(unknown)}")
        record.update(patch)
        record["updated_at"] = _now_iso()
        return entry_from_wire(record)

    async def delete_entry(self, entry_id: str) -> None:
        """Delete an entry."""
        await self._suspend()
        try:
            record = self._lookup(entry_id)
        except EntryNotFoundError:
            raise ResponseError(404, "Not found.") from None
        del self._records[record["id"]]

    @staticmethod
    def _totals(records: list[dict[str, Any]]) -> tuple[int, int, float]:
        pnls = [parse_number(r.get("pnl")) for r in records]
        winning = sum(1 for p in pnls if p > 0)
        losing = sum(1 for p in pnls if p < 0)
        return winning, losing, sum(pnls)

    async def get_stats(self, filter_state: FilterState) -> TradingStats:
        """Compute stats for a filter."""
        await self._suspend()
        records = self._matching(filter_state)
        winning, losing, total_pnl = self._totals(records)

        period = None
        year_month = self._period(filter_state)
        if year_month is not None:
            year, month = year_month
            period = StatsPeriod(
                month=month, year=year, month_name=calendar.month_name[month]
            )

        return TradingStats(
            total_trades=len(records),
            winning_trades=winning,
            losing_trades=losing,
            total_pnl=f"{total_pnl:.2f}",
            win_rate=_percent(winning, len(records)),
            updated_at=_now_iso(),
            period=period,
        )

    async def get_summary(self) -> TradingSummary:
        """Compute the whole-history summary."""
        await self._suspend()
        records = self._matching(FilterState(show_all=True))
        winning, _, total_pnl = self._totals(records)

        by_month: dict[tuple[int, int], list[dict[str, Any]]] = {}
        for record in records:
            key = self._record_period(record)
            if key is not None:
                by_month.setdefault(key, []).append(record)

        breakdown = []
        for (year, month), rows in sorted(by_month.items(), reverse=True):
            month_wins, _, month_pnl = self._totals(rows)
            breakdown.append(MonthlyBreakdown(
                month=f"{calendar.month_name[month]} {year}",
                entries=len(rows),
                pnl=f"{month_pnl:.2f}",
                win_rate=_percent(month_wins, len(rows)),
            ))

        return TradingSummary(
            total_entries=len(records),
            total_pnl=f"{total_pnl:.2f}",
            win_rate=_percent(winning, len(records)),
            monthly_breakdown=breakdown,
        )
