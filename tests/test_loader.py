"""Tests for the filtered loader and stats synchronizer.

**Feature: trade-journal-editor**
"""

import asyncio

import pytest

from tradejournal.editor import ErrorSlot, FilteredLoader, OptimisticEntryStore
from tradejournal.editor.errors import LOAD_FAILED
from tradejournal.models import FilterState
from tradejournal.remote import ResponseError, TransportError


def make_loader(remote):
    errors = ErrorSlot()
    store = OptimisticEntryStore(remote, errors)
    return FilteredLoader(remote, store, errors), store, errors


class TestFilterState:
    """Normalizing filter requests."""

    def test_show_all_wins(self):
        assert FilterState.build(3, 2024, True) == FilterState(show_all=True)

    def test_month_needs_year(self):
        assert FilterState.build(3, None) == FilterState()
        assert FilterState.build(None, 2024).is_default

    def test_query_params(self):
        assert FilterState(show_all=True).query_params() == {"all": "true"}
        assert FilterState(month=3, year=2024).query_params() == {"month": "3", "year": "2024"}
        assert FilterState().query_params() == {}

    def test_month_range_validated(self):
        with pytest.raises(ValueError):
            FilterState(month=13, year=2024)

    @pytest.mark.parametrize("month, year", [(0, 2024), (13, 2024), (3, 0)])
    def test_build_rejects_out_of_range(self, month, year):
        with pytest.raises(ValueError):
            FilterState.build(month, year)


class TestApplyFilter:
    """
    **Feature: trade-journal-editor, Property 10: Atomic refresh**

    Entries, stats and filter are replaced together, or not at all.
    """

    def test_default_load(self, remote):
        loader, store, errors = make_loader(remote)

        ok = asyncio.run(loader.apply_filter())

        assert ok is True
        assert [e.id for e in store.entries] == ["2", "1"]
        assert loader.stats.total_trades == 2
        assert loader.stats.period.month == 3
        assert loader.filter.is_default
        assert errors.message is None

    def test_month_filter(self, remote):
        loader, store, _ = make_loader(remote)

        asyncio.run(loader.apply_filter(2, 2024))

        assert [e.id for e in store.entries] == ["3"]
        assert loader.filter == FilterState(month=2, year=2024)
        assert loader.stats.total_pnl_value == 75.0

    def test_stats_failure_keeps_previous_view(self, remote):
        loader, store, errors = make_loader(remote)

        async def scenario():
            await loader.apply_filter()
            before = (store.entries, loader.stats, loader.filter)
            remote.failures["get_stats"] = ResponseError(500, "boom")
            ok = await loader.apply_filter(3, 2024)
            return before, ok

        before, ok = asyncio.run(scenario())

        assert ok is False
        assert (store.entries, loader.stats, loader.filter) == before
        assert errors.message == LOAD_FAILED
        assert not loader.loading

    def test_entries_failure_keeps_previous_view(self, remote):
        loader, store, errors = make_loader(remote)

        async def scenario():
            await loader.apply_filter()
            remote.failures["list_entries"] = TransportError("offline")
            return await loader.apply_filter(show_all=True)

        ok = asyncio.run(scenario())

        assert ok is False
        assert [e.id for e in store.entries] == ["2", "1"]
        assert loader.filter.is_default
        assert errors.message == LOAD_FAILED

    def test_requests_run_concurrently(self, remote):
        loader, _, _ = make_loader(remote)

        async def scenario():
            remote.gates["list_entries"] = asyncio.Event()
            task = asyncio.create_task(loader.apply_filter(show_all=True))
            for _ in range(5):
                await asyncio.sleep(0)
            seen = list(remote.calls)
            loading = loader.loading
            remote.gates["list_entries"].set()
            await task
            return seen, loading

        seen, loading = asyncio.run(scenario())

        # Stats were requested while the entry list was still held
        assert sorted(seen) == ["get_stats", "list_entries"]
        assert loading is True
        assert not loader.loading

    def test_show_all(self, remote):
        loader, store, _ = make_loader(remote)

        asyncio.run(loader.apply_filter(show_all=True))

        assert [e.id for e in store.entries] == ["3", "2", "1"]
        assert loader.stats.period is None
        assert loader.stats.win_rate == "66.67"

    def test_reload_reuses_filter(self, remote):
        loader, store, _ = make_loader(remote)

        async def scenario():
            await loader.apply_filter(2, 2024)
            await remote.update_entry("3", {"pnl": "80"})
            await loader.reload()

        asyncio.run(scenario())

        assert loader.filter == FilterState(month=2, year=2024)
        assert store.get("3").pnl == 80.0

    def test_clear_filter(self, remote):
        loader, store, _ = make_loader(remote)

        async def scenario():
            await loader.apply_filter(show_all=True)
            await loader.clear_filter()

        asyncio.run(scenario())

        assert loader.filter.is_default
        assert len(store.entries) == 2

    def test_snapshots_published(self, remote):
        loader, _, _ = make_loader(remote)
        seen = []
        loader.subscribe(seen.append)

        asyncio.run(loader.apply_filter())

        assert seen[0].loading is True
        assert seen[-1].loading is False
        assert seen[-1].stats is not None


class TestInvalidFilter:
    """Out-of-range filters are rejected before any request is made."""

    def test_out_of_range_month_keeps_view(self, remote):
        loader, store, errors = make_loader(remote)
        asyncio.run(loader.apply_filter(3, 2024))
        remote.calls.clear()

        with pytest.raises(ValueError):
            asyncio.run(loader.apply_filter(13, 2024))

        assert remote.calls == []
        assert loader.filter == FilterState(month=3, year=2024)
        assert not loader.loading
        assert errors.message is None
