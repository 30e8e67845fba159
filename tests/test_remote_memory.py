"""Tests for the in-memory sandbox remote.

**Feature: trade-journal-editor**
"""

import asyncio
from datetime import date

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.models import FilterState
from tradejournal.remote import EntryNotFoundError, InMemoryJournalRemote, ResponseError


def run(coro):
    return asyncio.run(coro)


class TestInMemoryRemote:
    """Behaves like the journal API."""

    def test_ids_and_timestamps_assigned(self):
        remote = InMemoryJournalRemote(today=lambda: date(2024, 3, 1))

        first = run(remote.create_entry())
        second = run(remote.create_entry())

        assert (first.id, second.id) == ("1", "2")
        assert first.created_at is not None
        assert first.updated_at is not None

    def test_default_filter_is_current_month(self):
        remote = InMemoryJournalRemote(
            [{"date": "2024-03-02"}, {"date": "2024-02-02"}, {"date": None, "created_at": "2024-03-05T08:00:00+00:00"}],
            today=lambda: date(2024, 3, 20),
        )

        entries = run(remote.list_entries(FilterState()))

        assert [e.id for e in entries] == ["3", "1"]

    def test_update_unknown_field_rejected(self):
        remote = InMemoryJournalRemote([{"id": 1}])

        with pytest.raises(ResponseError) as excinfo:
            run(remote.update_entry("1", {"id": 5}))

        assert excinfo.value.status_code == 400

    def test_missing_entries(self):
        remote = InMemoryJournalRemote()

        with pytest.raises(EntryNotFoundError):
            run(remote.get_entry("1"))
        with pytest.raises(ResponseError):
            run(remote.delete_entry("1"))
        with pytest.raises(ResponseError):
            run(remote.update_entry("abc", {"pnl": "1"}))

    def test_stats_for_empty_period(self):
        remote = InMemoryJournalRemote(today=lambda: date(2024, 3, 20))

        stats = run(remote.get_stats(FilterState()))

        assert stats.total_trades == 0
        assert stats.total_pnl == "0.00"
        assert stats.win_rate == "0.00"
        assert stats.period.month_name == "March"

    @given(pnls=st.lists(st.integers(min_value=-1000, max_value=1000), max_size=20))
    @settings(max_examples=50)
    def test_stats_counts(self, pnls: list[int]):
        remote = InMemoryJournalRemote(
            [{"date": "2024-03-10", "pnl": str(p)} for p in pnls],
            today=lambda: date(2024, 3, 20),
        )

        stats = run(remote.get_stats(FilterState()))

        assert stats.total_trades == len(pnls)
        assert stats.winning_trades == sum(1 for p in pnls if p > 0)
        assert stats.losing_trades == sum(1 for p in pnls if p < 0)
        assert stats.total_pnl_value == pytest.approx(sum(pnls))
        assert 0 <= stats.win_rate_value <= 100
