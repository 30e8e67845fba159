"""Shared fixtures for the trading journal tests."""

import asyncio
from datetime import date
from typing import Any, Optional

import pytest

from tradejournal.editor import JournalSession
from tradejournal.models import FilterState, JournalEntry, TradingStats, TradingSummary
from tradejournal.remote import InMemoryJournalRemote, RemoteError


TODAY = date(2024, 3, 20)

SEED_RECORDS = [
    {
        "id": 1,
        "date": "2024-03-04",
        "bias": "buy",
        "kill_zone": "London",
        "array": "FVG, OB",
        "results": "Win",
        "pnl": "120.50",
        "emotions": "Calm",
        "reason": "Sweep of Asian low",
    },
    {
        "id": 2,
        "date": "2024-03-11",
        "bias": "sell",
        "array": "OB",
        "results": "Loss",
        "pnl": "-40",
        "emotions": "Calm, FOMO",
        "before_trade_emotions": "Anxious",
    },
    {
        "id": 3,
        "date": "2024-02-27",
        "results": "Win",
        "pnl": "75",
    },
]


class ScriptedRemote(InMemoryJournalRemote):
    """In-memory remote whose calls can be held open or made to fail.

    ``gates[name]`` holds a call until the event is set, ``failures[name]``
    raises after the gate opens. Every call name is appended to ``calls``.
    """

    def __init__(self, records: Optional[list[dict[str, Any]]] = None):
        super().__init__(records, today=lambda: TODAY)
        self.calls: list[str] = []
        self.patches: list[tuple[str, dict[str, Any]]] = []
        self.gates: dict[str, asyncio.Event] = {}
        self.failures: dict[str, RemoteError] = {}
        self.closed = False

    async def _script(self, name: str) -> None:
        self.calls.append(name)
        gate = self.gates.get(name)
        if gate is not None:
            await gate.wait()
        error = self.failures.get(name)
        if error is not None:
            raise error

    async def list_entries(self, filter_state: FilterState) -> list[JournalEntry]:
        await self._script("list_entries")
        return await super().list_entries(filter_state)

    async def get_entry(self, entry_id: str) -> JournalEntry:
        await self._script("get_entry")
        return await super().get_entry(entry_id)

    async def create_entry(self) -> JournalEntry:
        await self._script("create_entry")
        return await super().create_entry()

    async def update_entry(self, entry_id: str, patch: dict[str, Any]) -> JournalEntry:
        self.patches.append((entry_id, dict(patch)))
        await self._script("update_entry")
        return await super().update_entry(entry_id, patch)

    async def delete_entry(self, entry_id: str) -> None:
        await self._script("delete_entry")
        await super().delete_entry(entry_id)

    async def get_stats(self, filter_state: FilterState) -> TradingStats:
        await self._script("get_stats")
        return await super().get_stats(filter_state)

    async def get_summary(self) -> TradingSummary:
        await self._script("get_summary")
        return await super().get_summary()

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def make_remote():
    """Factory for scripted remotes with custom records."""
    def factory(records: Optional[list[dict[str, Any]]] = None) -> ScriptedRemote:
        return ScriptedRemote(records)
    return factory


@pytest.fixture
def remote() -> ScriptedRemote:
    """Scripted remote seeded with two March and one February entry."""
    return ScriptedRemote([dict(r) for r in SEED_RECORDS])


@pytest.fixture
def session(remote: ScriptedRemote) -> JournalSession:
    """Session over the scripted remote (not loaded yet)."""
    return JournalSession(remote)


@pytest.fixture
def sample_entry() -> JournalEntry:
    return JournalEntry(
        id="7",
        date=date(2024, 3, 4),
        array=("FVG", "OB"),
        results=("Win",),
        pnl=120.5,
        emotions=("Calm",),
    )
