"""Journal remote implementations."""

from tradejournal.remote.base import BaseJournalRemote
from tradejournal.remote.errors import (
    EntryNotFoundError,
    RemoteError,
    ResponseError,
    TransportError,
)
from tradejournal.remote.memory import InMemoryJournalRemote
from tradejournal.remote.rest import RestJournalRemote

__all__ = [
    "BaseJournalRemote",
    "EntryNotFoundError",
    "InMemoryJournalRemote",
    "RemoteError",
    "ResponseError",
    "RestJournalRemote",
    "TransportError",
]
