"""Optimistic inline-editing engine for the trading journal."""

from tradejournal.editor.editing import EditingCoordinator
from tradejournal.editor.errors import ErrorSlot
from tradejournal.editor.fields import (
    PHASE_FIELDS,
    display_value,
    is_multi_select,
    resolve_field,
    stored_value,
)
from tradejournal.editor.loader import FilteredLoader, LoaderSnapshot
from tradejournal.editor.placement import Placement, Rect, Size, place_dropdown, viewport_placer
from tradejournal.editor.selection import SelectionBuffer, SelectionClosedError, SelectionSnapshot
from tradejournal.editor.session import JournalSession
from tradejournal.editor.store import CREATING, OptimisticEntryStore, StoreSnapshot

__all__ = [
    "CREATING",
    "EditingCoordinator",
    "ErrorSlot",
    "FilteredLoader",
    "JournalSession",
    "LoaderSnapshot",
    "OptimisticEntryStore",
    "PHASE_FIELDS",
    "Placement",
    "Rect",
    "SelectionBuffer",
    "SelectionClosedError",
    "SelectionSnapshot",
    "Size",
    "StoreSnapshot",
    "display_value",
    "is_multi_select",
    "place_dropdown",
    "resolve_field",
    "stored_value",
    "viewport_placer",
]
