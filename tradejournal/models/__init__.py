"""Data models for the trading journal."""

from tradejournal.models.journal import JournalEntry
from tradejournal.models.editing import EditingTarget
from tradejournal.models.filter import FilterState
from tradejournal.models.stats import (
    MonthlyBreakdown,
    StatsPeriod,
    TradingStats,
    TradingSummary,
)

__all__ = [
    "EditingTarget",
    "FilterState",
    "JournalEntry",
    "MonthlyBreakdown",
    "StatsPeriod",
    "TradingStats",
    "TradingSummary",
]
