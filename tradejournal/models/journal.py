"""JournalEntry data model."""

from datetime import date as date_type
from typing import Optional
from pydantic import BaseModel, Field


# Fields holding tag sequences (comma-joined strings on the wire)
TAG_FIELDS = (
    "bias",
    "array",
    "results",
    "emotions",
    "before_trade_emotions",
    "in_trade_emotions",
    "after_trade_emotions",
)

# Fields assigned by the server and never edited locally
READ_ONLY_FIELDS = ("id", "created_at", "updated_at")


class JournalEntry(BaseModel):
    """Represents one trade record in display form.

    Tag fields are deduplicated, order-preserving tuples of trimmed
    strings. Instances are immutable; every edit produces a new entry.
    """

    id: str = Field(..., min_length=1, description="Entry identifier")
    date: Optional[date_type] = Field(default=None, description="Trade date")
    ltf: str = Field(default="", description="Lower timeframe chart URL")
    htf: str = Field(default="", description="Higher timeframe chart URL")
    bias: tuple[str, ...] = Field(default=(), description="Directional bias (buy/sell)")
    kill_zone: str = Field(default="", description="Session kill zone")
    array: tuple[str, ...] = Field(default=(), description="PD arrays used")
    results: tuple[str, ...] = Field(default=(), description="Trade results")
    pnl: float = Field(default=0.0, description="Profit/Loss amount")
    emotions: tuple[str, ...] = Field(default=(), description="General emotions")
    before_trade_emotions: tuple[str, ...] = Field(
        default=(), description="Emotions before entering the trade"
    )
    in_trade_emotions: tuple[str, ...] = Field(
        default=(), description="Emotions while in the trade"
    )
    after_trade_emotions: tuple[str, ...] = Field(
        default=(), description="Emotions after the trade closed"
    )
    mistake: str = Field(default="", description="Mistakes made")
    reason: str = Field(default="", description="Reason for taking the trade")
    created_at: Optional[str] = Field(default=None, description="Server creation timestamp")
    updated_at: Optional[str] = Field(default=None, description="Server update timestamp")

    model_config = {"frozen": True}

    @property
    def pnl_trend(self) -> str:
        """Direction of the P&L: up, down or neutral."""
        if self.pnl > 0:
            return "up"
        if self.pnl < 0:
            return "down"
        return "neutral"
