"""TradingStats and TradingSummary data models."""

from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator


def _to_float(value: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _decimal_text(value: Any) -> Any:
    # DecimalField may arrive as a JSON number depending on server settings
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class StatsPeriod(BaseModel):
    """Period the stats snapshot was computed for."""

    month: int = Field(..., ge=1, le=12, description="Month (1-12)")
    year: int = Field(..., description="Year")
    month_name: str = Field(default="", description="Month display name")

    model_config = {"frozen": True}


class TradingStats(BaseModel):
    """Aggregate statistics computed by the server for one filter."""

    total_trades: int = Field(default=0, ge=0, description="Number of trades")
    winning_trades: int = Field(default=0, ge=0, description="Trades with positive P&L")
    losing_trades: int = Field(default=0, ge=0, description="Trades with negative P&L")
    total_pnl: str = Field(default="0", description="Total P&L as decimal string")
    win_rate: str = Field(default="0", description="Win rate percentage as decimal string")
    updated_at: Optional[str] = Field(default=None, description="Snapshot timestamp")
    period: Optional[StatsPeriod] = Field(default=None, description="Filtered period")

    model_config = {"frozen": True}

    @field_validator("total_pnl", "win_rate", mode="before")
    @classmethod
    def decimal_as_text(cls, value: Any) -> Any:
        return _decimal_text(value)

    @property
    def total_pnl_value(self) -> float:
        """Total P&L as a float."""
        return _to_float(self.total_pnl)

    @property
    def win_rate_value(self) -> float:
        """Win rate percentage as a float."""
        return _to_float(self.win_rate)

    @property
    def pnl_trend(self) -> str:
        """Direction of the total P&L: up, down or neutral."""
        total = self.total_pnl_value
        if total > 0:
            return "up"
        if total < 0:
            return "down"
        return "neutral"


class MonthlyBreakdown(BaseModel):
    """One month of the trading summary."""

    month: str = Field(..., description="Month label")
    entries: int = Field(default=0, ge=0, description="Entries in the month")
    pnl: str = Field(default="0", description="Month P&L as decimal string")
    win_rate: str = Field(default="0", description="Month win rate as decimal string")

    model_config = {"frozen": True}

    @field_validator("pnl", "win_rate", mode="before")
    @classmethod
    def decimal_as_text(cls, value: Any) -> Any:
        return _decimal_text(value)

    @property
    def pnl_value(self) -> float:
        return _to_float(self.pnl)

    @property
    def win_rate_value(self) -> float:
        return _to_float(self.win_rate)


class TradingSummary(BaseModel):
    """Whole-history summary with an optional monthly breakdown."""

    total_entries: int = Field(default=0, ge=0, description="Number of entries")
    total_pnl: str = Field(default="0", description="Total P&L as decimal string")
    win_rate: str = Field(default="0", description="Win rate percentage as decimal string")
    monthly_breakdown: list[MonthlyBreakdown] = Field(
        default_factory=list, description="Per-month figures"
    )

    model_config = {"frozen": True}

    @field_validator("total_pnl", "win_rate", mode="before")
    @classmethod
    def decimal_as_text(cls, value: Any) -> Any:
        return _decimal_text(value)

    @property
    def total_pnl_value(self) -> float:
        return _to_float(self.total_pnl)

    @property
    def win_rate_value(self) -> float:
        return _to_float(self.win_rate)
