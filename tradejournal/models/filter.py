"""FilterState data model."""

from typing import Optional
from pydantic import BaseModel, Field


class FilterState(BaseModel):
    """Date-range filter applied to the entry list and stats.

    show_all overrides month/year. With nothing set the server falls
    back to the current period.
    """

    month: Optional[int] = Field(default=None, ge=1, le=12, description="Month (1-12)")
    year: Optional[int] = Field(default=None, ge=1, description="Four digit year")
    show_all: bool = Field(default=False, description="Ignore month/year and show everything")

    model_config = {"frozen": True}

    @classmethod
    def build(
        cls,
        month: Optional[int] = None,
        year: Optional[int] = None,
        show_all: bool = False,
    ) -> "FilterState":
        """Normalize a filter request.

        Args:
            month: Requested month or None.
            year: Requested year or None.
            show_all: Whether to show the whole history.

        Returns:
            show_all filter, a month filter when both month and year are
            given, otherwise the default (current period) filter.

        Raises:
            ValueError: If month is outside 1-12 or year is below 1.
        """
        if show_all:
            return cls(show_all=True)
        if month is not None and year is not None:
            if not 1 <= month <= 12:
                raise ValueError(f"Month must be between 1 and 12, got {month}")
            if year < 1:
                raise ValueError(f"Year must be positive, got {year}")
            return cls(month=month, year=year)
        return cls()

    @property
    def is_default(self) -> bool:
        """True when the filter means "current period"."""
        return not self.show_all and self.month is None

    def query_params(self) -> dict[str, str]:
        """Query string parameters for list and stats requests."""
        if self.show_all:
            return {"all": "true"}
        if self.month is not None and self.year is not None:
            return {"month": str(self.month), "year": str(self.year)}
        return {}
