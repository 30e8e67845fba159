"""EditingTarget data model."""

from typing import Optional
from pydantic import BaseModel, Field


class EditingTarget(BaseModel):
    """Identifies the single cell currently in edit mode.

    Identity is the exact (entry_id, field, sub_field) triple, so phase
    panels of one logical field are distinct targets.
    """

    entry_id: str = Field(..., min_length=1, description="Entry identifier")
    field: str = Field(..., min_length=1, description="Logical entry field")
    sub_field: Optional[str] = Field(
        default=None, description="Panel of a split field (e.g. before/during/after)"
    )

    model_config = {"frozen": True}

    def matches(self, entry_id: str, field: str, sub_field: Optional[str] = None) -> bool:
        """Check whether this target is exactly the given cell."""
        return (
            self.entry_id == entry_id
            and self.field == field
            and self.sub_field == sub_field
        )
