"""Dropdown placement for the multi-select editor.

Placement is a rendering concern. The selection buffer only stores what
the configured placer returns for the anchor it was opened from.
"""

from functools import partial
from typing import Callable

from pydantic import BaseModel, Field


class Rect(BaseModel):
    """Anchor rectangle in viewport coordinates."""

    left: float = Field(..., description="Left edge")
    top: float = Field(..., description="Top edge")
    width: float = Field(default=0.0, ge=0, description="Width")
    height: float = Field(default=0.0, ge=0, description="Height")

    model_config = {"frozen": True}

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height


class Size(BaseModel):
    """Width and height of a viewport or panel."""

    width: float = Field(..., ge=0, description="Width")
    height: float = Field(..., ge=0, description="Height")

    model_config = {"frozen": True}


class Placement(BaseModel):
    """Top-left corner chosen for the dropdown panel."""

    top: float = Field(..., description="Top edge")
    left: float = Field(..., description="Left edge")

    model_config = {"frozen": True}


Placer = Callable[[Rect], Placement]

DEFAULT_PANEL = Size(width=320, height=400)


def place_dropdown(
    anchor: Rect,
    viewport: Size,
    panel: Size = DEFAULT_PANEL,
    gap: float = 8,
    margin: float = 16,
) -> Placement:
    """Place a dropdown panel next to its anchor.

    Prefers below the anchor, flips above it when the panel would run
    past the bottom of the viewport, and shifts left when it would run
    past the right edge.

    Args:
        anchor: Rectangle of the button that opened the dropdown.
        viewport: Visible area.
        panel: Dropdown size.
        gap: Space between anchor and panel.
        margin: Space kept from the right viewport edge when shifting.

    Returns:
        Placement of the panel's top-left corner.
    """
    top = anchor.bottom + gap
    left = anchor.left

    if top + panel.height > viewport.height:
        top = anchor.top - panel.height - gap

    if left + panel.width > viewport.width:
        left = viewport.width - panel.width - margin

    return Placement(top=top, left=left)


def viewport_placer(viewport: Size, panel: Size = DEFAULT_PANEL) -> Placer:
    """Build a placer bound to a viewport size."""
    return partial(place_dropdown, viewport=viewport, panel=panel)
