"""Tests for the selection buffer and dropdown placement.

**Feature: trade-journal-editor**
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.editor import (
    Placement,
    Rect,
    SelectionBuffer,
    SelectionClosedError,
    Size,
    place_dropdown,
    viewport_placer,
)
from tradejournal.models import EditingTarget
from tradejournal.options import ARRAY_OPTIONS, EMOTION_OPTIONS


TARGET = EditingTarget(entry_id="1", field="array")


# ============================================================================
# Property 4: Cancel leaves the value untouched
# ============================================================================

class TestSelectionCancel:
    """
    **Feature: trade-journal-editor, Property 4: Cancel discards toggles**

    *For any* sequence of toggles, cancelling closes the buffer and
    hands nothing back.
    """

    @given(
        current=st.lists(st.sampled_from(EMOTION_OPTIONS), unique=True, max_size=5),
        toggles=st.lists(st.sampled_from(EMOTION_OPTIONS), max_size=10),
    )
    @settings(max_examples=100)
    def test_cancel_after_toggles(self, current: list[str], toggles: list[str]):
        buffer = SelectionBuffer()
        buffer.open(TARGET, tuple(current))

        for tag in toggles:
            buffer.toggle(tag)
        buffer.cancel()

        assert not buffer.is_open
        assert buffer.pending == ()
        assert buffer.snapshot() is None

    @given(
        current=st.lists(st.sampled_from(EMOTION_OPTIONS), unique=True, max_size=5),
        tag=st.sampled_from(EMOTION_OPTIONS),
    )
    @settings(max_examples=100)
    def test_double_toggle_is_identity(self, current: list[str], tag: str):
        buffer = SelectionBuffer()
        buffer.open(TARGET, tuple(current))

        buffer.toggle(tag)
        buffer.toggle(tag)

        assert set(buffer.pending) == set(current)


class TestSelectionBuffer:
    """Open, toggle and apply behaviour."""

    def test_toggle_off_and_apply(self):
        buffer = SelectionBuffer()
        buffer.open(TARGET, ("FVG", "OB"))

        assert buffer.toggle("FVG") == ("OB",)
        assert buffer.apply() == ("OB",)
        assert not buffer.is_open

    def test_open_seeds_from_wire_string(self):
        buffer = SelectionBuffer()
        buffer.open(TARGET, "FVG, OB, FVG")

        assert buffer.pending == ("FVG", "OB")
        assert buffer.is_selected("OB")
        assert buffer.is_selected(" OB ")

    def test_toggle_appends_in_click_order(self):
        buffer = SelectionBuffer()
        buffer.open(TARGET, ())

        buffer.toggle("OB")
        buffer.toggle("FVG")

        assert buffer.pending == ("OB", "FVG")

    def test_blank_toggle_ignored(self):
        buffer = SelectionBuffer()
        buffer.open(TARGET, ("OB",))

        assert buffer.toggle("  ") == ("OB",)

    def test_closed_buffer_rejects_toggle_and_apply(self):
        buffer = SelectionBuffer()

        with pytest.raises(SelectionClosedError):
            buffer.toggle("OB")
        with pytest.raises(SelectionClosedError):
            buffer.apply()

    def test_cancel_and_dismiss_when_closed_are_noops(self):
        buffer = SelectionBuffer()
        seen = []
        buffer.subscribe(seen.append)

        buffer.cancel()
        buffer.dismiss()

        assert seen == []

    def test_reopen_for_other_target_discards_pending(self):
        buffer = SelectionBuffer()
        buffer.open(TARGET, ("FVG",))
        buffer.toggle("OB")

        other = EditingTarget(entry_id="2", field="results")
        buffer.open(other, ("Win",))

        assert buffer.target == other
        assert buffer.pending == ("Win",)

    def test_listeners_get_snapshots(self):
        buffer = SelectionBuffer()
        seen = []
        unsubscribe = buffer.subscribe(seen.append)

        buffer.open(TARGET, ())
        buffer.toggle(ARRAY_OPTIONS[0])
        unsubscribe()
        buffer.apply()

        assert len(seen) == 2
        assert seen[0].pending == ()
        assert seen[1].pending == (ARRAY_OPTIONS[0],)
        assert seen[1].target == TARGET


# ============================================================================
# Dropdown placement
# ============================================================================

class TestDropdownPlacement:
    """
    **Feature: trade-journal-editor, Property 5: Dropdown stays on screen**

    *For any* anchor inside a viewport large enough for the panel, the
    dropdown ends up fully inside the viewport.
    """

    @given(
        left=st.floats(min_value=0, max_value=1500),
        top=st.floats(min_value=0, max_value=1000),
    )
    @settings(max_examples=100)
    def test_panel_within_viewport(self, left: float, top: float):
        viewport = Size(width=1600, height=1100)
        anchor = Rect(left=left, top=top, width=80, height=24)

        placement = place_dropdown(anchor, viewport)

        assert 0 <= placement.left
        assert placement.left + 320 <= viewport.width
        assert 0 <= placement.top
        assert placement.top + 400 <= viewport.height

    def test_opens_below_anchor(self):
        anchor = Rect(left=100, top=100, width=80, height=24)

        placement = place_dropdown(anchor, Size(width=1200, height=900))

        assert placement == Placement(top=132, left=100)

    def test_flips_above_near_bottom(self):
        anchor = Rect(left=100, top=800, width=80, height=24)

        placement = place_dropdown(anchor, Size(width=1200, height=900))

        assert placement.top == 800 - 8 - 400

    def test_shifts_left_near_right_edge(self):
        anchor = Rect(left=1150, top=100, width=40, height=24)

        placement = place_dropdown(anchor, Size(width=1200, height=900))

        assert placement.left == 1200 - 16 - 320

    def test_buffer_uses_placer(self):
        buffer = SelectionBuffer(viewport_placer(Size(width=1200, height=900)))
        anchor = Rect(left=100, top=100, width=80, height=24)

        buffer.open(TARGET, (), anchor)

        assert buffer.placement == Placement(top=132, left=100)
        buffer.cancel()
        assert buffer.placement is None

    def test_no_placement_without_anchor(self):
        buffer = SelectionBuffer(viewport_placer(Size(width=1200, height=900)))

        buffer.open(TARGET, ())

        assert buffer.placement is None
