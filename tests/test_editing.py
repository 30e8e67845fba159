"""Tests for the editing-state coordinator and field resolution.

**Feature: trade-journal-editor**
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.editor import EditingCoordinator, display_value, resolve_field, stored_value
from tradejournal.models import EditingTarget, JournalEntry


targets = st.builds(
    EditingTarget,
    entry_id=st.sampled_from(["1", "2", "3"]),
    field=st.sampled_from(["pnl", "date", "array", "reason"]),
)


# ============================================================================
# Property 6: Single active target
# ============================================================================

class TestSingleActiveTarget:
    """
    **Feature: trade-journal-editor, Property 6: Single active target**

    *For any* sequence of opens and closes, at most one cell is in edit
    mode and it is the one opened last.
    """

    @given(ops=st.lists(st.one_of(targets, st.none()), max_size=20))
    @settings(max_examples=100)
    def test_last_open_wins(self, ops):
        coordinator = EditingCoordinator()
        expected = None

        for op in ops:
            if op is None:
                coordinator.close()
                expected = None
            else:
                coordinator.open(op)
                expected = op

        assert coordinator.active == expected
        editing = [
            (entry_id, field)
            for entry_id in ("1", "2", "3")
            for field in ("pnl", "date", "array", "reason")
            if coordinator.is_editing(entry_id, field)
        ]
        assert len(editing) <= 1

    def test_open_a_then_b(self):
        coordinator = EditingCoordinator()
        a = EditingTarget(entry_id="1", field="pnl")
        b = EditingTarget(entry_id="2", field="date")

        coordinator.open(a)
        closed = coordinator.open(b)

        assert closed == a
        assert coordinator.active == b
        assert not coordinator.is_editing("1", "pnl")
        assert coordinator.is_editing("2", "date")


class TestEditingCoordinator:
    """Close semantics and notifications."""

    def test_reopen_same_target_does_not_notify(self):
        coordinator = EditingCoordinator()
        target = EditingTarget(entry_id="1", field="pnl")
        seen = []

        coordinator.open(target)
        coordinator.subscribe(seen.append)
        assert coordinator.open(target) is None

        assert seen == []

    def test_close_if_ignores_other_targets(self):
        coordinator = EditingCoordinator()
        a = EditingTarget(entry_id="1", field="pnl")
        b = EditingTarget(entry_id="1", field="reason")

        coordinator.open(b)

        assert coordinator.close_if(a) is False
        assert coordinator.active == b
        assert coordinator.close_if(b) is True
        assert coordinator.active is None

    def test_sub_field_is_part_of_identity(self):
        coordinator = EditingCoordinator()
        coordinator.open(EditingTarget(entry_id="1", field="emotions", sub_field="before"))

        assert coordinator.is_editing("1", "emotions", "before")
        assert not coordinator.is_editing("1", "emotions", "after")
        assert not coordinator.is_editing("1", "emotions")

    def test_close_when_idle(self):
        coordinator = EditingCoordinator()
        assert coordinator.close() is None


class TestFieldResolution:
    """Logical field and panel to entry attribute."""

    @pytest.mark.parametrize("field, sub_field, name", [
        ("pnl", None, "pnl"),
        ("bias", "bias", "bias"),
        ("array", "array", "array"),
        ("results", "results", "results"),
        ("emotions", None, "emotions"),
        ("emotions", "before", "before_trade_emotions"),
        ("emotions", "during", "in_trade_emotions"),
        ("emotions", "after", "after_trade_emotions"),
    ])
    def test_resolve(self, field, sub_field, name):
        assert resolve_field(field, sub_field) == name

    @pytest.mark.parametrize("field, sub_field", [
        ("pnl", "before"),
        ("emotions", "later"),
        ("id", None),
        ("unknown", None),
    ])
    def test_resolve_rejects(self, field, sub_field):
        with pytest.raises(ValueError):
            resolve_field(field, sub_field)

    def test_phase_display_falls_back_to_emotions(self):
        entry = JournalEntry(id="1", emotions=("Calm",), in_trade_emotions=("FOMO",))

        assert display_value(entry, "emotions", "before") == ("Calm",)
        assert display_value(entry, "emotions", "during") == ("FOMO",)
        assert stored_value(entry, "emotions", "before") == ()
