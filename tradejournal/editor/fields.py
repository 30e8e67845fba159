"""Field resolution for editing targets and display fallbacks."""

from typing import Any, Optional

from tradejournal.codec import FieldKind, field_kind
from tradejournal.models import JournalEntry


# Emotion panels and the entry field each one writes to
PHASE_FIELDS = {
    "before": "before_trade_emotions",
    "during": "in_trade_emotions",
    "after": "after_trade_emotions",
}


def resolve_field(field: str, sub_field: Optional[str] = None) -> str:
    """Map a logical field and panel to the entry field it mutates.

    ``bias/bias``, ``array/array`` and ``results/results`` mutate the
    field itself; ``emotions/before|during|after`` mutate the matching
    phase field.

    Args:
        field: Logical field name.
        sub_field: Optional panel name.

    Returns:
        Name of the entry attribute to read and write.

    Raises:
        ValueError: For unknown fields or panels.
    """
    field_kind(field)
    if sub_field is None or sub_field == field:
        return field
    if field == "emotions" and sub_field in PHASE_FIELDS:
        return PHASE_FIELDS[sub_field]
    raise ValueError(f"Unknown panel {sub_field!r} for field {field!r}")


def is_multi_select(field: str) -> bool:
    """Whether a field is edited through the multi-select editor."""
    return field_kind(field) is FieldKind.TAGS


def stored_value(entry: JournalEntry, field: str, sub_field: Optional[str] = None) -> Any:
    """Exact value of the field a target writes to (no fallback)."""
    return getattr(entry, resolve_field(field, sub_field))


def display_value(entry: JournalEntry, field: str, sub_field: Optional[str] = None) -> Any:
    """Value to show for a cell.

    Empty phase emotions fall back to the general emotions. The fallback
    is for display only and never returned by :func:`stored_value`.
    """
    name = resolve_field(field, sub_field)
    value = getattr(entry, name)
    if name in PHASE_FIELDS.values() and not value:
        return entry.emotions
    return value
