"""Entry-level conversions built on the field codecs."""

from typing import Any

from tradejournal.codec.values import FieldKind, to_display, to_wire
from tradejournal.models import JournalEntry


FIELD_KINDS: dict[str, FieldKind] = {
    "date": FieldKind.DATE,
    "ltf": FieldKind.TEXT,
    "htf": FieldKind.TEXT,
    "bias": FieldKind.TAGS,
    "kill_zone": FieldKind.TEXT,
    "array": FieldKind.TAGS,
    "results": FieldKind.TAGS,
    "pnl": FieldKind.NUMBER,
    "emotions": FieldKind.TAGS,
    "before_trade_emotions": FieldKind.TAGS,
    "in_trade_emotions": FieldKind.TAGS,
    "after_trade_emotions": FieldKind.TAGS,
    "mistake": FieldKind.TEXT,
    "reason": FieldKind.TEXT,
}

EDITABLE_FIELDS = tuple(FIELD_KINDS)


def field_kind(field: str) -> FieldKind:
    """Get the kind of an editable entry field.

    Raises:
        ValueError: If the field does not exist or is read-only.
    """
    try:
        return FIELD_KINDS[field]
    except KeyError:
        raise ValueError(f"Unknown or read-only journal field: {field!r}") from None


def coerce_display(field: str, value: Any) -> Any:
    """Normalize user input for a field into its display form."""
    return to_display(field_kind(field), value)


def field_patch(field: str, value: Any) -> dict[str, Any]:
    """Build the partial update body for a single field.

    Args:
        field: Entry field name.
        value: Display value or raw user input.

    Returns:
        ``{field: wire_value}``.
    """
    return {field: to_wire(field_kind(field), value)}


def entry_from_wire(data: dict[str, Any]) -> JournalEntry:
    """Build a display entry from an API record.

    Missing fields take their defaults; the numeric id becomes a string.
    """
    values: dict[str, Any] = {
        name: to_display(kind, data.get(name))
        for name, kind in FIELD_KINDS.items()
    }
    return JournalEntry(
        id=str(data["id"]),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
        **values,
    )


def entry_to_wire(entry: JournalEntry) -> dict[str, Any]:
    """Encode every editable field of an entry for the API."""
    return {
        name: to_wire(kind, getattr(entry, name))
        for name, kind in FIELD_KINDS.items()
    }


def new_entry_payload() -> dict[str, Any]:
    """Body for creating an empty entry with every field at its default."""
    return {
        name: to_wire(kind, None)
        for name, kind in FIELD_KINDS.items()
    }
