"""Value codec for journal fields."""

from tradejournal.codec.values import (
    FieldKind,
    format_date,
    format_decimal,
    join_tags,
    normalize_tags,
    parse_date,
    parse_number,
    split_tags,
    to_display,
    to_wire,
)
from tradejournal.codec.entries import (
    EDITABLE_FIELDS,
    FIELD_KINDS,
    coerce_display,
    entry_from_wire,
    entry_to_wire,
    field_kind,
    field_patch,
    new_entry_payload,
)

__all__ = [
    "EDITABLE_FIELDS",
    "FIELD_KINDS",
    "FieldKind",
    "coerce_display",
    "entry_from_wire",
    "entry_to_wire",
    "field_kind",
    "field_patch",
    "format_date",
    "format_decimal",
    "join_tags",
    "new_entry_payload",
    "normalize_tags",
    "parse_date",
    "parse_number",
    "split_tags",
    "to_display",
    "to_wire",
]
