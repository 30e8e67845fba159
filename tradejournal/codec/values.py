"""Conversions between wire values and display values.

Wire values are what the journal API exchanges: comma-joined strings for
tag fields, ``YYYY-MM-DD`` for dates and plain decimal strings for P&L.
Display values are what the editor works with: tuples of tags,
``datetime.date`` objects and floats.

Coercion is lenient. Anything that cannot be parsed degrades to the
field's safe default (``None`` date, ``0`` P&L, empty tags) instead of
raising.
"""

import math
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Iterable, Optional, Union


# Formats tried in order for manually typed dates
DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%d.%m.%Y")

# Separator used when writing tag fields
TAG_SEPARATOR = ", "


class FieldKind(str, Enum):
    """How a field is represented on the wire and in the editor."""

    DATE = "date"
    NUMBER = "number"
    TAGS = "tags"
    TEXT = "text"


def parse_date(value: Any) -> Optional[date]:
    """Parse a date from a wire string or a display value.

    Timezone-aware datetimes are converted to local time first so the
    calendar day matches what the user sees.

    Args:
        value: ``date``, ``datetime``, string or None.

    Returns:
        Calendar date, or None if the value cannot be parsed.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            try:
                value = value.astimezone()
            except (OverflowError, ValueError):
                return None
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parse_date(parsed)


def format_date(value: Any) -> Optional[str]:
    """Format a date as ``YYYY-MM-DD`` from its local calendar fields.

    Args:
        value: Anything accepted by :func:`parse_date`.

    Returns:
        Wire date string, or None for empty/invalid input.
    """
    parsed = parse_date(value)
    if parsed is None:
        return None
    return f"{parsed.year:04d}-{parsed.month:02d}-{parsed.day:02d}"


def parse_number(value: Any) -> float:
    """Parse a P&L amount.

    Args:
        value: Number, decimal string or anything else.

    Returns:
        Finite float, 0.0 when the value is not numeric.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip()
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def format_decimal(value: Any) -> str:
    """Format a number as a plain decimal string.

    No exponent and no trailing zeros: ``12.5``, ``-3``, ``0.00001``.

    Args:
        value: Anything accepted by :func:`parse_number`.

    Returns:
        Decimal string, ``"0"`` for zero and non-numeric input.
    """
    number = parse_number(value)
    if number == 0:
        return "0"
    try:
        text = format(Decimal(repr(number)), "f")
    except InvalidOperation:
        return "0"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def split_tags(value: Union[str, Iterable[Any], None]) -> tuple[str, ...]:
    """Split a tag field into a deduplicated, ordered tuple.

    Strings are split on commas. For iterables every item is split as
    well, so a tag can never smuggle a separator through a round trip.
    Other scalars become a single tag; booleans carry no tag.

    Args:
        value: Comma-joined string, iterable of tags, scalar or None.

    Returns:
        Tuple of trimmed, non-empty tags in first-seen order.
    """
    if value is None or isinstance(value, bool):
        return ()
    if isinstance(value, str):
        parts = value.split(",")
    elif not isinstance(value, Iterable):
        parts = str(value).split(",")
    else:
        parts = [
            piece
            for item in value
            if item is not None
            for piece in str(item).split(",")
        ]
    tags = (part.strip() for part in parts)
    return tuple(dict.fromkeys(tag for tag in tags if tag))


def join_tags(value: Union[str, Iterable[Any], None]) -> str:
    """Join tags into the wire form (``"A, B"``)."""
    return TAG_SEPARATOR.join(split_tags(value))


def normalize_tags(value: Optional[str]) -> str:
    """Normalize a wire tag string (trim, drop empties and duplicates)."""
    return join_tags(split_tags(value))


def to_display(kind: FieldKind, value: Any) -> Any:
    """Convert a wire (or loosely typed) value to its display form.

    Args:
        kind: Field kind.
        value: Wire value, or an already-display value.

    Returns:
        ``date | None`` for dates, float for numbers, tuple of tags for
        tag fields, str for text.
    """
    if kind is FieldKind.DATE:
        return parse_date(value)
    if kind is FieldKind.NUMBER:
        return parse_number(value)
    if kind is FieldKind.TAGS:
        return split_tags(value)
    return "" if value is None else str(value)


def to_wire(kind: FieldKind, value: Any) -> Optional[str]:
    """Convert a display (or loosely typed) value to its wire form.

    Args:
        kind: Field kind.
        value: Display value.

    Returns:
        Wire string; None only for an empty date.
    """
    if kind is FieldKind.DATE:
        return format_date(value)
    if kind is FieldKind.NUMBER:
        return format_decimal(value)
    if kind is FieldKind.TAGS:
        return join_tags(value)
    return "" if value is None else str(value)
