"""Fixed option vocabularies offered by the multi-select editors."""

from typing import Optional

BIAS_OPTIONS = ("buy", "sell")

ARRAY_OPTIONS = (
    "FVG",
    "Asian High Low",
    "OB",
)

RESULTS_OPTIONS = (
    "Win",
    "Loss",
    "Break Even",
    "Not Triggered",
    "Missed",
    "Monday",
    "News",
)

EMOTION_OPTIONS = (
    "Confident",
    "Anxious",
    "Excited",
    "Fearful",
    "Greedy",
    "Patient",
    "Frustrated",
    "Calm",
    "Overconfident",
    "Disciplined",
    "FOMO",
    "Revenge Trading",
    "Neutral",
)

FIELD_OPTIONS: dict[str, tuple[str, ...]] = {
    "bias": BIAS_OPTIONS,
    "array": ARRAY_OPTIONS,
    "results": RESULTS_OPTIONS,
    "emotions": EMOTION_OPTIONS,
    "before_trade_emotions": EMOTION_OPTIONS,
    "in_trade_emotions": EMOTION_OPTIONS,
    "after_trade_emotions": EMOTION_OPTIONS,
}


def options_for(field: str) -> Optional[tuple[str, ...]]:
    """Get the vocabulary offered for a multi-valued field.

    Args:
        field: Entry field name.

    Returns:
        Tuple of option labels, or None for fields without a vocabulary.
    """
    return FIELD_OPTIONS.get(field)
