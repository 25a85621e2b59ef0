"""Input validation utilities."""
from typing import Any, Optional

from finmood.utils.errors import ValidationError

MOOD_LABELS = (
    "happy",
    "stressed",
    "bored",
    "impulsive",
    "planned",
    "anxious",
    "excited",
    "regretful",
)

MIN_INTENSITY = 1
MAX_INTENSITY = 10

VALID_TIMEFRAMES = ("weekly", "monthly", "yearly", "all")
VALID_GROUPINGS = ("week", "month")


def validate_mood(mood: Any) -> str:
    """
    Validate a mood label.

    Args:
        mood: Proposed label (e.g., "stressed")

    Returns:
        The label unchanged

    Raises:
        ValidationError: If the label is not one of MOOD_LABELS
    """
    if mood not in MOOD_LABELS:
        raise ValidationError(
            f"Invalid mood: {mood}. Must be one of: {', '.join(MOOD_LABELS)}"
        )
    return mood


def validate_intensity(intensity: Optional[Any]) -> Optional[int]:
    """
    Validate an optional intensity value.

    Args:
        intensity: Proposed intensity, or None when omitted

    Returns:
        The intensity, or None if it was omitted

    Raises:
        ValidationError: If present and not an integer in [1, 10]
    """
    if intensity is None:
        return None

    if isinstance(intensity, bool) or not isinstance(intensity, int):
        raise ValidationError(f"Intensity must be an integer, got: {intensity!r}")

    if intensity < MIN_INTENSITY or intensity > MAX_INTENSITY:
        raise ValidationError(
            f"Intensity must be between {MIN_INTENSITY} and {MAX_INTENSITY}, got: {intensity}"
        )

    return intensity


def validate_timeframe(timeframe: str) -> str:
    """Validate analytics timeframe."""
    timeframe = timeframe.lower().strip()

    if timeframe not in VALID_TIMEFRAMES:
        raise ValidationError(
            f"Invalid timeframe: {timeframe}. Must be one of {list(VALID_TIMEFRAMES)}"
        )

    return timeframe


def validate_group_by(group_by: str) -> str:
    """Validate trend grouping period."""
    group_by = group_by.lower().strip()

    if group_by not in VALID_GROUPINGS:
        raise ValidationError(
            f"Invalid group_by: {group_by}. Must be one of {list(VALID_GROUPINGS)}"
        )

    return group_by
