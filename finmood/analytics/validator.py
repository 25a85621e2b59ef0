from __future__ import annotations

from typing import Any, Mapping, Union

from finmood.analytics.models import DEFAULT_INTENSITY, MoodInput, ValidatedMood
from finmood.analytics.store import MoodStore
from finmood.utils.errors import OwnershipError, ValidationError
from finmood.utils.logging import get_logger
from finmood.utils.validation import validate_intensity, validate_mood

logger = get_logger(__name__)


class MoodValidator:
    """Single validation step run before any mood write.

    Checks, in order: mood label, intensity range, transaction ownership.
    """

    def __init__(self, store: MoodStore):
        self.store = store

    def validate(self, data: Union[MoodInput, Mapping[str, Any]]) -> ValidatedMood:
        proposal = coerce_mood_input(data)

        try:
            mood = validate_mood(proposal.mood)
            intensity = validate_intensity(proposal.intensity)
        except ValidationError as e:
            logger.warning(
                f"Mood validation failed: {e}",
                extra={"transaction_id": proposal.transaction_id, "user_id": proposal.user_id},
            )
            raise

        self._check_ownership(proposal.transaction_id, proposal.user_id)

        return ValidatedMood(
            transaction_id=proposal.transaction_id,
            user_id=proposal.user_id,
            mood=mood,
            intensity=DEFAULT_INTENSITY if intensity is None else intensity,
            notes=proposal.notes,
        )

    def _check_ownership(self, transaction_id: int, user_id: int) -> None:
        if self.store.find_owned_transaction(transaction_id, user_id) is None:
            logger.warning(
                "Transaction ownership validation failed",
                extra={"transaction_id": transaction_id, "user_id": user_id},
            )
            raise OwnershipError("Transaction not found or does not belong to user")


def coerce_mood_input(data: Union[MoodInput, Mapping[str, Any]]) -> MoodInput:
    """Accept either a MoodInput or a plain mapping with the same keys."""
    if isinstance(data, MoodInput):
        return data
    missing = [k for k in ("transaction_id", "user_id", "mood") if k not in data]
    if missing:
        raise ValidationError(f"Missing required mood fields: {missing}")
    return MoodInput(
        transaction_id=data["transaction_id"],
        user_id=data["user_id"],
        mood=data["mood"],
        notes=data.get("notes"),
        intensity=data.get("intensity"),
    )
