from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from finmood.analytics.models import MoodInput, MoodRecord
from finmood.analytics.store import MoodStore
from finmood.analytics.validator import MoodValidator
from finmood.utils.logging import get_logger

logger = get_logger(__name__)


class MoodRecorder:
    """Validate a proposed mood and write it through the store.

    Exactly one store write per call. Store errors are logged and re-raised
    unchanged; the recorder does not retry or check for an existing record.
    """

    def __init__(self, store: MoodStore, validator: Optional[MoodValidator] = None):
        self.store = store
        self.validator = validator or MoodValidator(store)

    def create_transaction_mood(self, data: Union[MoodInput, Mapping[str, Any]]) -> MoodRecord:
        validated = self.validator.validate(data)
        logger.info(
            "Creating transaction mood entry",
            extra={"transaction_id": validated.transaction_id, "user_id": validated.user_id, "mood": validated.mood},
        )
        try:
            record = self.store.create_mood(validated)
        except Exception:
            logger.error(
                "Failed to create transaction mood",
                exc_info=True,
                extra={"transaction_id": validated.transaction_id, "user_id": validated.user_id},
            )
            raise
        logger.debug(f"Transaction mood created: {record.id}")
        return record

    def upsert_transaction_mood(self, data: Union[MoodInput, Mapping[str, Any]]) -> MoodRecord:
        validated = self.validator.validate(data)
        logger.info(
            "Upserting transaction mood entry",
            extra={"transaction_id": validated.transaction_id, "user_id": validated.user_id, "mood": validated.mood},
        )
        try:
            record = self.store.upsert_mood(validated)
        except Exception:
            logger.error(
                "Failed to upsert transaction mood",
                exc_info=True,
                extra={"transaction_id": validated.transaction_id, "user_id": validated.user_id},
            )
            raise
        logger.debug(f"Transaction mood upserted: {record.id}")
        return record
