"""Persistence collaborator interface used by the analytics service."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Protocol

from finmood.analytics.models import MoodRecord, TransactionRecord, ValidatedMood


class MoodStore(Protocol):
    """Storage operations the mood service depends on.

    Each call is request-scoped and single-shot. ``upsert_mood`` must resolve
    conflicts on (transaction_id, user_id) atomically on the storage side.
    """

    def find_owned_transaction(self, transaction_id: int, user_id: int) -> Optional[TransactionRecord]:
        """Return the transaction if it exists and its account belongs to ``user_id``."""
        ...

    def create_mood(self, mood: ValidatedMood) -> MoodRecord:
        ...

    def upsert_mood(self, mood: ValidatedMood) -> MoodRecord:
        ...

    def get_mood(self, transaction_id: int, user_id: int) -> Optional[MoodRecord]:
        ...

    def list_moods(
        self, user_id: int, since: Optional[datetime] = None, limit: Optional[int] = None
    ) -> List[MoodRecord]:
        """Moods newest first by ``created_at``, each with its transaction joined."""
        ...

    def list_transactions(self, user_id: int, since: Optional[datetime] = None) -> List[TransactionRecord]:
        """Transactions on the user's accounts, newest first by ``date``."""
        ...
