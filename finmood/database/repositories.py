"""Data access layer for mood records and transactions."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session, selectinload, sessionmaker

from finmood.analytics.models import MoodRecord, TransactionRecord, ValidatedMood
from finmood.database.models import Account, Transaction, TransactionMood
from finmood.database.session import get_db
from finmood.utils.errors import ConfigurationError

_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class SqlAlchemyMoodStore:
    """SQLAlchemy implementation of the mood store.

    Every method runs in its own session: committed on success, rolled back
    and re-raised on failure. Returned records are plain dataclasses detached
    from the session.
    """

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self.SessionLocal = session_factory

    def find_owned_transaction(self, transaction_id: int, user_id: int) -> Optional[TransactionRecord]:
        """Get a transaction only if its account belongs to the user."""
        with get_db(self.SessionLocal) as session:
            stmt = (
                select(Transaction)
                .join(Account)
                .options(selectinload(Transaction.account))
                .where(Transaction.id == transaction_id, Account.user_id == user_id)
            )
            tx = session.execute(stmt).scalar_one_or_none()
            return tx.to_record() if tx else None

    def create_mood(self, mood: ValidatedMood) -> MoodRecord:
        """Insert a new mood; a duplicate (transaction_id, user_id) raises IntegrityError."""
        with get_db(self.SessionLocal) as session:
            row = TransactionMood(
                transaction_id=mood.transaction_id,
                user_id=mood.user_id,
                mood=mood.mood,
                notes=mood.notes,
                intensity=mood.intensity,
            )
            session.add(row)
            session.flush()
            return self._load_mood(session, mood.transaction_id, mood.user_id)

    def upsert_mood(self, mood: ValidatedMood) -> MoodRecord:
        """Insert or update keyed on (transaction_id, user_id) in a single statement."""
        with get_db(self.SessionLocal) as session:
            dialect = session.get_bind().dialect.name
            insert = _UPSERT_INSERTS.get(dialect)
            if insert is None:
                raise ConfigurationError(f"Upsert not supported for database dialect: {dialect}")

            now = datetime.utcnow()
            stmt = insert(TransactionMood).values(
                transaction_id=mood.transaction_id,
                user_id=mood.user_id,
                mood=mood.mood,
                notes=mood.notes,
                intensity=mood.intensity,
                created_at=now,
                updated_at=now,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=[TransactionMood.transaction_id, TransactionMood.user_id],
                set_={
                    "mood": mood.mood,
                    "notes": mood.notes,
                    "intensity": mood.intensity,
                    "updated_at": now,
                },
            )
            session.execute(stmt)
            return self._load_mood(session, mood.transaction_id, mood.user_id)

    def get_mood(self, transaction_id: int, user_id: int) -> Optional[MoodRecord]:
        with get_db(self.SessionLocal) as session:
            stmt = self._mood_query().where(
                TransactionMood.transaction_id == transaction_id,
                TransactionMood.user_id == user_id,
            )
            row = session.execute(stmt).scalar_one_or_none()
            return row.to_record() if row else None

    def list_moods(
        self, user_id: int, since: Optional[datetime] = None, limit: Optional[int] = None
    ) -> List[MoodRecord]:
        """List a user's moods newest first, with transactions joined."""
        with get_db(self.SessionLocal) as session:
            stmt = (
                self._mood_query()
                .where(TransactionMood.user_id == user_id)
                .order_by(TransactionMood.created_at.desc(), TransactionMood.id.desc())
            )
            if since is not None:
                stmt = stmt.where(TransactionMood.created_at >= since)
            if limit is not None:
                stmt = stmt.limit(limit)

            return [row.to_record() for row in session.execute(stmt).scalars().all()]

    def list_transactions(self, user_id: int, since: Optional[datetime] = None) -> List[TransactionRecord]:
        """List transactions on the user's accounts newest first."""
        with get_db(self.SessionLocal) as session:
            stmt = (
                select(Transaction)
                .join(Account)
                .options(selectinload(Transaction.account))
                .where(Account.user_id == user_id)
                .order_by(Transaction.date.desc(), Transaction.id.desc())
            )
            if since is not None:
                stmt = stmt.where(Transaction.date >= since)

            return [tx.to_record() for tx in session.execute(stmt).scalars().all()]

    # ---- Helpers ----
    @staticmethod
    def _mood_query():
        return select(TransactionMood).options(
            selectinload(TransactionMood.transaction).selectinload(Transaction.account)
        )

    def _load_mood(self, session: Session, transaction_id: int, user_id: int) -> MoodRecord:
        stmt = self._mood_query().where(
            TransactionMood.transaction_id == transaction_id,
            TransactionMood.user_id == user_id,
        )
        return session.execute(stmt).scalar_one().to_record()
