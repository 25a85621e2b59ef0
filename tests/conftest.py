"""Pytest configuration and fixtures."""
import pytest
from datetime import datetime, timedelta
from pathlib import Path
import tempfile
from typing import Dict, List, Optional, Tuple
import yaml
from sqlalchemy.orm import sessionmaker

from finmood.analytics.config import AnalyticsConfig
from finmood.analytics.models import MoodRecord, TransactionRecord, ValidatedMood
from finmood.config import reset_config
from finmood.database.connection import build_engine, reset_engine
from finmood.database.models import Account, Base, Transaction
from finmood.database.repositories import SqlAlchemyMoodStore


@pytest.fixture
def temp_config_file():
    """Create a temporary config file for testing."""
    config_data = {
        'app': {
            'name': 'Test App',
            'version': '0.1.0',
            'debug': True
        },
        'database': {
            'url': 'sqlite:///:memory:'
        },
        'logging': {
            'level': 'DEBUG',
            'format': 'text'
        },
        'analytics': {
            'health': {'window_days': 14},
            'recommendations': {'stress_count_threshold': 2},
        }
    }

    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        yaml.dump(config_data, f)
        config_path = f.name

    yield config_path

    Path(config_path).unlink()


@pytest.fixture(autouse=True)
def reset_globals():
    """Forget the global config and engine around each test."""
    reset_config()
    reset_engine()
    yield
    reset_config()
    reset_engine()


@pytest.fixture
def analytics_config():
    return AnalyticsConfig()


@pytest.fixture
def session_factory():
    """In-memory SQLite database with all tables created."""
    engine = build_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, expire_on_commit=False)
    yield factory
    engine.dispose()


@pytest.fixture
def seeded_db(session_factory):
    """Two users with one account each.

    User 1 owns transactions 1-4 (recent), user 2 owns transaction 5.
    """
    now = datetime.utcnow()
    with session_factory() as session:
        session.add_all([
            Account(id=1, user_id=1, name="Checking"),
            Account(id=2, user_id=2, name="Checking"),
        ])
        session.add_all([
            Transaction(id=1, account_id=1, amount=-80.0, category="Dining", date=now - timedelta(days=1)),
            Transaction(id=2, account_id=1, amount=-200.0, category="Savings", date=now - timedelta(days=2)),
            Transaction(id=3, account_id=1, amount=3000.0, category="Salary", date=now - timedelta(days=3)),
            Transaction(id=4, account_id=1, amount=-45.0, category="Shopping", date=now - timedelta(days=4)),
            Transaction(id=5, account_id=2, amount=-60.0, category="Dining", date=now - timedelta(days=1)),
        ])
        session.commit()
    return session_factory


@pytest.fixture
def store(seeded_db):
    return SqlAlchemyMoodStore(seeded_db)


class FakeMoodStore:
    """Dict-backed store that records every write."""

    def __init__(self, transactions: Optional[List[TransactionRecord]] = None):
        self.transactions: Dict[int, TransactionRecord] = {t.id: t for t in (transactions or [])}
        self.moods: Dict[Tuple[int, int], MoodRecord] = {}
        self.writes: List[str] = []
        self._next_id = 1

    def find_owned_transaction(self, transaction_id, user_id):
        tx = self.transactions.get(transaction_id)
        return tx if tx is not None and tx.user_id == user_id else None

    def create_mood(self, mood: ValidatedMood) -> MoodRecord:
        self.writes.append("create")
        key = (mood.transaction_id, mood.user_id)
        if key in self.moods:
            raise RuntimeError("duplicate mood")
        record = MoodRecord(
            id=self._next_id,
            transaction_id=mood.transaction_id,
            user_id=mood.user_id,
            mood=mood.mood,
            intensity=mood.intensity,
            notes=mood.notes,
            transaction=self.transactions.get(mood.transaction_id),
        )
        self._next_id += 1
        self.moods[key] = record
        return record

    def upsert_mood(self, mood: ValidatedMood) -> MoodRecord:
        self.writes.append("upsert")
        key = (mood.transaction_id, mood.user_id)
        existing = self.moods.get(key)
        if existing is None:
            self.writes.pop()
            record = self.create_mood(mood)
            self.writes[-1] = "upsert"
            return record
        existing.mood = mood.mood
        existing.notes = mood.notes
        existing.intensity = mood.intensity
        existing.updated_at = datetime.utcnow()
        return existing

    def get_mood(self, transaction_id, user_id):
        return self.moods.get((transaction_id, user_id))

    def list_moods(self, user_id, since=None, limit=None):
        rows = [m for m in self.moods.values() if m.user_id == user_id]
        if since is not None:
            rows = [m for m in rows if m.created_at >= since]
        rows.sort(key=lambda m: m.created_at, reverse=True)
        return rows[:limit] if limit is not None else rows

    def list_transactions(self, user_id, since=None):
        rows = [t for t in self.transactions.values() if t.user_id == user_id]
        if since is not None:
            rows = [t for t in rows if t.date >= since]
        return sorted(rows, key=lambda t: t.date, reverse=True)


@pytest.fixture
def fake_store():
    now = datetime.utcnow()
    return FakeMoodStore([
        TransactionRecord(id=1, amount=-80.0, category="Dining", date=now, account_id=1, user_id=1),
        TransactionRecord(id=2, amount=-200.0, category="Savings", date=now, account_id=1, user_id=1),
        TransactionRecord(id=9, amount=-10.0, category="Dining", date=now, account_id=2, user_id=2),
    ])
