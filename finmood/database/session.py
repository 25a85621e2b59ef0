"""Database session management."""
from contextlib import contextmanager
from typing import Generator, Optional
from sqlalchemy.orm import Session, sessionmaker
from finmood.database.connection import get_session_factory


@contextmanager
def get_db(session_factory: Optional[sessionmaker] = None) -> Generator[Session, None, None]:
    """
    Context manager for database sessions.

    Commits on success, rolls back and re-raises on any error. Uses the
    global session factory unless one is given.

    Usage:
        with get_db() as db:
            db.execute(select(TransactionMood)).scalars().all()
    """
    SessionLocal = session_factory or get_session_factory()
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
