"""Database connection management."""
from pathlib import Path
from typing import Optional
from sqlalchemy import create_engine, Engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from finmood.config import get_config
from finmood.database.models import Base
import logging

logger = logging.getLogger(__name__)

_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine for ``database_url``; SQLite gets FK enforcement."""
    url = make_url(database_url)
    connect_args = {}

    if url.get_backend_name() == "sqlite":
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        connect_args["check_same_thread"] = False

    engine = create_engine(database_url, connect_args=connect_args, echo=echo)

    if url.get_backend_name() == "sqlite":
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def get_engine() -> Engine:
    """Get or create database engine."""
    global _engine

    if _engine is None:
        config = get_config()
        _engine = build_engine(config.database_url, echo=config.database_echo)
        logger.info(f"Database engine created: {_engine.url.render_as_string(hide_password=True)}")

    return _engine


def get_session_factory() -> sessionmaker:
    """Get or create session factory."""
    global _SessionLocal

    if _SessionLocal is None:
        engine = get_engine()
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)

    return _SessionLocal


def create_tables():
    """Create all database tables."""
    engine = get_engine()
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")


def drop_tables():
    """Drop all database tables (for testing)."""
    engine = get_engine()
    Base.metadata.drop_all(bind=engine)
    logger.info("Database tables dropped")


def reset_engine() -> None:
    """Dispose the engine and forget the session factory."""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None
