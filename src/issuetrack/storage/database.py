"""SQLAlchemy engine and sessions for the sqlite storage backend.

The engine is built lazily from the configured database URL and shared by
every SqlAlchemyRepository in the process.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from contextlib import contextmanager
from typing import Generator

from ..config import get_database_url

engine = None
SessionLocal = None

def engine_options(url: str) -> dict:
    """Keyword arguments for create_engine() for ``url``"""
    if make_url(url).get_backend_name() == "sqlite":
        # Connections are used from worker threads other than the creating one
        return {"connect_args": {"check_same_thread": False}}
    return {}

def get_engine():
    """Shared engine for the configured database URL"""
    global engine
    if engine is None:
        url = get_database_url()
        engine = create_engine(url, **engine_options(url))
    return engine

def get_session_factory():
    global SessionLocal
    if SessionLocal is None:
        SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return SessionLocal

@contextmanager
def get_db_session() -> Generator:
    """Session committed on success, rolled back on error, always closed"""
    session = get_session_factory()()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

def reset_database_globals():
    """Dispose the shared engine so the next call picks up the current URL"""
    global engine, SessionLocal
    if engine:
        engine.dispose()
    engine = None
    SessionLocal = None
