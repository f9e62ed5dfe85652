"""Database engine and session handling"""

from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from ..config import get_database_url

# Global database engine and session factory
engine = None
SessionLocal = None


def build_engine(url: Optional[str] = None) -> Engine:
    """Create an engine; SQLite connections are shared with worker threads"""
    url = url or get_database_url()
    connect_args = {}
    if make_url(url).get_backend_name() == "sqlite":
        connect_args["check_same_thread"] = False
    return create_engine(url, connect_args=connect_args)


def get_engine() -> Engine:
    """Get database engine"""
    global engine
    if engine is None:
        engine = build_engine()
    return engine


def get_session_factory() -> sessionmaker:
    """Get session factory"""
    global SessionLocal
    if SessionLocal is None:
        SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return SessionLocal


@contextmanager
def get_db_session(session_factory: Optional[sessionmaker] = None) -> Generator[Session, None, None]:
    """Get database session with automatic commit, rollback and cleanup"""
    factory = session_factory or get_session_factory()
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def reset_database_globals() -> None:
    """Reset global database engine and session factory for testing"""
    global engine, SessionLocal
    if engine:
        engine.dispose()
    engine = None
    SessionLocal = None
