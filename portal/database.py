"""
SQLAlchemy engine, session factory and declarative base for the portal.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from typing import Generator

from .config import settings

def _connect_args(database_url: str) -> dict:
    # FastAPI runs sync dependencies in a threadpool, so SQLite must allow cross-thread use
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}

engine = create_engine(settings.database_url, connect_args=_connect_args(settings.database_url))

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

Base = declarative_base()

def get_db() -> Generator[Session, None, None]:
    """
    Request-scoped database session, closed once the response is sent.

    Yields:
        Session: Database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
