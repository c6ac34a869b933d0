"""
SQLAlchemy engine, session factory and declarative base.

Only used when STORE_BACKEND=sql; the default in-memory store never touches it.
"""
from typing import Iterator
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from finance_tracker.core.config import settings

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create all tables (models must be imported to register on Base)."""
    import finance_tracker.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
