"""
Database engine and per-request sessions (SQLAlchemy)
"""
from functools import lru_cache

import psycopg
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from finhelper.config import get_settings


class Base(DeclarativeBase):
    """Declarative base shared by all finhelper tables"""
    pass


@lru_cache
def get_engine() -> Engine:
    """Process-wide engine built from settings on first use"""
    settings = get_settings()
    return create_engine(
        settings.get_sqlalchemy_url(),
        pool_pre_ping=True,
        echo=settings.DEBUG,
    )


@lru_cache
def get_session_factory() -> sessionmaker:
    # expire_on_commit=False: rows returned by the store stay readable after commit
    return sessionmaker(bind=get_engine(), autoflush=False, expire_on_commit=False)


def get_db() -> Session:
    """
    FastAPI dependency: one session per request, closed afterwards

    Usage:
        @router.get("/wallets")
        def list_wallets(db: Session = Depends(get_db)):
            ...
    """
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def check_db_connection() -> None:
    """
    Readiness probe: raw psycopg round trip to PostgreSQL

    Raises:
        psycopg.OperationalError: if the database is unreachable
    """
    with psycopg.connect(get_settings().DATABASE_URL, connect_timeout=3) as conn:
        conn.execute("SELECT 1").fetchone()
