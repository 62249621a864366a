"""
Database configuration, session management and transaction scope.
Uses SQLAlchemy 2.0 patterns.
"""

import os
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from shared.config.settings import DATABASE_URL, settings


def _calculate_pool_size() -> int:
    """
    Calculate pool size based on CPU cores.
    Formula: (2 * CPU cores) + 1, capped at 20.
    """
    cores = os.cpu_count() or 4
    return min(cores * 2 + 1, 20)


def _engine_options(url: str) -> dict[str, Any]:
    """Pool and connect options for the configured backend."""
    if url.startswith("sqlite"):
        # SQLite ignores pool sizing; sessions may cross threads under TestClient
        return {"connect_args": {"check_same_thread": False}}

    return {
        "pool_pre_ping": True,  # Verify connections before using
        "pool_size": _calculate_pool_size(),
        "max_overflow": 15,
        "pool_timeout": 30,  # Wait max 30s for connection from pool
        "pool_recycle": 1800,  # Recycle connections after 30 minutes
        "connect_args": {"connect_timeout": 10},
    }


engine = create_engine(
    DATABASE_URL,
    echo=settings.sql_echo,
    **_engine_options(DATABASE_URL),
)

# Session factory
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency for database sessions.

    Usage:
        @app.get("/items")
        def get_items(db: Session = Depends(get_db)):
            ...

    The session is automatically closed after the request completes.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Generator[Session, None, None]:
    """
    All-or-nothing unit of work over one session.

    The yielded session is the transaction handle: pass it to every helper that
    writes. Leaving the block normally commits; any exception rolls back every
    statement issued inside the block and is re-raised unchanged.

    Usage:
        with transaction(db) as tx:
            CategoryRepository(tx).create(store_id=1, name="Curry", sort_order=0)
    """
    try:
        yield db
        db.commit()
    except BaseException:
        db.rollback()
        raise
