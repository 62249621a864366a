"""
Infrastructure module: database sessions, transactions and request correlation.
"""

from shared.infrastructure.db import (
    engine,
    SessionLocal,
    get_db,
    transaction,
)

__all__ = [
    "engine",
    "SessionLocal",
    "get_db",
    "transaction",
]
