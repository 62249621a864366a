"""
Base Repository implementation.

Repositories are bound to the transaction handle (the session yielded by
`shared.infrastructure.db.transaction`). They flush but never commit: the
enclosing transaction owns commit and rollback.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Iterable, Mapping, Sequence, TypeVar

from sqlalchemy import ColumnElement, delete, func, insert, select, update
from sqlalchemy.orm import Session

from menu_api.models import Base


ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(ABC, Generic[ModelT]):
    """
    Collection-scoped data access primitives for one entity.

    Subclasses must implement:
    - model: Return the SQLAlchemy model class
    """

    def __init__(self, db: Session):
        self._db = db

    @property
    @abstractmethod
    def model(self) -> type[ModelT]:
        """Return the SQLAlchemy model class."""
        ...

    # =========================================================================
    # Reads
    # =========================================================================

    def find_by_id(self, entity_id: int) -> ModelT | None:
        """Find entity by ID (no scope filter)."""
        return self._db.get(self.model, entity_id)

    def find_one(self, *criteria: ColumnElement[bool]) -> ModelT | None:
        """Find the single entity matching all criteria."""
        return self._db.scalar(select(self.model).where(*criteria))

    def max_value(self, column: Any, *criteria: ColumnElement[bool]) -> int | None:
        """
        Aggregate maximum of a column over the matching rows.

        Returns:
            The maximum, or None when no row matches.
        """
        return self._db.scalar(select(func.max(column)).where(*criteria))

    # =========================================================================
    # Writes
    # =========================================================================

    def create(self, **fields: Any) -> ModelT:
        """Insert one entity and flush so its ID is assigned."""
        entity = self.model(**fields)
        self._db.add(entity)
        self._db.flush()
        return entity

    def create_many(self, rows: Iterable[Mapping[str, Any]]) -> int:
        """
        Bulk insert rows.

        Returns:
            Number of rows inserted.
        """
        rows = [dict(row) for row in rows]
        if not rows:
            return 0
        self._db.execute(insert(self.model), rows)
        return len(rows)

    def update_by_id(self, entity_id: int, **values: Any) -> int:
        """Update one entity's scalar fields in place. Returns affected rows."""
        return self.update_where(values, self.model.id == entity_id)

    def update_where(
        self,
        values: Mapping[str, Any],
        *criteria: ColumnElement[bool],
    ) -> int:
        """
        Conditional write: a single UPDATE guarded by all criteria.

        Returns:
            Number of affected rows (0 when nothing matched).
        """
        result = self._db.execute(
            update(self.model).where(*criteria).values(**values)
        )
        return result.rowcount

    def delete_by_ids(self, entity_ids: Sequence[int]) -> int:
        """Bulk delete by IDs. Returns affected rows."""
        if not entity_ids:
            return 0
        result = self._db.execute(
            delete(self.model).where(self.model.id.in_(list(entity_ids)))
        )
        return result.rowcount

    def delete(self, entity: ModelT) -> None:
        """Delete one loaded entity, cascading through ORM relationships."""
        self._db.delete(entity)
        self._db.flush()
