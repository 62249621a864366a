"""
Category Resolver.

Turns a category reference from a menu item request into a category ID inside
the caller's transaction:

- With an ID: rename the category, guarded by ID and store in one UPDATE.
  Zero affected rows means the category is missing or owned by another store.
- Without an ID: return the store's category with that name, or create it at
  the next sort position.

Usage:
    with transaction(db) as tx:
        category_id = resolve_category(tx, CategoryRef(name="Curry"), store_id=1)
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from menu_api.models import Category
from menu_api.repositories import CategoryRepository
from shared.config.constants import MenuDefaults
from shared.config.logging import get_logger
from shared.utils.exceptions import CategoryNotFoundError, ValidationError
from shared.utils.schemas import CategoryRef
from shared.utils.validators import normalize_name

logger = get_logger(__name__)


def next_sort_order(current_max: int | None) -> int:
    """Next dense position in a scope: 0 for an empty scope, else max + 1."""
    if current_max is None:
        current_max = MenuDefaults.EMPTY_SCOPE_SORT_ORDER
    return current_max + 1


def resolve_category(tx: Session, ref: CategoryRef, store_id: int) -> int:
    """
    Resolve a category reference to a category ID, creating it if needed.

    Args:
        tx: Transaction handle.
        ref: Category reference (ID and/or name).
        store_id: Store that owns the menu item.

    Returns:
        ID of the resolved category.

    Raises:
        ValidationError: If the reference has no usable name.
        CategoryNotFoundError: If the ID does not exist within the store.
    """
    repo = CategoryRepository(tx)
    name = normalize_name(ref.name)

    if ref.id is not None:
        if not name:
            raise ValidationError(
                "Category name is required when updating by ID.",
                field="category.name",
            )

        logger.debug("Renaming category", category_id=ref.id, store_id=store_id)
        affected = repo.update_where(
            {"name": name},
            Category.id == ref.id,
            Category.store_id == store_id,
        )
        if affected == 0:
            raise CategoryNotFoundError(ref.id, store_id)

        return ref.id

    if not name:
        raise ValidationError(
            "Category name is required to find or create a category.",
            field="category.name",
        )

    existing = repo.find_by_store_and_name(store_id, name)
    if existing is not None:
        logger.debug(
            "Found existing category",
            category_id=existing.id,
            store_id=store_id,
        )
        return existing.id

    sort_order = next_sort_order(repo.max_sort_order(store_id))
    category = repo.create(store_id=store_id, name=name, sort_order=sort_order)
    logger.info(
        "Created category",
        category_id=category.id,
        store_id=store_id,
        name=name,
        sort_order=sort_order,
    )
    return category.id
