"""
Menu Item Service - create, update and delete a menu item with its whole
customization graph as one atomic unit.

Each mutating operation:
1. Checks the caller's store role (OWNER or ADMIN) before any write.
2. Opens one transaction and passes its handle to every helper.
3. Resolves the category, writes the item, syncs groups and options.
4. Re-reads the item with its full graph and returns it.

Domain errors (validation, not found, forbidden) reach the caller unchanged.
Anything else is logged and replaced by a generic InternalError. In both cases
the transaction rolls back and no partial write is observable.

Usage:
    from menu_api.services import DbStoreAuthorizer, MenuItemService

    service = MenuItemService(db, DbStoreAuthorizer(db))
    item = service.create_menu_item(user_id, store_id, MenuItemCreate(...))
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy.orm import Session

from menu_api.models import MenuItem
from menu_api.repositories import MenuItemRepository
from menu_api.services.authorization import StoreAuthorizer
from shared.config.constants import MENU_MANAGEMENT_ROLES
from shared.config.logging import get_logger
from shared.infrastructure.db import transaction
from shared.utils.exceptions import (
    DOMAIN_ERRORS,
    InternalError,
    MenuItemNotFoundError,
    StoreAccessError,
    ValidationError,
)
from shared.utils.schemas import (
    DeletedOutput,
    MenuItemCreate,
    MenuItemOutput,
    MenuItemUpdate,
)

from .category_resolver import next_sort_order, resolve_category
from .customization_sync import (
    create_customization_groups,
    existing_group_snapshot,
    sync_customization_groups,
)

logger = get_logger(__name__)

# Scalar columns a MenuItemUpdate may write
UPDATABLE_FIELDS = ("name", "description", "base_price", "image_url", "is_hidden")
NOT_NULL_FIELDS = frozenset({"name", "base_price", "is_hidden"})


@contextmanager
def _service_boundary(action: str, **context: Any) -> Iterator[None]:
    """Let domain errors through; mask everything else as InternalError."""
    try:
        yield
    except DOMAIN_ERRORS:
        # Already logged on construction
        raise
    except Exception as e:
        logger.error(
            f"Unexpected failure while trying to {action}",
            error_type=type(e).__name__,
            exc_info=True,
            **context,
        )
        raise InternalError(f"Failed to {action}.", **context) from e


class MenuItemService:
    """
    Service for menu item management.

    Business rules:
    - Only OWNER and ADMIN of the store may create, update or delete
    - A menu item always references a category of its own store
    - Sort positions are dense per (store, category), starting at 0
    - Customization groups are replaced as a complete desired set
    - Deleting an absent item succeeds (idempotent)
    """

    def __init__(self, db: Session, authorizer: StoreAuthorizer):
        self._db = db
        self._authorizer = authorizer

    # =========================================================================
    # Query Methods
    # =========================================================================

    def list_store_menu_items(self, store_id: int) -> list[MenuItemOutput]:
        """All items of a store, by category position then item position."""
        items = MenuItemRepository(self._db).find_by_store_with_graph(store_id)
        return [MenuItemOutput.model_validate(item) for item in items]

    def get_menu_item(self, item_id: int) -> MenuItemOutput:
        """
        Get one item with its full graph.

        Raises:
            MenuItemNotFoundError: If the item does not exist.
        """
        item = MenuItemRepository(self._db).find_with_graph(item_id)
        if item is None:
            raise MenuItemNotFoundError(item_id)
        return MenuItemOutput.model_validate(item)

    # =========================================================================
    # Create
    # =========================================================================

    def create_menu_item(
        self,
        user_id: int,
        store_id: int,
        dto: MenuItemCreate,
    ) -> MenuItemOutput:
        """
        Create a menu item, its category if needed, and its customizations.

        Args:
            user_id: Caller.
            store_id: Store the item is created in.
            dto: Item fields, category reference and customization groups.

        Returns:
            The created item with its full graph.

        Raises:
            ForbiddenError: Caller lacks a management role in the store.
            ValidationError: Category reference has no name.
            CategoryNotFoundError: Category ID not found in the store.
            InternalError: Any unexpected failure.
        """
        logger.info("Creating menu item", user_id=user_id, store_id=store_id, name=dto.name)
        self._authorizer.check_store_permission(user_id, store_id, MENU_MANAGEMENT_ROLES)

        if dto.category is None or not dto.category.name:
            raise ValidationError(
                "Category name is required.",
                field="category.name",
                store_id=store_id,
            )

        with _service_boundary("create menu item", store_id=store_id):
            with transaction(self._db) as tx:
                category_id = resolve_category(tx, dto.category, store_id)

                items = MenuItemRepository(tx)
                sort_order = next_sort_order(items.max_sort_order(store_id, category_id))
                item = items.create(
                    store_id=store_id,
                    category_id=category_id,
                    name=dto.name,
                    description=dto.description,
                    base_price=dto.base_price,
                    image_url=dto.image_url,
                    sort_order=sort_order,
                )
                logger.debug(
                    "Menu item row created",
                    item_id=item.id,
                    category_id=category_id,
                    sort_order=sort_order,
                )

                if dto.customization_groups:
                    create_customization_groups(tx, item.id, dto.customization_groups)

                output = self._reload(tx, item.id)

        logger.info("Menu item created", item_id=output.id, store_id=store_id)
        return output

    # =========================================================================
    # Update
    # =========================================================================

    def update_menu_item(
        self,
        user_id: int,
        store_id: int,
        item_id: int,
        dto: MenuItemUpdate,
    ) -> MenuItemOutput:
        """
        Update a menu item in place.

        Only fields present in the request are written. A present
        `customization_groups` (even empty or null) replaces every group.

        Raises:
            ForbiddenError: Caller lacks a management role, or the item
                belongs to another store.
            MenuItemNotFoundError: Item does not exist.
            ValidationError: Category reference has no name, or a required
                column is set to null.
            InternalError: Any unexpected failure.
        """
        logger.info(
            "Updating menu item",
            user_id=user_id,
            store_id=store_id,
            item_id=item_id,
        )
        self._authorizer.check_store_permission(user_id, store_id, MENU_MANAGEMENT_ROLES)

        present = dto.model_fields_set

        with _service_boundary("update menu item", store_id=store_id, item_id=item_id):
            with transaction(self._db) as tx:
                items = MenuItemRepository(tx)
                item = items.find_with_graph(item_id)
                self._check_in_store(item, item_id, store_id)

                existing_groups = existing_group_snapshot(item.customization_groups)
                values = self._scalar_updates(dto, present)

                if "category" in present:
                    if dto.category is None or not dto.category.name:
                        raise ValidationError(
                            "Category name is required.",
                            field="category.name",
                            item_id=item_id,
                        )
                    category_id = resolve_category(tx, dto.category, store_id)
                    if category_id != item.category_id:
                        values["category_id"] = category_id

                if values:
                    items.update_by_id(item_id, **values)
                    logger.debug("Menu item fields written", item_id=item_id, fields=sorted(values))

                if "customization_groups" in present:
                    sync_customization_groups(
                        tx,
                        item_id,
                        existing_groups,
                        dto.customization_groups or [],
                    )

                output = self._reload(tx, item_id)

        logger.info("Menu item updated", item_id=item_id, store_id=store_id)
        return output

    # =========================================================================
    # Delete
    # =========================================================================

    def delete_menu_item(self, user_id: int, store_id: int, item_id: int) -> DeletedOutput:
        """
        Delete a menu item with its groups and options.

        Deleting an item that does not exist succeeds and returns its ID.

        Raises:
            ForbiddenError: Caller lacks a management role, or the item
                belongs to another store.
            InternalError: Any unexpected failure.
        """
        logger.info(
            "Deleting menu item",
            user_id=user_id,
            store_id=store_id,
            item_id=item_id,
        )
        self._authorizer.check_store_permission(user_id, store_id, MENU_MANAGEMENT_ROLES)

        with _service_boundary("delete menu item", store_id=store_id, item_id=item_id):
            with transaction(self._db) as tx:
                items = MenuItemRepository(tx)
                item = items.find_by_id(item_id)

                if item is None:
                    logger.warning(
                        "Menu item already absent, nothing to delete",
                        item_id=item_id,
                        store_id=store_id,
                    )
                    return DeletedOutput(id=item_id)

                if item.store_id != store_id:
                    raise StoreAccessError("Menu item", item_id, store_id)

                items.delete(item)

        logger.info("Menu item deleted", item_id=item_id, store_id=store_id)
        return DeletedOutput(id=item_id)

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _check_in_store(item: MenuItem | None, item_id: int, store_id: int) -> None:
        if item is None:
            raise MenuItemNotFoundError(item_id, store_id=store_id)
        if item.store_id != store_id:
            raise StoreAccessError("Menu item", item_id, store_id)

    @staticmethod
    def _scalar_updates(dto: MenuItemUpdate, present: set[str]) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for field in UPDATABLE_FIELDS:
            if field not in present:
                continue
            value = getattr(dto, field)
            if value is None and field in NOT_NULL_FIELDS:
                raise ValidationError(f"{field} cannot be null.", field=field)
            values[field] = value
        return values

    @staticmethod
    def _reload(tx: Session, item_id: int) -> MenuItemOutput:
        """Re-read the item with its full graph after this transaction's writes."""
        tx.expire_all()
        item = MenuItemRepository(tx).find_with_graph(item_id)
        if item is None:
            raise MenuItemNotFoundError(item_id)
        return MenuItemOutput.model_validate(item)
