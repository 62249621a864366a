"""
Menu Repositories - Data access for categories, menu items and customizations.
"""

from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.orm import selectinload

from menu_api.models import (
    Category,
    MenuItem,
    CustomizationGroup,
    CustomizationOption,
)
from .base import BaseRepository


# Full graph of a menu item: category, groups by name, options by name.
# Ordering comes from the relationship definitions.
MENU_ITEM_GRAPH = (
    selectinload(MenuItem.category),
    selectinload(MenuItem.customization_groups).selectinload(
        CustomizationGroup.customization_options
    ),
)


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category entities."""

    @property
    def model(self) -> type[Category]:
        return Category

    def find_by_store_and_name(self, store_id: int, name: str) -> Category | None:
        """Look up by the (store_id, name) unique pair."""
        return self.find_one(Category.store_id == store_id, Category.name == name)

    def max_sort_order(self, store_id: int) -> int | None:
        return self.max_value(Category.sort_order, Category.store_id == store_id)


class MenuItemRepository(BaseRepository[MenuItem]):
    """
    Repository for MenuItem entities.

    Graph reads eagerly load category, customization groups and options.
    """

    @property
    def model(self) -> type[MenuItem]:
        return MenuItem

    def find_with_graph(self, item_id: int) -> MenuItem | None:
        """Find one item with its full nested graph."""
        return self._db.scalar(
            select(MenuItem)
            .options(*MENU_ITEM_GRAPH)
            .where(MenuItem.id == item_id)
            .execution_options(populate_existing=True)
        )

    def find_by_store_with_graph(self, store_id: int) -> Sequence[MenuItem]:
        """All items of a store, by category position then item position."""
        query = (
            select(MenuItem)
            .join(Category, Category.id == MenuItem.category_id)
            .options(*MENU_ITEM_GRAPH)
            .where(MenuItem.store_id == store_id)
            .order_by(Category.sort_order, MenuItem.sort_order, MenuItem.id)
        )
        return self._db.execute(query).scalars().unique().all()

    def max_sort_order(self, store_id: int, category_id: int) -> int | None:
        return self.max_value(
            MenuItem.sort_order,
            MenuItem.store_id == store_id,
            MenuItem.category_id == category_id,
        )


class CustomizationGroupRepository(BaseRepository[CustomizationGroup]):
    """Repository for CustomizationGroup entities."""

    @property
    def model(self) -> type[CustomizationGroup]:
        return CustomizationGroup

    def delete_by_ids(self, entity_ids: Sequence[int]) -> int:
        """Bulk delete groups together with all of their options."""
        if not entity_ids:
            return 0
        ids = list(entity_ids)
        self._db.execute(
            delete(CustomizationOption).where(CustomizationOption.group_id.in_(ids))
        )
        return super().delete_by_ids(ids)


class CustomizationOptionRepository(BaseRepository[CustomizationOption]):
    """Repository for CustomizationOption entities."""

    @property
    def model(self) -> type[CustomizationOption]:
        return CustomizationOption

