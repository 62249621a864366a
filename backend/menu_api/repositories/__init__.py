"""
Repository layer: collection-scoped persistence primitives per entity.

Usage:
    from menu_api.repositories import CategoryRepository

    with transaction(db) as tx:
        category = CategoryRepository(tx).find_by_store_and_name(store_id, "Curry")
"""

from .base import BaseRepository
from .menu import (
    MENU_ITEM_GRAPH,
    CategoryRepository,
    MenuItemRepository,
    CustomizationGroupRepository,
    CustomizationOptionRepository,
)

__all__ = [
    "BaseRepository",
    "MENU_ITEM_GRAPH",
    "CategoryRepository",
    "MenuItemRepository",
    "CustomizationGroupRepository",
    "CustomizationOptionRepository",
]
