"""
Domain Services - menu business logic.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from menu_api.services.domain import MenuItemService

    service = MenuItemService(db, DbStoreAuthorizer(db))
    items = service.list_store_menu_items(store_id)
"""

from .category_resolver import next_sort_order, resolve_category
from .customization_sync import (
    CustomizationSyncResult,
    create_customization_groups,
    existing_group_snapshot,
    sync_customization_groups,
)
from .menu_item_service import MenuItemService
from .reconcile import (
    ChildHandler,
    ExistingKey,
    NewKey,
    SyncResult,
    key_desired,
    reconcile_children,
)

__all__ = [
    "MenuItemService",
    "resolve_category",
    "next_sort_order",
    "sync_customization_groups",
    "create_customization_groups",
    "existing_group_snapshot",
    "CustomizationSyncResult",
    "reconcile_children",
    "key_desired",
    "ChildHandler",
    "ExistingKey",
    "NewKey",
    "SyncResult",
]
