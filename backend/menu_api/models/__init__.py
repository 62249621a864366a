"""
SQLAlchemy ORM Models Package.

- base: Base class and TimestampMixin
- store: Store, User, UserStoreRole
- catalog: Category, MenuItem, CustomizationGroup, CustomizationOption
"""

from .base import Base, TimestampMixin

from .store import Store, User, UserStoreRole

from .catalog import Category, MenuItem, CustomizationGroup, CustomizationOption

__all__ = [
    "Base",
    "TimestampMixin",
    "Store",
    "User",
    "UserStoreRole",
    "Category",
    "MenuItem",
    "CustomizationGroup",
    "CustomizationOption",
]
