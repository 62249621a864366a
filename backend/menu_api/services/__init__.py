"""
Menu API services.

- authorization: StoreAuthorizer capability and its database implementation
- domain: menu item service, category resolver, customization synchronizer
"""

from .authorization import DbStoreAuthorizer, StoreAuthorizer
from .domain import MenuItemService

__all__ = [
    "StoreAuthorizer",
    "DbStoreAuthorizer",
    "MenuItemService",
]
