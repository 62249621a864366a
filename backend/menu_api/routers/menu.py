"""
Menu item endpoints.

Thin router that delegates to MenuItemService. Service exceptions are
HTTPExceptions and reach the client with their own status code.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context as current_user, get_user_id
from shared.utils.schemas import (
    DeletedOutput,
    ErrorResponse,
    MenuItemCreate,
    MenuItemOutput,
    MenuItemUpdate,
)
from menu_api.services import DbStoreAuthorizer, MenuItemService


router = APIRouter(tags=["menu-items"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


def _get_service(db: Session) -> MenuItemService:
    """Get MenuItemService instance."""
    return MenuItemService(db, DbStoreAuthorizer(db))


# =============================================================================
# Public Reads
# =============================================================================


@router.get("/stores/{store_id}/menu-items", response_model=list[MenuItemOutput])
def list_menu_items(
    store_id: int,
    db: Session = Depends(get_db),
) -> list[MenuItemOutput]:
    """List a store's menu items by category position, then item position."""
    return _get_service(db).list_store_menu_items(store_id)


@router.get(
    "/menu-items/{item_id}",
    response_model=MenuItemOutput,
    responses={404: {"model": ErrorResponse}},
)
def get_menu_item(
    item_id: int,
    db: Session = Depends(get_db),
) -> MenuItemOutput:
    """Get a menu item with its category, groups and options."""
    return _get_service(db).get_menu_item(item_id)


# =============================================================================
# Management (OWNER / ADMIN)
# =============================================================================


@router.post(
    "/stores/{store_id}/menu-items",
    response_model=MenuItemOutput,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
def create_menu_item(
    store_id: int,
    body: MenuItemCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> MenuItemOutput:
    """
    Create a menu item.

    The category is found by name (or created), or renamed when its ID is given.
    """
    return _get_service(db).create_menu_item(get_user_id(user), store_id, body)


@router.patch(
    "/stores/{store_id}/menu-items/{item_id}",
    response_model=MenuItemOutput,
    responses=ERROR_RESPONSES,
)
def update_menu_item(
    store_id: int,
    item_id: int,
    body: MenuItemUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> MenuItemOutput:
    """
    Update a menu item.

    Omitted fields are left as they are. `customization_groups`, when sent,
    replaces every group and option of the item.
    """
    return _get_service(db).update_menu_item(get_user_id(user), store_id, item_id, body)


@router.delete(
    "/stores/{store_id}/menu-items/{item_id}",
    response_model=DeletedOutput,
    responses=ERROR_RESPONSES,
)
def delete_menu_item(
    store_id: int,
    item_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> DeletedOutput:
    """Delete a menu item with its customizations. Deleting twice succeeds."""
    return _get_service(db).delete_menu_item(get_user_id(user), store_id, item_id)
