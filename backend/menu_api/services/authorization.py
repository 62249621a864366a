"""
Store authorization.

The menu services never read role storage. They receive a StoreAuthorizer at
construction and ask it whether a user holds one of the acceptable roles in a
store.

Usage:
    authorizer = DbStoreAuthorizer(db)
    authorizer.check_store_permission(user_id, store_id, MENU_MANAGEMENT_ROLES)
"""

from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

from sqlalchemy import select
from sqlalchemy.orm import Session

from menu_api.models import UserStoreRole
from shared.config.constants import Roles
from shared.config.logging import get_logger
from shared.utils.exceptions import InsufficientRoleError

logger = get_logger(__name__)


@runtime_checkable
class StoreAuthorizer(Protocol):
    """Capability that gates store-scoped operations by role."""

    def check_store_permission(
        self,
        user_id: int,
        store_id: int,
        allowed_roles: Iterable[str],
    ) -> None:
        """
        Return normally when the user holds one of allowed_roles in the store.

        Raises:
            ForbiddenError: otherwise.
        """
        ...


class DbStoreAuthorizer:
    """StoreAuthorizer backed by the user_store_role table."""

    def __init__(self, db: Session):
        self._db = db

    def get_role(self, user_id: int, store_id: int) -> str | None:
        """
        Role of the user in the store.

        None if the user is not a member, or the stored role is not a known one.
        """
        role = self._db.scalar(
            select(UserStoreRole.role).where(
                UserStoreRole.user_id == user_id,
                UserStoreRole.store_id == store_id,
            )
        )
        if role is not None and role not in Roles.ALL:
            logger.warning(
                "Ignoring unknown store role",
                user_id=user_id,
                store_id=store_id,
                role=role,
            )
            return None
        return role

    def check_store_permission(
        self,
        user_id: int,
        store_id: int,
        allowed_roles: Iterable[str],
    ) -> None:
        allowed = sorted(set(allowed_roles))
        role = self.get_role(user_id, store_id)

        if role is None or role not in allowed:
            raise InsufficientRoleError(
                allowed,
                user_id=user_id,
                store_id=store_id,
                role=role,
            )

        logger.debug(
            "Store permission granted",
            user_id=user_id,
            store_id=store_id,
            role=role,
        )
