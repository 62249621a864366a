"""
Store and User Models.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BigIntPK, Base, TimestampMixin

if TYPE_CHECKING:
    from .catalog import Category, MenuItem


class Store(TimestampMixin, Base):
    """A restaurant location that owns its own menu."""

    __tablename__ = "store"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)

    # Relationships
    categories: Mapped[list["Category"]] = relationship(back_populates="store")
    menu_items: Mapped[list["MenuItem"]] = relationship(back_populates="store")
    user_roles: Mapped[list["UserStoreRole"]] = relationship(back_populates="store")


class User(TimestampMixin, Base):
    """A staff member. Users can hold different roles in different stores."""

    __tablename__ = "app_user"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    display_name: Mapped[Optional[str]] = mapped_column(Text)

    # Relationships
    store_roles: Mapped[list["UserStoreRole"]] = relationship(back_populates="user")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"


class UserStoreRole(TimestampMixin, Base):
    """
    Maps users to stores with a specific role.
    Read only by the database-backed store authorizer.
    """

    __tablename__ = "user_store_role"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("app_user.id"), nullable=False, index=True
    )
    store_id: Mapped[int] = mapped_column(
        ForeignKey("store.id"), nullable=False, index=True
    )
    role: Mapped[str] = mapped_column(Text, nullable=False)  # OWNER, ADMIN, STAFF

    # Relationships
    user: Mapped["User"] = relationship(back_populates="store_roles")
    store: Mapped["Store"] = relationship(back_populates="user_roles")

    __table_args__ = (
        UniqueConstraint("user_id", "store_id", name="uq_user_store_role"),
    )
