"""
Catalog Models: Category, MenuItem, CustomizationGroup, CustomizationOption.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    Boolean, ForeignKey, Index, Integer, Numeric, Text, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BigIntPK, Base, TimestampMixin

if TYPE_CHECKING:
    from .store import Store


class Category(TimestampMixin, Base):
    """
    Menu category within a store.
    Created on first reference by name; never deleted implicitly.
    """

    __tablename__ = "category"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    store_id: Mapped[int] = mapped_column(
        ForeignKey("store.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    # Dense display position within the store, starting at 0
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Relationships
    store: Mapped["Store"] = relationship(back_populates="categories")
    menu_items: Mapped[list["MenuItem"]] = relationship(back_populates="category")

    __table_args__ = (
        UniqueConstraint("store_id", "name", name="uq_category_store_name"),
    )


class MenuItem(TimestampMixin, Base):
    """
    Sellable item of a store's menu.
    References its category; owns its customization groups.
    """

    __tablename__ = "menu_item"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    store_id: Mapped[int] = mapped_column(
        ForeignKey("store.id"), nullable=False, index=True
    )
    category_id: Mapped[int] = mapped_column(
        ForeignKey("category.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    base_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(Text)
    # Display position within (store, category), starting at 0
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_hidden: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Relationships
    store: Mapped["Store"] = relationship(back_populates="menu_items")
    category: Mapped["Category"] = relationship(back_populates="menu_items")
    customization_groups: Mapped[list["CustomizationGroup"]] = relationship(
        back_populates="menu_item",
        cascade="all, delete-orphan",
        order_by="CustomizationGroup.name",
    )

    __table_args__ = (
        Index("ix_menu_item_store_category", "store_id", "category_id"),
    )


class CustomizationGroup(TimestampMixin, Base):
    """
    Set of options a customer picks from (e.g. Size, Spice Level).
    Exclusively owned by a menu item.
    """

    __tablename__ = "customization_group"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    menu_item_id: Mapped[int] = mapped_column(
        ForeignKey("menu_item.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    required: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    min_selectable: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    max_selectable: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    # Relationships
    menu_item: Mapped["MenuItem"] = relationship(back_populates="customization_groups")
    customization_options: Mapped[list["CustomizationOption"]] = relationship(
        back_populates="group",
        cascade="all, delete-orphan",
        order_by="CustomizationOption.name",
    )


class CustomizationOption(TimestampMixin, Base):
    """A single choice within a customization group, with its surcharge."""

    __tablename__ = "customization_option"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    group_id: Mapped[int] = mapped_column(
        ForeignKey("customization_group.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    additional_price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), default=Decimal("0"), nullable=False
    )

    # Relationships
    group: Mapped["CustomizationGroup"] = relationship(back_populates="customization_options")
