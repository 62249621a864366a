"""
Customization Synchronizer.

Reconciles a menu item's customization groups, and the options inside each
group, against a complete desired set. Both levels run the same
reconcile_children pass with their own handler.

Policy:
- A new group is only created when it has at least one named option.
- An existing group may be updated down to zero options.
- Entries without a name are skipped and logged, never fatal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Sequence

from sqlalchemy.orm import Session

from menu_api.models import CustomizationGroup
from menu_api.repositories import (
    CustomizationGroupRepository,
    CustomizationOptionRepository,
)
from shared.config.constants import MenuDefaults
from shared.config.logging import get_logger
from shared.utils.schemas import CustomizationGroupInput, CustomizationOptionInput
from shared.utils.validators import normalize_name

from .reconcile import ChildHandler, SyncResult, reconcile_children

logger = get_logger(__name__)


# Current groups of a menu item: group ID -> IDs of its options
ExistingGroups = Mapping[int, Sequence[int]]


@dataclass
class CustomizationSyncResult:
    groups: SyncResult = field(default_factory=SyncResult)
    options: SyncResult = field(default_factory=SyncResult)


# =============================================================================
# Defaults
# =============================================================================


def group_fields(entry: CustomizationGroupInput) -> dict[str, Any]:
    """Scalar group columns with defaults filled in."""
    required = entry.required if entry.required is not None else MenuDefaults.REQUIRED

    if entry.min_selectable is not None:
        min_selectable = entry.min_selectable
    elif required:
        min_selectable = MenuDefaults.MIN_SELECTABLE_REQUIRED
    else:
        min_selectable = MenuDefaults.MIN_SELECTABLE_OPTIONAL

    if entry.max_selectable is not None:
        max_selectable = entry.max_selectable
    else:
        max_selectable = MenuDefaults.MAX_SELECTABLE

    return {
        "name": normalize_name(entry.name),
        "required": required,
        "min_selectable": min_selectable,
        "max_selectable": max_selectable,
    }


def option_fields(entry: CustomizationOptionInput) -> dict[str, Any]:
    """Scalar option columns with defaults filled in."""
    price = entry.additional_price if entry.additional_price is not None else Decimal("0")
    return {
        "name": normalize_name(entry.name),
        "additional_price": price,
    }


def existing_group_snapshot(groups: Iterable[CustomizationGroup]) -> dict[int, list[int]]:
    """Capture group and option IDs from loaded ORM groups before any write."""
    return {
        group.id: [option.id for option in group.customization_options]
        for group in groups
    }


# =============================================================================
# Handlers
# =============================================================================


class OptionHandler(ChildHandler[CustomizationOptionInput]):
    """Writes options of one group."""

    label = "customization option"

    def __init__(self, tx: Session, group_id: int):
        self._repo = CustomizationOptionRepository(tx)
        self._group_id = group_id

    def delete(self, child_ids: list[int]) -> None:
        self._repo.delete_by_ids(child_ids)

    def update(self, child_id: int, entry: CustomizationOptionInput) -> None:
        logger.debug("Updating option", option_id=child_id, group_id=self._group_id)
        self._repo.update_by_id(child_id, **option_fields(entry))

    def create(self, entry: CustomizationOptionInput) -> bool:
        self._repo.create(group_id=self._group_id, **option_fields(entry))
        return True


class GroupHandler(ChildHandler[CustomizationGroupInput]):
    """Writes groups of one menu item and recurses into their options."""

    label = "customization group"

    def __init__(self, tx: Session, menu_item_id: int, existing: ExistingGroups):
        self._tx = tx
        self._repo = CustomizationGroupRepository(tx)
        self._option_repo = CustomizationOptionRepository(tx)
        self._menu_item_id = menu_item_id
        self._existing = existing
        self.options = SyncResult()

    def delete(self, child_ids: list[int]) -> None:
        # Options of deleted groups go with them
        self._repo.delete_by_ids(child_ids)

    def update(self, child_id: int, entry: CustomizationGroupInput) -> None:
        logger.debug(
            "Updating group",
            group_id=child_id,
            menu_item_id=self._menu_item_id,
        )
        self._repo.update_by_id(child_id, **group_fields(entry))
        self.options += reconcile_children(
            self._existing.get(child_id, ()),
            entry.options or [],
            OptionHandler(self._tx, child_id),
        )

    def create(self, entry: CustomizationGroupInput) -> bool:
        options = [o for o in (entry.options or []) if o is not None]
        named = [o for o in options if normalize_name(o.name)]
        if not named:
            logger.warning(
                "Skipping new group without options",
                group_name=entry.name,
                menu_item_id=self._menu_item_id,
            )
            return False

        group = self._repo.create(menu_item_id=self._menu_item_id, **group_fields(entry))
        self._option_repo.create_many(
            {"group_id": group.id, **option_fields(option)} for option in named
        )

        skipped = len(options) - len(named)
        if skipped:
            logger.warning(
                "Skipped options with missing name",
                group_id=group.id,
                count=skipped,
            )
        self.options.created += len(named)
        self.options.skipped += skipped
        return True


# =============================================================================
# Entry Points
# =============================================================================


def sync_customization_groups(
    tx: Session,
    menu_item_id: int,
    existing_groups: ExistingGroups,
    desired_groups: Optional[Iterable[Optional[CustomizationGroupInput]]],
) -> CustomizationSyncResult:
    """
    Replace a menu item's groups (and their options) with the desired set.

    Args:
        tx: Transaction handle.
        menu_item_id: Owning menu item.
        existing_groups: Current group IDs mapped to their option IDs.
        desired_groups: Complete desired set; None behaves as empty.

    Returns:
        Counts per level.
    """
    handler = GroupHandler(tx, menu_item_id, existing_groups)
    groups = reconcile_children(existing_groups.keys(), desired_groups or [], handler)
    result = CustomizationSyncResult(groups=groups, options=handler.options)

    logger.debug(
        "Customizations synced",
        menu_item_id=menu_item_id,
        groups=groups,
        options=handler.options,
    )
    return result


def create_customization_groups(
    tx: Session,
    menu_item_id: int,
    desired_groups: Iterable[Optional[CustomizationGroupInput]],
) -> CustomizationSyncResult:
    """Create groups for a new menu item (nothing exists yet, so nothing is deleted)."""
    return sync_customization_groups(tx, menu_item_id, {}, desired_groups)
