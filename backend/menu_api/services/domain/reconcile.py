"""
Child collection reconciliation.

Replaces a persisted child collection with a desired one in a single pass:
existing children missing from the desired set are deleted, desired entries
matching an existing child are updated in place, and the rest are created.

Desired entries are keyed with a tagged key. `ExistingKey(id)` marks an entry
that targets one of the parent's current children; every other entry gets a
fresh `NewKey(seq)`, so a creation can never be mistaken for an update, and an
ID that belongs to someone else's child is never written through.
"""

from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Collection, Generic, Iterable, Optional, Protocol, TypeVar, Union

from shared.config.logging import get_logger
from shared.utils.validators import normalize_name

logger = get_logger(__name__)


class ChildInput(Protocol):
    """Shape shared by desired child entries: optional ID and a name."""

    id: Optional[int]
    name: str


InputT = TypeVar("InputT", bound=ChildInput)


@dataclass(frozen=True)
class ExistingKey:
    id: int


@dataclass(frozen=True)
class NewKey:
    seq: int


ChildKey = Union[ExistingKey, NewKey]


@dataclass
class SyncResult:
    """Counts of what one reconciliation pass did."""

    created: int = 0
    updated: int = 0
    deleted: int = 0
    skipped: int = 0

    def __iadd__(self, other: "SyncResult") -> "SyncResult":
        self.created += other.created
        self.updated += other.updated
        self.deleted += other.deleted
        self.skipped += other.skipped
        return self


class ChildHandler(ABC, Generic[InputT]):
    """
    Entity-specific writes used by reconcile_children.

    Subclasses bind the transaction handle and the parent ID.
    """

    #: Human-readable child name for log lines
    label: str = "child"

    @abstractmethod
    def delete(self, child_ids: list[int]) -> None:
        """Delete the given children (bulk)."""

    @abstractmethod
    def update(self, child_id: int, entry: InputT) -> None:
        """Overwrite an existing child from entry."""

    @abstractmethod
    def create(self, entry: InputT) -> bool:
        """Create a child from entry. Returns False when creation is skipped."""


def key_desired(
    existing_ids: Collection[int],
    desired: Iterable[Optional[InputT]],
) -> dict[ChildKey, InputT]:
    """
    Build the diff lookup for the desired entries.

    None entries are dropped. When two entries name the same existing ID the
    later one wins.
    """
    seq = itertools.count()
    keyed: dict[ChildKey, InputT] = {}
    for entry in desired:
        if entry is None:
            continue
        if entry.id is not None and entry.id in existing_ids:
            keyed[ExistingKey(entry.id)] = entry
        else:
            keyed[NewKey(next(seq))] = entry
    return keyed


def reconcile_children(
    existing_ids: Collection[int],
    desired: Iterable[Optional[InputT]],
    handler: ChildHandler[InputT],
) -> SyncResult:
    """
    Make the parent's children match the desired set.

    Args:
        existing_ids: IDs of the parent's current children.
        desired: Complete desired collection.
        handler: Entity-specific create/update/delete.

    Returns:
        Counts for this level only.
    """
    result = SyncResult()
    keyed = key_desired(existing_ids, desired)

    to_delete = [
        child_id for child_id in existing_ids
        if ExistingKey(child_id) not in keyed
    ]
    if to_delete:
        logger.debug(
            f"Deleting {handler.label}s",
            ids=to_delete,
        )
        handler.delete(to_delete)
        result.deleted += len(to_delete)

    for key, entry in keyed.items():
        if not normalize_name(entry.name):
            logger.warning(
                f"Skipping {handler.label} with missing name",
                key=key,
            )
            result.skipped += 1
            continue

        if isinstance(key, ExistingKey):
            handler.update(key.id, entry)
            result.updated += 1
        elif handler.create(entry):
            result.created += 1
        else:
            result.skipped += 1

    return result
