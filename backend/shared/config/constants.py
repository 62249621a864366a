"""
Centralized constants for the backend application.

Usage:
    from shared.config.constants import Roles, MENU_MANAGEMENT_ROLES

    if role in MENU_MANAGEMENT_ROLES:
        ...
"""

from typing import Final


# =============================================================================
# Store Roles
# =============================================================================


class Roles:
    """Store role constants."""

    OWNER: Final[str] = "OWNER"
    ADMIN: Final[str] = "ADMIN"
    STAFF: Final[str] = "STAFF"

    ALL: Final[list[str]] = [OWNER, ADMIN, STAFF]


# Role groups for common access patterns
MENU_MANAGEMENT_ROLES: Final[frozenset[str]] = frozenset({Roles.OWNER, Roles.ADMIN})


# =============================================================================
# Menu Defaults
# =============================================================================


class MenuDefaults:
    """Default values filled in when a customization entry omits them."""

    REQUIRED: Final[bool] = False
    MIN_SELECTABLE_REQUIRED: Final[int] = 1
    MIN_SELECTABLE_OPTIONAL: Final[int] = 0
    MAX_SELECTABLE: Final[int] = 1

    # Sort positions start at 0; an empty scope behaves as if its max were -1
    EMPTY_SCOPE_SORT_ORDER: Final[int] = -1


class Limits:
    """Field length limits shared by schemas and models."""

    NAME_MAX_LENGTH: Final[int] = 120
    DESCRIPTION_MAX_LENGTH: Final[int] = 2000
    IMAGE_URL_MAX_LENGTH: Final[int] = 2048
