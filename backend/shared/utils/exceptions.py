"""
Centralized HTTP exceptions for consistent error handling.

Domain errors (ValidationError, NotFoundError, ForbiddenError) are raised by the
services and propagate to the caller unchanged. Anything unanticipated is
replaced by InternalError at the service boundary.

Usage:
    from shared.utils.exceptions import NotFoundError, ForbiddenError, ValidationError

    raise NotFoundError("Menu item", item_id)
    raise ForbiddenError("update menu items in this store")
    raise ValidationError("Category name is required", field="category.name")
"""

from typing import Any

from fastapi import HTTPException, status

from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All custom exceptions inherit from this class
    to ensure consistent logging and response format.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=status_code, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)

    def __str__(self) -> str:
        return str(self.detail)


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(AppException):
    """
    Entity not found error (404).

    Usage:
        raise NotFoundError("Menu item", 123)
        raise NotFoundError("Category", category_id, store_id=store_id)
    """

    def __init__(
        self,
        entity: str,
        entity_id: int | str | None = None,
        *,
        detail: str | None = None,
        **log_context: Any,
    ):
        if detail is None:
            if entity_id is not None:
                detail = f"{entity} with ID {entity_id} not found"
            else:
                detail = f"{entity} not found"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            log_level="warning",
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


class CategoryNotFoundError(NotFoundError):
    """Category does not exist, or does not belong to the store in scope."""

    def __init__(self, category_id: int, store_id: int, **log_context: Any):
        super().__init__(
            "Category",
            category_id,
            detail=f"Category with ID {category_id} not found in store {store_id}",
            store_id=store_id,
            **log_context,
        )


class MenuItemNotFoundError(NotFoundError):
    """Menu item not found."""

    def __init__(self, item_id: int | None = None, **log_context: Any):
        super().__init__("Menu item", item_id, **log_context)


# =============================================================================
# 403 Forbidden Errors
# =============================================================================


class ForbiddenError(AppException):
    """
    Authorization/permission error (403).

    Usage:
        raise ForbiddenError("delete menu items")
        raise ForbiddenError("access this store", user_id=user_id)
    """

    def __init__(self, action: str | None = None, **log_context: Any):
        if action:
            detail = f"Not authorized to {action}"
        else:
            detail = "Access denied"

        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            log_level="warning",
            action=action,
            **log_context,
        )


class StoreAccessError(ForbiddenError):
    """Entity exists but belongs to a different store than the one in scope."""

    def __init__(self, entity: str, entity_id: int, store_id: int, **log_context: Any):
        super().__init__(
            f"access {entity.lower()} {entity_id} from store {store_id}",
            entity_id=entity_id,
            store_id=store_id,
            **log_context,
        )


class InsufficientRoleError(ForbiddenError):
    """User doesn't hold any of the required roles in the store."""

    def __init__(self, required_roles: list[str], **log_context: Any):
        roles_str = ", ".join(required_roles)
        super().__init__(
            f"perform this action (requires role: {roles_str})",
            required_roles=required_roles,
            **log_context,
        )


# =============================================================================
# 400 Bad Request Errors
# =============================================================================


class ValidationError(AppException):
    """
    Input validation error (400).

    Usage:
        raise ValidationError("Category name is required")
        raise ValidationError("Invalid price", field="base_price", value="-1")
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            log_level="warning",
            **log_context,
        )


# =============================================================================
# 500 Internal Server Errors
# =============================================================================


class InternalError(AppException):
    """
    Internal server error (500).

    The detail is generic on purpose; the cause is logged by whoever raises it.

    Usage:
        raise InternalError("Failed to create menu item.", store_id=1)
    """

    def __init__(self, detail: str = "Internal server error", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            log_level="error",
            **log_context,
        )


# Errors that carry a deliberate outcome for the caller and are never masked
DOMAIN_ERRORS: tuple[type[AppException], ...] = (
    ValidationError,
    NotFoundError,
    ForbiddenError,
)
