"""
Utilities module: Exceptions, validators, schemas.
"""

from shared.utils.exceptions import (
    AppException,
    NotFoundError,
    ForbiddenError,
    ValidationError,
    InternalError,
    DOMAIN_ERRORS,
)
from shared.utils.validators import validate_image_reference, normalize_name
from shared.utils.schemas import ErrorResponse

__all__ = [
    # exceptions
    "AppException",
    "NotFoundError",
    "ForbiddenError",
    "ValidationError",
    "InternalError",
    "DOMAIN_ERRORS",
    # validators
    "validate_image_reference",
    "normalize_name",
    # schemas
    "ErrorResponse",
]
