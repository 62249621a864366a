"""
Pydantic schemas for the menu API.

Input models only check shape (types, lengths, numeric bounds). Cross-field and
existence rules are enforced by the services.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shared.config.constants import Limits
from shared.utils.validators import validate_image_reference


# =============================================================================
# Common
# =============================================================================


class ErrorResponse(BaseModel):
    """Error body returned by HTTPException handlers."""

    detail: str


class DeletedOutput(BaseModel):
    """Identity of a deleted (or already absent) entity."""

    id: int


# =============================================================================
# Menu Inputs
# =============================================================================


class CategoryRef(BaseModel):
    """
    Category reference for a menu item.

    With `id`: rename that category (must belong to the store).
    Without `id`: find the store's category with this name, or create it.
    """

    id: int | None = Field(default=None, ge=1)
    name: str | None = Field(default=None, max_length=Limits.NAME_MAX_LENGTH)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        if not value:
            raise ValueError("Category name must not be blank")
        return value


class CustomizationOptionInput(BaseModel):
    """One option inside a customization group. Omit `id` to create it."""

    id: int | None = Field(default=None, ge=1)
    name: str = Field(default="", max_length=Limits.NAME_MAX_LENGTH)
    additional_price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)


class CustomizationGroupInput(BaseModel):
    """A customization group (e.g. Size, Spice Level). Omit `id` to create it."""

    id: int | None = Field(default=None, ge=1)
    name: str = Field(default="", max_length=Limits.NAME_MAX_LENGTH)
    required: bool | None = None
    min_selectable: int | None = Field(default=None, ge=0)
    max_selectable: int | None = Field(default=None, ge=1)
    options: list[CustomizationOptionInput] = Field(default_factory=list)


class MenuItemCreate(BaseModel):
    """Body for creating a menu item."""

    name: str = Field(min_length=1, max_length=Limits.NAME_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.DESCRIPTION_MAX_LENGTH)
    base_price: Decimal = Field(ge=Decimal("0.01"), max_digits=10, decimal_places=2)
    image_url: str | None = None
    category: CategoryRef | None = None
    customization_groups: list[CustomizationGroupInput] | None = None

    @field_validator("image_url")
    @classmethod
    def _check_image(cls, value: str | None) -> str | None:
        return validate_image_reference(value)


class MenuItemUpdate(BaseModel):
    """
    Body for updating a menu item.

    Only fields present in the request are written. `customization_groups` is the
    complete desired set: omit it to leave customizations untouched, send `[]`
    to delete every group.
    """

    name: str | None = Field(default=None, min_length=1, max_length=Limits.NAME_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.DESCRIPTION_MAX_LENGTH)
    base_price: Decimal | None = Field(default=None, ge=Decimal("0.01"), max_digits=10, decimal_places=2)
    image_url: str | None = None
    is_hidden: bool | None = None
    category: CategoryRef | None = None
    customization_groups: list[CustomizationGroupInput] | None = None

    @field_validator("image_url")
    @classmethod
    def _check_image(cls, value: str | None) -> str | None:
        return validate_image_reference(value)


# =============================================================================
# Menu Outputs
# =============================================================================


class CategoryOutput(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    store_id: int
    name: str
    sort_order: int


class CustomizationOptionOutput(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    group_id: int
    name: str
    additional_price: Decimal


class CustomizationGroupOutput(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    menu_item_id: int
    name: str
    required: bool
    min_selectable: int
    max_selectable: int
    customization_options: list[CustomizationOptionOutput] = Field(default_factory=list)


class MenuItemOutput(BaseModel):
    """Menu item with its category, groups (by name) and options (by name)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    store_id: int
    category_id: int
    name: str
    description: str | None = None
    base_price: Decimal
    image_url: str | None = None
    sort_order: int
    is_hidden: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
    category: CategoryOutput
    customization_groups: list[CustomizationGroupOutput] = Field(default_factory=list)
