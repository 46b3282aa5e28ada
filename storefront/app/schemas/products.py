from __future__ import annotations

from decimal import Decimal

from pydantic import Field, field_validator

from storefront.app.core.config import settings
from storefront.app.schemas.base import CamelModel


def normalize_product_id(value: str) -> str:
    """Zero-pad a numeric id to the catalog's fixed width ("7" -> "007")."""
    value = value.strip()
    if value.isdigit():
        return value.zfill(settings.PRODUCT_ID_WIDTH)
    return value


def product_id_from_wire(v: object) -> object:
    if isinstance(v, int):
        v = str(v)
    if isinstance(v, str):
        return normalize_product_id(v)
    return v


class ProductRecord(CamelModel):
    product_id: str
    name: str
    variant: str = Field(default_factory=lambda: settings.DEFAULT_VARIANT)
    stock: int = Field(ge=0)
    buying_price: Decimal = Field(ge=0)
    selling_price: Decimal = Field(ge=0)
    category_id: str | None = None

    @field_validator("variant", mode="before")
    @classmethod
    def blank_variant_is_default(cls, v: object) -> object:
        if v is None or (isinstance(v, str) and not v.strip()):
            return settings.DEFAULT_VARIANT
        return v

    @field_validator("buying_price", "selling_price", mode="before")
    @classmethod
    def price_from_wire(cls, v: object) -> object:
        # JSON numbers arrive as float; go through str to keep 150.1 exact
        if isinstance(v, float):
            return str(v)
        return v

    @field_validator("product_id", mode="before")
    @classmethod
    def padded_product_id(cls, v: object) -> object:
        return product_id_from_wire(v)

    @field_validator("category_id", mode="before")
    @classmethod
    def category_id_as_string(cls, v: object) -> object:
        if isinstance(v, int):
            return str(v)
        return v


class NextProductIdOut(CamelModel):
    next_id: str
