from __future__ import annotations

from decimal import Decimal

from pydantic import Field, field_serializer, field_validator, model_validator

from storefront.app.core.config import settings
from storefront.app.core.money import ZERO, quantize_money
from storefront.app.schemas.base import CamelModel
from storefront.app.schemas.products import product_id_from_wire


# ─── Request ──────────────────────────────────────────────────────────────────


class BillItemRequest(CamelModel):
    product_id: str
    variant: str
    quantity: int
    # None means "use the catalog price"; the key is left out of the payload
    price: Decimal | None = None

    @field_validator("quantity")
    @classmethod
    def quantity_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Quantity must be greater than zero")
        return v

    @field_validator("price")
    @classmethod
    def price_non_negative(cls, v: Decimal | None) -> Decimal | None:
        if v is not None and v < 0:
            raise ValueError("Price must be non-negative")
        return v

    @field_serializer("price", when_used="json")
    def price_as_number(self, v: Decimal | None) -> float | None:
        return None if v is None else float(v)


class BillRequest(CamelModel):
    items: list[BillItemRequest]
    cash: Decimal
    change: Decimal

    @field_validator("items")
    @classmethod
    def at_least_one_item(cls, v: list[BillItemRequest]) -> list[BillItemRequest]:
        if not v:
            raise ValueError("Cart must contain at least one item")
        return v

    @field_validator("cash", "change")
    @classmethod
    def amount_non_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Amount must be non-negative")
        return v

    @field_serializer("cash", "change", when_used="json")
    def amount_as_number(self, v: Decimal) -> float:
        return float(v)

    def to_payload(self) -> dict:
        """JSON body for ``POST /bills``, without unset item prices."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ─── Response ─────────────────────────────────────────────────────────────────


class BillItemOut(CamelModel):
    product_id: str
    variant: str = Field(default_factory=lambda: settings.DEFAULT_VARIANT)
    name: str
    quantity: int
    price: Decimal
    total: Decimal

    @field_validator("product_id", mode="before")
    @classmethod
    def padded_product_id(cls, v: object) -> object:
        return product_id_from_wire(v)


class BillOut(CamelModel):
    bill_id: str
    date: str
    time: str
    items: list[BillItemOut]
    total_amount: Decimal
    cash: Decimal
    change: Decimal

    @field_validator("bill_id", mode="before")
    @classmethod
    def bill_id_as_string(cls, v: object) -> object:
        if isinstance(v, int):
            return str(v)
        return v

    @model_validator(mode="after")
    def totals_agree(self) -> "BillOut":
        items_total = sum((item.total for item in self.items), ZERO)
        if quantize_money(items_total) != quantize_money(self.total_amount):
            raise ValueError(
                f"Bill total ({self.total_amount}) does not match item totals ({items_total})"
            )
        return self

    @field_serializer("total_amount", "cash", "change")
    def money_out(self, v: Decimal) -> str:
        return str(quantize_money(v))
