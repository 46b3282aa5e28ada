from __future__ import annotations

from decimal import Decimal

from pydantic import Field, field_validator

from storefront.app.core.config import settings
from storefront.app.schemas.base import CamelModel
from storefront.app.schemas.bills import BillOut
from storefront.app.schemas.products import product_id_from_wire


class SummaryItemOut(CamelModel):
    product_id: str
    name: str
    variant: str = Field(default_factory=lambda: settings.DEFAULT_VARIANT)
    sold_quantity: int
    total_income: Decimal
    profit: Decimal

    @field_validator("product_id", mode="before")
    @classmethod
    def padded_product_id(cls, v: object) -> object:
        return product_id_from_wire(v)


class DaySummaryOut(CamelModel):
    """Running totals for the open trading day (``GET /day/current``)."""

    date: str
    total_sales: Decimal
    total_profit: Decimal
    items: list[SummaryItemOut] = Field(default_factory=list)
    bills: list[BillOut] = Field(default_factory=list)


class DailySummaryOut(CamelModel):
    date: str
    items: list[SummaryItemOut] = Field(default_factory=list)
    total_income: Decimal
    total_profit: Decimal


class MonthlySummaryRef(CamelModel):
    month: str
    month_name: str


class MonthlySummaryOut(CamelModel):
    month: str
    month_name: str
    start_date: str
    end_date: str
    days_included: int
    items: list[SummaryItemOut] = Field(default_factory=list)
    total_income: Decimal
    total_profit: Decimal
