from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from pydantic import ConfigDict

from storefront.app.core.config import settings
from storefront.app.core.money import CENT, quantize_money, to_decimal
from storefront.app.schemas.products import ProductRecord


class Product(ProductRecord):
    """One catalog entry: a product id plus one of its variants.

    Instances are immutable for the life of a selling session. A price change
    in the catalog reaches the client only through a catalog re-fetch, which
    builds new instances.
    """

    model_config = ConfigDict(frozen=True)

    def unique_key(self) -> str:
        return f"{self.product_id}_{self.variant}"

    def display_name(self) -> str:
        if self.variant == settings.DEFAULT_VARIANT:
            return self.name
        return f"{self.name} ({self.variant})"

    def has_stock(self, quantity: int = 1) -> bool:
        return self.stock >= quantity

    def is_valid_price(self, price: Decimal | float | int | str) -> bool:
        return to_decimal(price) >= self.buying_price

    @property
    def profit_margin(self) -> Decimal:
        return self.selling_price - self.buying_price

    @property
    def profit_percentage(self) -> Decimal | None:
        if self.buying_price == 0:
            return None
        pct = self.profit_margin / self.buying_price * Decimal("100")
        return pct.quantize(CENT, rounding=ROUND_HALF_UP)

    @staticmethod
    def format_price(price: Decimal | float | int | str) -> str:
        return f"{settings.CURRENCY_PREFIX} {quantize_money(price)}"

    def to_record(self) -> dict:
        """camelCase dict in the shape the service returns."""
        return self.model_dump(mode="json", by_alias=True)
