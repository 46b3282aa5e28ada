"""Errors raised by the cart, billing and product-index core.

Every error carries a ``message_key`` into the message catalogue so the UI can
show the operator a readable message without parsing exception text.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from storefront.app.core.messages import render

if TYPE_CHECKING:
    from storefront.app.models.product import Product


class PosError(ValueError):
    message_key = "pos_error"

    def __init__(self, **params: object) -> None:
        self.params = params
        super().__init__(self.operator_message())

    def operator_message(self) -> str:
        return render(self.message_key, **self.params)


class InsufficientStockError(PosError):
    message_key = "insufficient_stock"

    def __init__(self, product: Product, requested: int) -> None:
        self.product = product
        self.requested = requested
        super().__init__(
            product=product.display_name(),
            available=product.stock,
            requested=requested,
        )


class InvalidPriceError(PosError):
    message_key = "invalid_price"

    def __init__(self, product: Product, price: Decimal) -> None:
        self.product = product
        self.price = price
        super().__init__(
            buying_price=product.format_price(product.buying_price),
            price=price,
        )


class EmptyCartError(PosError):
    message_key = "empty_cart"


class NotFoundError(PosError):
    message_key = "product_not_found"

    def __init__(self, product_id: str) -> None:
        self.product_id = product_id
        super().__init__(product_id=product_id)


class LineNotFoundError(NotFoundError):
    message_key = "line_not_found"

    def __init__(self, key: str) -> None:
        self.key = key
        self.product_id = key
        PosError.__init__(self, key=key)


class DuplicateLineError(PosError):
    """A cart was assembled with two lines for the same unique key."""

    message_key = "duplicate_line"

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(key=key)


class CartBusyError(PosError):
    message_key = "cart_busy"
