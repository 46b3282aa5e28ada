"""In-memory cart for the sale currently being rung up.

The cart merges by product unique key: there is at most one line per
``productId_variant``, and adding a product already in the cart raises the
quantity of its line. A price override therefore applies to every unit of
that product in the bill.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Iterator

from storefront.app.core.errors import (
    DuplicateLineError,
    InsufficientStockError,
    InvalidPriceError,
    LineNotFoundError,
)
from storefront.app.core.money import ZERO, quantize_money, to_decimal
from storefront.app.models.product import Product


class CartLine:
    """A quantity of one product at an effective price."""

    __slots__ = ("product", "quantity", "edited_price")

    def __init__(
        self,
        product: Product,
        quantity: int = 1,
        edited_price: Decimal | None = None,
    ) -> None:
        if quantity <= 0:
            raise ValueError("Quantity must be greater than zero")
        if quantity > product.stock:
            raise InsufficientStockError(product, quantity)
        if edited_price is not None and not product.is_valid_price(edited_price):
            raise InvalidPriceError(product, to_decimal(edited_price))
        self.product = product
        self.quantity = quantity
        self.edited_price = None if edited_price is None else to_decimal(edited_price)

    def __repr__(self) -> str:
        return (
            f"CartLine({self.key!r}, quantity={self.quantity}, "
            f"edited_price={self.edited_price})"
        )

    @property
    def key(self) -> str:
        return self.product.unique_key()

    @property
    def price_edited(self) -> bool:
        return self.edited_price is not None

    def set_quantity(self, quantity: int) -> bool:
        """Set the quantity, returning False when *quantity* is not positive.

        Non-positive input leaves the line as it was; deleting a line is the
        cart's job.
        """
        if quantity <= 0:
            return False
        if quantity > self.product.stock:
            raise InsufficientStockError(self.product, quantity)
        self.quantity = quantity
        return True

    def increment(self, amount: int = 1) -> None:
        if not self.set_quantity(self.quantity + amount):
            raise ValueError("Quantity must be greater than zero")

    def set_price(self, price: Decimal | float | int | str) -> None:
        price = to_decimal(price)
        if not self.product.is_valid_price(price):
            raise InvalidPriceError(self.product, price)
        self.edited_price = price

    def clear_price(self) -> None:
        self.edited_price = None

    def effective_price(self) -> Decimal:
        if self.edited_price is not None:
            return self.edited_price
        return self.product.selling_price

    def line_total(self) -> Decimal:
        return self.effective_price() * self.quantity

    def line_profit(self) -> Decimal:
        return (self.effective_price() - self.product.buying_price) * self.quantity

    def copy(self) -> CartLine:
        clone = CartLine.__new__(CartLine)
        clone.product = self.product
        clone.quantity = self.quantity
        clone.edited_price = self.edited_price
        return clone

    def to_display(self) -> dict:
        return {
            "unique_key": self.key,
            "product_id": self.product.product_id,
            "name": self.product.display_name(),
            "variant": self.product.variant,
            "quantity": self.quantity,
            "price": self.effective_price(),
            "original_price": self.product.selling_price,
            "price_edited": self.price_edited,
            "total": quantize_money(self.line_total()),
            "stock": self.product.stock,
            "buying_price": self.product.buying_price,
            "profit": quantize_money(self.line_profit()),
        }


class Cart:
    """Ordered lines keyed by product unique key."""

    def __init__(self, lines: Iterable[CartLine] = ()) -> None:
        self._lines: dict[str, CartLine] = {}
        for line in lines:
            if line.key in self._lines:
                raise DuplicateLineError(line.key)
            self._lines[line.key] = line

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, key: object) -> bool:
        return key in self._lines

    def __iter__(self) -> Iterator[CartLine]:
        return iter(self._lines.values())

    def __repr__(self) -> str:
        return f"Cart({list(self._lines.values())!r})"

    # ── Queries ──────────────────────────────────────────────────────────

    def lines(self) -> list[CartLine]:
        return list(self._lines.values())

    def get(self, key: str) -> CartLine:
        line = self._lines.get(key)
        if line is None:
            raise LineNotFoundError(key)
        return line

    def is_empty(self) -> bool:
        return not self._lines

    def total(self) -> Decimal:
        return sum((line.line_total() for line in self._lines.values()), ZERO)

    def profit(self) -> Decimal:
        return sum((line.line_profit() for line in self._lines.values()), ZERO)

    def to_display(self) -> list[dict]:
        return [line.to_display() for line in self._lines.values()]

    # ── Mutations ────────────────────────────────────────────────────────

    def add_product(self, product: Product, quantity: int = 1) -> str:
        """Add *quantity* units of *product*; return the line key.

        An existing line keeps its position and its product instance. When
        the merged quantity would exceed stock the line is left untouched.
        """
        if quantity <= 0:
            raise ValueError("Quantity must be greater than zero")
        key = product.unique_key()
        line = self._lines.get(key)
        if line is not None:
            line.increment(quantity)
        else:
            self._lines[key] = CartLine(product, quantity)
        return key

    def update_quantity(self, key: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        line = self.get(key)
        if quantity <= 0:
            self.remove_line(key)
            return
        line.set_quantity(quantity)

    def update_price(self, key: str, price: Decimal | float | int | str) -> None:
        self.get(key).set_price(price)

    def remove_line(self, key: str) -> None:
        self._lines.pop(key, None)

    def clear(self) -> None:
        self._lines.clear()

    # ── Snapshots ────────────────────────────────────────────────────────

    def snapshot(self) -> Cart:
        return Cart(line.copy() for line in self._lines.values())

    def restore(self, snapshot: Cart) -> None:
        self._lines = {line.key: line.copy() for line in snapshot}
