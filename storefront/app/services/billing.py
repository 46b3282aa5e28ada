"""Turn a finished cart into the bill request the service persists.

Pure transformation: nothing here touches the network or the cart.
"""

from __future__ import annotations

from decimal import Decimal

from storefront.app.core.errors import EmptyCartError
from storefront.app.core.money import ZERO, quantize_money, to_decimal
from storefront.app.models.cart import Cart, CartLine
from storefront.app.schemas.bills import BillItemRequest, BillRequest


def compute_change(total: Decimal, cash: Decimal | float | int | str) -> Decimal:
    """Change owed for *cash* against *total*; never negative."""
    cash = to_decimal(cash)
    if cash < total:
        return ZERO
    return quantize_money(cash - total)


def bill_item_from_line(line: CartLine) -> BillItemRequest:
    return BillItemRequest(
        product_id=line.product.product_id,
        variant=line.product.variant,
        quantity=line.quantity,
        price=line.edited_price,
    )


def build_bill_request(cart: Cart, cash_tendered: Decimal | float | int | str) -> BillRequest:
    """Package *cart* and the cash handed over into a ``POST /bills`` body.

    Items keep the cart's line order, which is the receipt order. A line
    without an operator override carries no price so the service bills it
    at the catalog price.
    """
    if cart.is_empty():
        raise EmptyCartError()
    cash = to_decimal(cash_tendered)
    if cash < 0:
        raise ValueError("Cash tendered must be non-negative")

    return BillRequest(
        items=[bill_item_from_line(line) for line in cart.lines()],
        cash=cash,
        change=compute_change(cart.total(), cash),
    )
