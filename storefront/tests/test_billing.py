"""Tests for the bill request assembler."""

from __future__ import annotations

from decimal import Decimal

import pytest

from storefront.app.core.errors import EmptyCartError
from storefront.app.models.cart import Cart
from storefront.app.models.product import Product
from storefront.app.services.billing import build_bill_request, compute_change


class TestBuildBillRequest:
    def test_scenario_unedited_line(self, cart: Cart, soap: Product) -> None:
        cart.add_product(soap, 3)
        request = build_bill_request(cart, 500)
        assert request.to_payload() == {
            "items": [{"productId": "001", "variant": "Standard", "quantity": 3}],
            "cash": 500.0,
            "change": 50.0,
        }

    def test_empty_cart_raises(self, cart: Cart) -> None:
        with pytest.raises(EmptyCartError):
            build_bill_request(cart, 100)

    def test_negative_cash_raises(self, cart: Cart, soap: Product) -> None:
        cart.add_product(soap)
        with pytest.raises(ValueError):
            build_bill_request(cart, -1)

    def test_edited_price_is_sent(
        self, cart: Cart, soap: Product, shirt_large: Product
    ) -> None:
        cart.add_product(soap)
        key = cart.add_product(shirt_large, 2)
        cart.update_price(key, "1000.50")

        request = build_bill_request(cart, 3000)
        items = request.to_payload()["items"]
        assert "price" not in items[0]
        assert items[1] == {
            "productId": "002", "variant": "Large", "quantity": 2, "price": 1000.5,
        }
        assert request.items[0].price is None
        assert request.items[1].price == Decimal("1000.50")

    def test_items_follow_cart_order(
        self, cart: Cart, soap: Product, shirt_small: Product, biscuits: Product
    ) -> None:
        cart.add_product(biscuits)
        cart.add_product(soap)
        cart.add_product(shirt_small)
        cart.update_quantity("001_Standard", 2)
        request = build_bill_request(cart, 0)
        assert [i.product_id for i in request.items] == ["015", "001", "002"]

    def test_does_not_touch_cart(self, cart: Cart, soap: Product) -> None:
        cart.add_product(soap, 2)
        before = cart.to_display()
        build_bill_request(cart, 1000)
        assert cart.to_display() == before


class TestChange:
    @pytest.mark.parametrize("cash,expected", [
        (0, Decimal("0")),
        (449, Decimal("0")),
        (450, Decimal("0")),
        (500, Decimal("50")),
        ("1000.75", Decimal("550.75")),
    ])
    def test_change_never_negative(
        self, cart: Cart, soap: Product, cash: object, expected: Decimal
    ) -> None:
        cart.add_product(soap, 3)
        request = build_bill_request(cart, cash)  # type: ignore[arg-type]
        assert request.change == expected
        assert request.change == max(Decimal("0"), Decimal(str(cash)) - cart.total())
        if request.cash >= cart.total():
            assert request.change + cart.total() == request.cash

    def test_compute_change_rounds_to_cents(self) -> None:
        assert compute_change(Decimal("10.006"), Decimal("20")) == Decimal("9.99")
        assert compute_change(Decimal("10"), 5) == Decimal("0")
