"""Tests for operator-facing error messages."""

from __future__ import annotations

from decimal import Decimal

import pytest

from storefront.app.core.errors import (
    CartBusyError,
    DuplicateLineError,
    EmptyCartError,
    InsufficientStockError,
    InvalidPriceError,
    LineNotFoundError,
    NotFoundError,
    PosError,
)
from storefront.app.core.messages import render
from storefront.tests.conftest import make_product


class TestMessages:
    def test_insufficient_stock(self) -> None:
        err = InsufficientStockError(make_product(name="T-Shirt", variant="Large", stock=3), 4)
        assert str(err) == "Insufficient stock for T-Shirt (Large)! Available: 3, requested: 4"
        assert err.operator_message() == str(err)

    def test_invalid_price(self) -> None:
        err = InvalidPriceError(make_product(buyingPrice=100), Decimal("90"))
        assert str(err) == "Price cannot be less than buying price (Rs. 100.00)"
        assert err.price == Decimal("90")

    def test_simple_errors(self) -> None:
        assert str(EmptyCartError()) == "Cart is empty!"
        assert str(CartBusyError()) == "A bill is being saved, please wait"
        assert str(NotFoundError("404")) == "Product ID 404 not found"
        assert str(LineNotFoundError("001_Standard")) == "Item 001_Standard is not in the cart"

    def test_key_placeholder_in_line_errors(self) -> None:
        err = LineNotFoundError("002_Small")
        assert err.key == "002_Small"
        assert err.params == {"key": "002_Small"}
        assert err.operator_message() == "Item 002_Small is not in the cart"
        assert str(DuplicateLineError("001_Standard")) == (
            "Item 001_Standard appears more than once in the cart"
        )

    @pytest.mark.parametrize("error", [
        EmptyCartError(), CartBusyError(), NotFoundError("1"), LineNotFoundError("k"),
    ])
    def test_errors_are_value_errors(self, error: PosError) -> None:
        assert isinstance(error, ValueError)


class TestRender:
    def test_unknown_key_returns_key(self) -> None:
        assert render("no_such_key") == "no_such_key"

    def test_missing_placeholder_keeps_template(self) -> None:
        assert render("product_not_found") == "Product ID {product_id} not found"

    def test_interpolation(self) -> None:
        assert render("product_not_found", product_id="007") == "Product ID 007 not found"

    def test_key_is_a_placeholder_name(self) -> None:
        assert render("line_not_found", key="015_Standard") == "Item 015_Standard is not in the cart"
