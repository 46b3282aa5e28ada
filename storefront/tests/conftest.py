"""Shared test fixtures.

Products are built from camelCase records, the same way the client builds
them from service responses.
"""

from __future__ import annotations

from typing import Any

import pytest

from storefront.app.models.cart import Cart
from storefront.app.models.product import Product


def make_product(**overrides: Any) -> Product:
    record: dict[str, Any] = {
        "productId": "001",
        "name": "Soap",
        "variant": "Standard",
        "stock": 5,
        "buyingPrice": 100,
        "sellingPrice": 150,
        "categoryId": "C01",
    }
    record.update(overrides)
    return Product.model_validate(record)


# ─── Catalog ────────────────────────────────────────────────────────────────


@pytest.fixture()
def soap() -> Product:
    return make_product()


@pytest.fixture()
def shirt_small() -> Product:
    return make_product(
        productId="002", name="T-Shirt", variant="Small",
        stock=8, buyingPrice=800, sellingPrice=1200,
    )


@pytest.fixture()
def shirt_large() -> Product:
    return make_product(
        productId="002", name="T-Shirt", variant="Large",
        stock=3, buyingPrice=900, sellingPrice=1350,
    )


@pytest.fixture()
def biscuits() -> Product:
    return make_product(
        productId="015", name="Biscuits", stock=40,
        buyingPrice="85.50", sellingPrice="110.25", categoryId="C02",
    )


@pytest.fixture()
def catalog(
    soap: Product, shirt_small: Product, shirt_large: Product, biscuits: Product
) -> list[Product]:
    return [soap, shirt_small, shirt_large, biscuits]


@pytest.fixture()
def cart() -> Cart:
    return Cart()
