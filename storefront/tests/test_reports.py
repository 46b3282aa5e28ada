"""Tests for low-stock and day-end report helpers."""

from __future__ import annotations

from decimal import Decimal

from storefront.app.models.product import Product
from storefront.app.schemas.summary import DaySummaryOut
from storefront.app.services.reports import day_end_summary, low_stock
from storefront.tests.conftest import make_product


class TestLowStock:
    def test_default_threshold(self, catalog: list[Product]) -> None:
        found = low_stock(catalog)
        assert [p.unique_key() for p in found] == [
            "002_Large", "001_Standard", "002_Small",
        ]

    def test_threshold_is_inclusive(self) -> None:
        products = [make_product(stock=10), make_product(productId="002", stock=11)]
        assert [p.product_id for p in low_stock(products)] == ["001"]

    def test_custom_threshold_and_category(self, catalog: list[Product]) -> None:
        assert low_stock(catalog, threshold=4) == [catalog[2]]
        assert low_stock(catalog, threshold=100, category_id="C02") == [catalog[3]]


class TestDayEndSummary:
    def test_projection(self) -> None:
        day = DaySummaryOut.model_validate({
            "date": "2026-10-19",
            "totalSales": 1650,
            "totalProfit": 550,
            "items": [
                {"productId": "015", "name": "Biscuits", "soldQuantity": 2,
                 "totalIncome": 220.5, "profit": 49.5},
                {"productId": "001", "name": "Soap", "soldQuantity": 3,
                 "totalIncome": 450, "profit": 150},
            ],
        })
        summary = day_end_summary(day)
        assert summary["date"] == "2026-10-19"
        assert [i.product_id for i in summary["items"]] == ["001", "015"]
        assert summary["total_income"] == Decimal("1650")
        assert summary["total_profit"] == Decimal("550")
        assert summary["bills"] == []
