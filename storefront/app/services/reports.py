from __future__ import annotations

from typing import Iterable

from storefront.app.core.config import settings
from storefront.app.models.product import Product
from storefront.app.schemas.summary import DaySummaryOut


def low_stock(
    products: Iterable[Product],
    threshold: int | None = None,
    category_id: str | None = None,
) -> list[Product]:
    """Products at or below *threshold* units, lowest stock first."""
    if threshold is None:
        threshold = settings.LOW_STOCK_THRESHOLD
    found = [
        p for p in products
        if p.stock <= threshold and (category_id is None or p.category_id == category_id)
    ]
    found.sort(key=lambda p: (p.stock, p.product_id, p.variant))
    return found


def day_end_summary(day: DaySummaryOut) -> dict:
    """Seed for the end-of-day screen, items ordered by product id."""
    return {
        "date": day.date,
        "items": sorted(day.items, key=lambda i: (i.product_id, i.variant)),
        "total_income": day.total_sales,
        "total_profit": day.total_profit,
        "bills": day.bills,
    }
