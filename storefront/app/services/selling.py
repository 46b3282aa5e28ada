"""Selling screen control flow, without the screen.

One :class:`SellingSession` drives one till: it owns the active cart and the
product index, and it is the only place that talks to the service while a
sale is in progress. Everything runs on one event loop; the only suspension
points are the service calls.
"""

from __future__ import annotations

import asyncio
import logging
from decimal import Decimal
from typing import Awaitable, Callable

import httpx

from storefront.app.core.config import settings
from storefront.app.core.errors import CartBusyError
from storefront.app.models.cart import Cart
from storefront.app.models.product import Product
from storefront.app.schemas.bills import BillOut
from storefront.app.schemas.summary import DaySummaryOut
from storefront.app.services.billing import build_bill_request, compute_change
from storefront.app.services.catalog_client import (
    CatalogClient,
    CatalogServiceError,
    CommittedBillError,
)
from storefront.app.services.product_index import (
    ProductIndex,
    looks_like_product_id,
    normalize_product_id,
)

logger = logging.getLogger(__name__)


class SellingSession:
    def __init__(
        self,
        client: CatalogClient,
        index: ProductIndex | None = None,
        debounce_ms: int | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.client = client
        self.index = index or ProductIndex.empty()
        self.cart = Cart()
        self.suggestions: list[Product] = []
        self.day: DaySummaryOut | None = None
        self.busy = False
        self.debounce_ms = settings.SEARCH_DEBOUNCE_MS if debounce_ms is None else debounce_ms
        self._sleep = sleep
        self._search_seq = 0

    # ── Catalog ──────────────────────────────────────────────────────────

    async def load_catalog(self) -> ProductIndex:
        """Fetch every product and swap in a freshly built index."""
        products = await self.client.list_products()
        self.index = ProductIndex.build(products)
        return self.index

    async def refresh_day(self) -> DaySummaryOut:
        self.day = await self.client.get_current_day()
        return self.day

    # ── Cart edits ───────────────────────────────────────────────────────

    def _ensure_idle(self) -> None:
        if self.busy:
            raise CartBusyError()

    def add_to_cart(self, product: Product, quantity: int = 1) -> str:
        self._ensure_idle()
        key = self.cart.add_product(product, quantity)
        # an in-flight search must not refill the list just cleared
        self._search_seq += 1
        self.suggestions = []
        return key

    def add_by_product_id(self, value: str) -> str | list[Product]:
        """Handle Enter on a typed product id.

        A single variant goes straight into the cart and its line key is
        returned. Several variants become the suggestion list and are
        returned for the operator to pick from.
        """
        self._ensure_idle()
        variants = self.index.resolve_by_id(
            normalize_product_id(value), prefer_first_variant=False
        )
        if len(variants) == 1:
            return self.add_to_cart(variants[0])
        self.suggestions = variants
        return variants

    def update_quantity(self, key: str, quantity: int) -> None:
        self._ensure_idle()
        self.cart.update_quantity(key, quantity)

    def update_price(self, key: str, price: Decimal | float | int | str) -> None:
        self._ensure_idle()
        self.cart.update_price(key, price)

    def remove_line(self, key: str) -> None:
        self._ensure_idle()
        self.cart.remove_line(key)

    def clear(self) -> None:
        self._ensure_idle()
        self.cart.clear()

    def change_for(self, cash: Decimal | float | int | str) -> Decimal:
        """Live change display for the cash box."""
        return compute_change(self.cart.total(), cash)

    # ── Search ───────────────────────────────────────────────────────────

    async def search(self, query: str) -> list[Product] | None:
        """Debounced search-as-you-type.

        Returns the new suggestions, or None when a newer query was issued
        before this one finished; a superseded result never reaches
        ``self.suggestions``.
        """
        self._search_seq += 1
        seq = self._search_seq

        if not query.strip():
            self.suggestions = []
            return []

        await self._sleep(self.debounce_ms / 1000)
        if seq != self._search_seq:
            return None

        try:
            if looks_like_product_id(query):
                results = await self.client.get_product(normalize_product_id(query))
            else:
                results = await self.client.search_products(query.strip())
        except (CatalogServiceError, httpx.HTTPError) as exc:
            logger.warning("Search for %r failed: %s", query, exc)
            results = []

        if seq != self._search_seq:
            logger.debug("Discarding stale search results for %r", query)
            return None
        self.suggestions = results
        return results

    # ── Checkout ─────────────────────────────────────────────────────────

    async def checkout(self, cash: Decimal | float | int | str) -> BillOut:
        """Submit the cart as a bill and start a new sale.

        The cart is locked while the request is outstanding. Any failure,
        including a timeout or cancellation, puts the cart back exactly as
        it was and re-raises. A bill the service accepted but answered
        unreadably still ends the sale: the cart is cleared before
        :class:`CommittedBillError` propagates, so it cannot be billed twice.
        """
        self._ensure_idle()
        request = build_bill_request(self.cart, cash)
        snapshot = self.cart.snapshot()
        self.busy = True
        try:
            bill = await self.client.create_bill(request)
        except CommittedBillError:
            self.cart.clear()
            self.suggestions = []
            raise
        except BaseException as exc:
            logger.warning("Bill submission failed, cart kept: %r", exc)
            self.cart.restore(snapshot)
            raise
        finally:
            self.busy = False

        self.cart.clear()
        self.suggestions = []
        try:
            await self.refresh_day()
        except (CatalogServiceError, httpx.HTTPError) as exc:
            logger.warning("Day totals not refreshed after bill %s: %s", bill.bill_id, exc)
        return bill
