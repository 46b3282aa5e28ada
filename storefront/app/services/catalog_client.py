"""HTTP client for the Catalog & Billing Service."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from storefront.app.core.config import settings
from storefront.app.models.product import Product
from storefront.app.schemas.bills import BillOut, BillRequest
from storefront.app.schemas.products import NextProductIdOut
from storefront.app.schemas.summary import (
    DailySummaryOut,
    DaySummaryOut,
    MonthlySummaryOut,
    MonthlySummaryRef,
)

logger = logging.getLogger(__name__)


class CatalogServiceError(Exception):
    """Structured error from the service (4xx responses)."""

    def __init__(
        self,
        status_code: int,
        message: str,
        payload: Any | None = None,
    ) -> None:
        self.status_code = status_code
        self.payload = payload
        super().__init__(message)


class CommittedBillError(Exception):
    """The service accepted the bill but its response could not be read.

    The bill exists server-side; *payload* is the raw body as received.
    """

    def __init__(self, payload: Any, cause: Exception) -> None:
        self.payload = payload
        self.cause = cause
        super().__init__(f"Bill was created but the response is unreadable: {cause}")


class CatalogClient:
    """Async client for products, bills, day and summary endpoints.

    *transport* lets callers (and tests) swap the network layer, e.g. for an
    ``httpx.MockTransport``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS
        self.transport = transport

    @staticmethod
    def _handle_response(resp: httpx.Response) -> Any:
        """Return the decoded body; raise on 4xx/5xx.

        5xx go through ``raise_for_status``. 4xx become
        :class:`CatalogServiceError` carrying the body's ``message`` when the
        service sent one.
        """
        if resp.status_code >= 500:
            resp.raise_for_status()

        try:
            data = resp.json() if resp.content else None
        except ValueError:
            if resp.status_code >= 400:
                raise CatalogServiceError(
                    status_code=resp.status_code,
                    message=resp.text or f"HTTP {resp.status_code}",
                )
            raise CatalogServiceError(
                status_code=resp.status_code,
                message=f"Non-JSON response: {resp.text[:200]}",
            )

        if resp.status_code >= 400:
            message = None
            if isinstance(data, dict):
                message = data.get("message") or data.get("error")
            raise CatalogServiceError(
                status_code=resp.status_code,
                message=message or f"HTTP {resp.status_code}",
                payload=data,
            )
        return data

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        json: Any | None = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            resp = await client.request(
                method,
                url,
                params=params,
                json=json,
                headers={"Accept": "application/json"},
            )
            return self._handle_response(resp)

    # ── Products ─────────────────────────────────────────────────────────

    async def list_products(self, category_id: str | None = None) -> list[Product]:
        params = {"categoryId": category_id} if category_id else None
        data = await self._request("GET", "/products", params=params)
        return [Product.model_validate(p) for p in data]

    async def get_product(self, product_id: str) -> list[Product]:
        """All records for *product_id*; the service answers with one record
        or an array of variants, both normalised to a list."""
        data = await self._request("GET", f"/products/{product_id}")
        if isinstance(data, list):
            return [Product.model_validate(p) for p in data]
        return [Product.model_validate(data)]

    async def get_product_variant(self, product_id: str, variant: str) -> Product:
        data = await self._request(
            "GET", f"/products/{product_id}", params={"variant": variant}
        )
        if isinstance(data, list):
            data = data[0]
        return Product.model_validate(data)

    async def get_product_variants(self, product_id: str) -> list[Product]:
        data = await self._request("GET", f"/products/{product_id}/variants")
        return [Product.model_validate(p) for p in data]

    async def search_products(self, query: str) -> list[Product]:
        data = await self._request("GET", "/products/search", params={"query": query})
        return [Product.model_validate(p) for p in data]

    async def get_next_product_id(self) -> str:
        data = await self._request("GET", "/products/next-id")
        return NextProductIdOut.model_validate(data).next_id

    # ── Bills ────────────────────────────────────────────────────────────

    async def create_bill(self, bill: BillRequest) -> BillOut:
        try:
            data = await self._request("POST", "/bills", json=bill.to_payload())
        except CatalogServiceError as exc:
            # 2xx with a non-JSON body
            if exc.status_code < 400:
                raise CommittedBillError(exc.payload, exc) from exc
            raise
        try:
            created = BillOut.model_validate(data)
        except ValidationError as exc:
            logger.error("Bill accepted with unreadable response: %s", exc)
            raise CommittedBillError(data, exc) from exc
        logger.info("Bill %s created: total %s", created.bill_id, created.total_amount)
        return created

    async def get_today_bills(self) -> list[BillOut]:
        data = await self._request("GET", "/bills/today")
        return [BillOut.model_validate(b) for b in data]

    async def get_bills_by_date(self, date: str) -> list[BillOut]:
        data = await self._request("GET", f"/bills/date/{date}")
        return [BillOut.model_validate(b) for b in data]

    async def get_bill(self, bill_id: str) -> BillOut:
        data = await self._request("GET", f"/bills/{bill_id}")
        return BillOut.model_validate(data)

    async def get_past_30_days_bills(self) -> list[BillOut]:
        data = await self._request("GET", "/bills/history/past30days")
        return [BillOut.model_validate(b) for b in data]

    async def delete_bill(self, bill_id: str) -> None:
        await self._request("DELETE", f"/bills/{bill_id}")
        logger.info("Bill %s deleted", bill_id)

    # ── Day ──────────────────────────────────────────────────────────────

    async def get_current_day(self) -> DaySummaryOut:
        data = await self._request("GET", "/day/current")
        return DaySummaryOut.model_validate(data)

    async def end_day(self) -> Any:
        return await self._request("POST", "/day/end")

    # ── Summaries ────────────────────────────────────────────────────────

    async def get_daily_summary(self, date: str) -> DailySummaryOut:
        data = await self._request("GET", f"/summary/daily/{date}")
        return DailySummaryOut.model_validate(data)

    async def create_monthly_summary(self) -> Any:
        return await self._request("POST", "/summary/monthly/create")

    async def get_monthly_summary(self, month: str) -> MonthlySummaryOut:
        data = await self._request("GET", f"/summary/monthly/{month}")
        return MonthlySummaryOut.model_validate(data)

    async def list_monthly_summaries(self) -> list[MonthlySummaryRef]:
        data = await self._request("GET", "/summary/monthly")
        return [MonthlySummaryRef.model_validate(m) for m in data]

    async def get_available_dates(self) -> list[str]:
        data = await self._request("GET", "/summary/available-dates")
        return list(data)
