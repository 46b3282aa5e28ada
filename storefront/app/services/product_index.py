"""Client-side lookup over the full product catalog.

The selling screen fetches ``GET /products`` once and resolves typed or
selected products here instead of calling the service on every keystroke.
An index is never patched: a refreshed catalog means a new index.
"""

from __future__ import annotations

import logging
from typing import Iterable, Literal, overload

from storefront.app.core.config import settings
from storefront.app.core.errors import NotFoundError
from storefront.app.models.product import Product
from storefront.app.schemas.products import normalize_product_id

logger = logging.getLogger(__name__)


def looks_like_product_id(value: str) -> bool:
    """True when *value* is a short numeric code rather than a name search."""
    value = value.strip()
    return value.isdigit() and 1 <= len(value) <= settings.PRODUCT_ID_WIDTH


class ProductIndex:
    def __init__(
        self,
        by_unique_key: dict[str, Product],
        by_product_id: dict[str, list[Product]],
    ) -> None:
        self.by_unique_key = by_unique_key
        self.by_product_id = by_product_id

    @classmethod
    def build(cls, products: Iterable[Product]) -> ProductIndex:
        """Index *products*, keeping fetch order within each product id.

        A repeated unique key keeps the last record seen, matching a map
        built by assignment.
        """
        by_unique_key: dict[str, Product] = {}
        for product in products:
            by_unique_key[product.unique_key()] = product

        by_product_id: dict[str, list[Product]] = {}
        for product in by_unique_key.values():
            by_product_id.setdefault(product.product_id, []).append(product)

        logger.info(
            "Product index built: %d entries across %d product ids",
            len(by_unique_key),
            len(by_product_id),
        )
        return cls(by_unique_key, by_product_id)

    @classmethod
    def empty(cls) -> ProductIndex:
        return cls({}, {})

    def __len__(self) -> int:
        return len(self.by_unique_key)

    def __contains__(self, key: object) -> bool:
        return key in self.by_unique_key

    def get(self, unique_key: str) -> Product:
        product = self.by_unique_key.get(unique_key)
        if product is None:
            raise NotFoundError(unique_key)
        return product

    def variants(self, product_id: str) -> list[Product]:
        """Every variant sharing *product_id*, in catalog order."""
        product_id = normalize_product_id(product_id)
        found = self.by_product_id.get(product_id)
        if not found:
            raise NotFoundError(product_id)
        return list(found)

    @overload
    def resolve_by_id(
        self, product_id: str, prefer_first_variant: Literal[True] = ...
    ) -> Product: ...

    @overload
    def resolve_by_id(
        self, product_id: str, prefer_first_variant: Literal[False]
    ) -> list[Product]: ...

    def resolve_by_id(
        self, product_id: str, prefer_first_variant: bool = True
    ) -> Product | list[Product]:
        """Look up a product id.

        With ``prefer_first_variant`` the first listed variant is returned
        (add-directly flows); otherwise every variant is returned (suggestion
        flows).
        """
        found = self.variants(product_id)
        if prefer_first_variant:
            return found[0]
        return found
