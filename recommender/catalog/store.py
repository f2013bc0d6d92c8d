from __future__ import annotations

import logging

from .models import Product, ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


class ProductNotFoundError(LookupError):
    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


def _index_of(catalog: list[Product], product_id: int) -> int:
    for i, product in enumerate(catalog):
        if product.id == product_id:
            return i
    raise ProductNotFoundError(product_id)


def _next_id(catalog: list[Product]) -> int:
    return max((p.id for p in catalog), default=0) + 1


def find_product(catalog: list[Product], product_id: int) -> Product:
    """Return the product with *product_id* or raise ``ProductNotFoundError``."""
    return catalog[_index_of(catalog, product_id)]


def create_product(
    catalog: list[Product], data: ProductCreate,
) -> tuple[list[Product], Product]:
    """Append a new product and return ``(new_catalog, product)``.

    Ids are ``max(existing) + 1`` so an id freed by a delete is never reused
    while a higher one is still present.
    """
    product = Product(id=_next_id(catalog), **data.model_dump())
    logger.info("Created product %d (%s)", product.id, product.name)
    return [*catalog, product], product


def update_product(
    catalog: list[Product], product_id: int, changes: ProductUpdate,
) -> tuple[list[Product], Product]:
    """Merge the explicitly-set fields of *changes* into one product.

    The merged product is validated, so a change that would leave it
    invalid raises ``pydantic.ValidationError`` and the catalog is untouched.
    """
    idx = _index_of(catalog, product_id)
    updates = changes.model_dump(exclude_unset=True)
    updated = Product.model_validate({**catalog[idx].model_dump(), **updates, "id": product_id})
    new_catalog = list(catalog)
    new_catalog[idx] = updated
    logger.info("Updated product %d: %s", product_id, sorted(updates))
    return new_catalog, updated


def delete_product(
    catalog: list[Product], product_id: int,
) -> tuple[list[Product], Product]:
    """Remove a product and return ``(new_catalog, removed_product)``."""
    idx = _index_of(catalog, product_id)
    removed = catalog[idx]
    logger.info("Deleted product %d (%s)", removed.id, removed.name)
    return catalog[:idx] + catalog[idx + 1:], removed
