from __future__ import annotations

import logging

from pydantic import TypeAdapter

from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .models import Product

logger = logging.getLogger(__name__)

_catalog_adapter = TypeAdapter(list[Product])

_catalog: list[Product] | None = None


def load_catalog(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> list[Product]:
    """Read the catalog JSON file named by *config*.

    A missing file gives an empty catalog; a malformed one raises
    ``pydantic.ValidationError``.
    """
    path = config.catalog_path
    if not path.is_file():
        logger.warning("Catalog file %s not found, starting with an empty catalog", path)
        return []
    return _catalog_adapter.validate_json(path.read_bytes())


def get_catalog() -> list[Product]:
    """Return the in-memory catalog, loading it on first call."""
    global _catalog
    if _catalog is None:
        _catalog = load_catalog()
    return _catalog


def set_catalog(catalog: list[Product]) -> None:
    global _catalog
    _catalog = catalog


def reset_catalog() -> None:
    """Drop the in-memory catalog so the next access reloads the seed file."""
    global _catalog
    _catalog = None
