from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from ..catalog.models import Product
from .models import (
    MULTIPLE_PRODUCTS,
    SINGLE_PRODUCT,
    ScoredProduct,
    SelectionCriteria,
)

logger = logging.getLogger(__name__)

SINGLE_PRODUCT_TYPES = frozenset({
    SINGLE_PRODUCT.lower(), "produto único", "produto unico",
    "single", "único", "unico",
})
MULTIPLE_PRODUCT_TYPES = frozenset({
    MULTIPLE_PRODUCTS.lower(), "múltiplos produtos", "multiplos produtos",
    "multiple", "múltiplos", "multiplos",
})

# Web form payloads use camelCase keys.
_CRITERIA_KEYS = {
    "selected_preferences": ("selected_preferences", "selectedPreferences"),
    "selected_features": ("selected_features", "selectedFeatures"),
    "recommendation_type": ("recommendation_type", "recommendationType"),
}


def _normalize(text: str) -> str:
    return text.strip().lower()


def is_single_mode(recommendation_type: Any) -> bool:
    """Return False only for a recognised "multiple products" value."""
    if not isinstance(recommendation_type, str):
        return True
    mode = _normalize(recommendation_type)
    if mode in SINGLE_PRODUCT_TYPES:
        return True
    return mode not in MULTIPLE_PRODUCT_TYPES


def _clean_selection(values: Any) -> list[str]:
    """Normalised, non-blank string entries; anything else counts as no selection."""
    if isinstance(values, str) or not isinstance(values, Iterable):
        return []
    cleaned = []
    for value in values:
        if isinstance(value, str) and value.strip():
            cleaned.append(_normalize(value))
    return cleaned


def _lookup(criteria: Mapping[str, Any], field: str, default: Any) -> Any:
    for key in _CRITERIA_KEYS[field]:
        if key in criteria:
            return criteria[key]
    return default


def _coerce_criteria(criteria: Any) -> tuple[list[str], list[str], Any]:
    if isinstance(criteria, SelectionCriteria):
        return (
            _clean_selection(criteria.selected_preferences),
            _clean_selection(criteria.selected_features),
            criteria.recommendation_type,
        )
    if isinstance(criteria, Mapping):
        return (
            _clean_selection(_lookup(criteria, "selected_preferences", [])),
            _clean_selection(_lookup(criteria, "selected_features", [])),
            _lookup(criteria, "recommendation_type", SINGLE_PRODUCT),
        )
    return [], [], SINGLE_PRODUCT


def _coerce_catalog(catalog: Any) -> list[Product]:
    if isinstance(catalog, (str, bytes, Mapping)) or not isinstance(catalog, Iterable):
        return []
    products: list[Product] = []
    for entry in catalog:
        # Model instances are re-validated from their raw field values too.
        data = dict(entry) if isinstance(entry, BaseModel) else entry
        try:
            products.append(Product.model_validate(data))
        except ValidationError:
            logger.warning("Skipping malformed catalog entry: %r", entry)
    return products


def _matches(item: str, selected: list[str]) -> bool:
    """Symmetric substring test against already-normalised selections."""
    candidate = _normalize(item)
    if not candidate:
        return False
    return any(sel in candidate or candidate in sel for sel in selected)


def matched_entries(items: list[str], selected: list[str]) -> list[str]:
    """Product-side entries that match at least one selection, each once."""
    if not selected:
        return []
    return [item for item in items if _matches(item, selected)]


def score_product(
    product: Product,
    selected_preferences: list[str],
    selected_features: list[str],
) -> ScoredProduct:
    """Score one product against normalised selections, without touching it."""
    prefs = matched_entries(product.preferences, selected_preferences)
    feats = matched_entries(product.features, selected_features)
    return ScoredProduct.model_validate({
        **product.model_dump(),
        "score": len(prefs) + len(feats),
        "matched_preferences": prefs,
        "matched_features": feats,
    })


def get_recommendations(
    criteria: SelectionCriteria | Mapping[str, Any] | None = None,
    catalog: Iterable[Product | Mapping[str, Any]] | None = None,
) -> list[ScoredProduct]:
    """
    Rank *catalog* against the user's selections.

    Each product scores one point per preference and per feature of its own
    that matches any selection (case-insensitive, either string containing
    the other). Zero-score products are dropped; the rest are ordered by
    score, then id, both descending. Single mode keeps only the first.

    Never raises: missing or malformed inputs are treated as empty.
    """
    selected_preferences, selected_features, recommendation_type = _coerce_criteria(criteria)
    products = _coerce_catalog(catalog)

    if not products or not (selected_preferences or selected_features):
        return []

    scored = [
        score_product(p, selected_preferences, selected_features) for p in products
    ]
    ranked = sorted(
        (s for s in scored if s.score > 0),
        key=lambda s: (s.score, s.id),
        reverse=True,
    )

    if is_single_mode(recommendation_type):
        return ranked[:1]
    return ranked
