from __future__ import annotations

import random

from .models import Product


def _unique(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


def collect_options(
    catalog: list[Product],
    per_product: int | None = None,
    rng: random.Random | None = None,
) -> dict[str, list[str]]:
    """
    Build the preference, feature and category choices offered by the form.

    With ``per_product`` unset every distinct value is returned in catalog
    order. Otherwise up to ``per_product`` preferences and features are drawn
    at random from each product, then de-duplicated and shuffled, so each
    page load shows a different mix.
    """
    categories = _unique([p.category for p in catalog if p.category])

    if per_product is None:
        return {
            "preferences": _unique([x for p in catalog for x in p.preferences]),
            "features": _unique([x for p in catalog for x in p.features]),
            "categories": categories,
        }

    rng = rng or random.Random()

    def _sample(values: list[str]) -> list[str]:
        return rng.sample(values, min(per_product, len(values)))

    preferences = _unique([x for p in catalog for x in _sample(p.preferences)])
    features = _unique([x for p in catalog for x in _sample(p.features)])
    rng.shuffle(preferences)
    rng.shuffle(features)
    return {"preferences": preferences, "features": features, "categories": categories}
