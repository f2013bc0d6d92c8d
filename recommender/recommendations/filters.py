from __future__ import annotations

from typing import Any, Callable

from .models import RecommendationItem, ResultFilters

_SORT_KEYS: dict[str, Callable[[RecommendationItem], Any]] = {
    "ranking": lambda item: item.ranking,
    "score": lambda item: item.score,
    "name": lambda item: item.product.name.lower(),
    "category": lambda item: item.product.category.lower(),
}


def _matches_search(item: RecommendationItem, term: str) -> bool:
    description = item.product.description or ""
    return term in item.product.name.lower() or term in description.lower()


def apply_filters(
    items: list[RecommendationItem],
    filters: ResultFilters | None = None,
) -> list[RecommendationItem]:
    """Narrow and re-sort recommendation items for display.

    The input list is left untouched. Sorting is stable, so items with equal
    sort keys keep their engine order.
    """
    if not items:
        return []
    if filters is None:
        return list(items)

    filtered = list(items)

    term = filters.search.strip().lower()
    if term:
        filtered = [i for i in filtered if _matches_search(i, term)]

    if filters.category:
        filtered = [i for i in filtered if i.product.category == filters.category]

    if filters.min_score > 0:
        filtered = [i for i in filtered if i.score >= filters.min_score]

    return sorted(
        filtered,
        key=_SORT_KEYS[filters.sort_by],
        reverse=filters.sort_order == "desc",
    )
