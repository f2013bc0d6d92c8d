from __future__ import annotations

import logging
import time

from ..analytics.store import record_search
from ..catalog.models import Product
from .filters import apply_filters
from .matching import get_recommendations, is_single_mode
from .models import (
    RecommendationItem,
    RecommendationRequest,
    RecommendationResponse,
    SelectionCriteria,
)
from .stats import compute_stats

logger = logging.getLogger(__name__)


def recommend(
    request: RecommendationRequest,
    catalog: list[Product],
) -> RecommendationResponse:
    start_time = time.time()

    criteria = SelectionCriteria(
        selected_preferences=request.selected_preferences,
        selected_features=request.selected_features,
        recommendation_type=request.recommendation_type,
    )
    ranked = get_recommendations(criteria, catalog)

    # --- Ranking follows engine order, before any display filters ---
    items = [
        RecommendationItem(
            product=Product.model_validate(
                scored.model_dump(include=set(Product.model_fields)),
            ),
            score=scored.score,
            ranking=position,
            matched_preferences=scored.matched_preferences,
            matched_features=scored.matched_features,
        )
        for position, scored in enumerate(ranked, start=1)
    ]

    stats = compute_stats(ranked, total_products=len(catalog))
    visible = apply_filters(items, request.filters)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    single_mode = is_single_mode(request.recommendation_type)
    record_search(
        request.selected_preferences,
        request.selected_features,
        single_mode=single_mode,
        results_returned=len(visible),
        response_time_ms=elapsed_ms,
    )
    logger.info(
        "Recommended %d of %d products (%s mode, %d after filters) in %.1f ms",
        len(ranked), len(catalog), "single" if single_mode else "multiple",
        len(visible), elapsed_ms,
    )

    return RecommendationResponse(
        recommendations=visible,
        total=len(visible),
        criteria=criteria,
        stats=stats,
    )
