from __future__ import annotations

from .models import RecommendationStats, ScoredProduct


def compute_stats(
    recommendations: list[ScoredProduct],
    total_products: int,
) -> RecommendationStats:
    total = len(recommendations)
    average = sum(r.score for r in recommendations) / total if total else 0.0
    categories = list(dict.fromkeys(r.category for r in recommendations if r.category))

    return RecommendationStats(
        total_recommendations=total,
        average_score=round(average, 2),
        categories=categories,
        unique_categories=len(categories),
        match_rate=round(total / total_products * 100) if total_products > 0 else 0,
    )
