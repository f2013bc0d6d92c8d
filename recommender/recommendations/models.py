from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from ..catalog.models import Product

SINGLE_PRODUCT = "SingleProduct"
MULTIPLE_PRODUCTS = "MultipleProducts"


class SelectionCriteria(BaseModel):
    selected_preferences: list[str] = Field(default_factory=list)
    selected_features: list[str] = Field(default_factory=list)
    recommendation_type: str | None = Field(
        default=SINGLE_PRODUCT,
        description='"SingleProduct" / "Produto Único" or "MultipleProducts" / "Múltiplos Produtos"',
    )


class ResultFilters(BaseModel):
    search: str = Field(default="", description="Substring of product name or description")
    category: str = ""
    min_score: int = Field(default=0, ge=0)
    sort_by: Literal["ranking", "score", "name", "category"] = "ranking"
    sort_order: Literal["asc", "desc"] = "asc"


class RecommendationRequest(SelectionCriteria):
    filters: ResultFilters = Field(default_factory=ResultFilters)


class ScoredProduct(Product):
    score: int = Field(..., ge=0)
    matched_preferences: list[str] = Field(default_factory=list)
    matched_features: list[str] = Field(default_factory=list)


class RecommendationItem(BaseModel):
    product: Product
    score: int
    ranking: int = Field(..., ge=1, description="1-based position in engine order")
    matched_preferences: list[str] = Field(default_factory=list)
    matched_features: list[str] = Field(default_factory=list)


class RecommendationStats(BaseModel):
    total_recommendations: int
    average_score: float
    categories: list[str]
    unique_categories: int
    match_rate: int = Field(..., description="Percent of the catalog recommended")


class RecommendationResponse(BaseModel):
    recommendations: list[RecommendationItem]
    total: int
    criteria: SelectionCriteria
    stats: RecommendationStats
