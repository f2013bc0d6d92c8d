from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Query
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .catalog.config import DEFAULT_CATALOG_CONFIG
from .catalog.data_store import get_catalog, set_catalog
from .catalog.models import Product, ProductCreate, ProductUpdate
from .catalog.options import collect_options
from .catalog.store import (
    ProductNotFoundError,
    create_product,
    delete_product,
    find_product,
    update_product,
)
from .config import DEFAULT_APP_CONFIG
from .recommendations.models import RecommendationRequest, RecommendationResponse
from .recommendations.service import recommend

logging.getLogger("recommender").setLevel(DEFAULT_APP_CONFIG.log_level)

app = FastAPI(title=DEFAULT_APP_CONFIG.title, version=DEFAULT_APP_CONFIG.version)
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(DEFAULT_APP_CONFIG.cors_origins),
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Product not found")


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata(
    per_product: int | None = Query(
        default=None, ge=1, description="Sample this many options per product",
    ),
    sample: bool = False,
) -> dict[str, list[str]]:
    if sample and per_product is None:
        per_product = DEFAULT_CATALOG_CONFIG.sample_per_product
    return collect_options(get_catalog(), per_product=per_product)


# ── Catalog endpoints ────────────────────────────────────────────────────


@app.get("/products", response_model=list[Product])
def list_products() -> list[Product]:
    return get_catalog()


@app.get("/products/{product_id}", response_model=Product)
def read_product(product_id: int) -> Product:
    try:
        return find_product(get_catalog(), product_id)
    except ProductNotFoundError as exc:
        raise _not_found() from exc


@app.post("/products", response_model=Product, status_code=201)
def add_product(body: ProductCreate) -> Product:
    catalog, product = create_product(get_catalog(), body)
    set_catalog(catalog)
    return product


@app.put("/products/{product_id}", response_model=Product)
def edit_product(product_id: int, body: ProductUpdate) -> Product:
    try:
        catalog, product = update_product(get_catalog(), product_id, body)
    except ProductNotFoundError as exc:
        raise _not_found() from exc
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc
    set_catalog(catalog)
    return product


@app.delete("/products/{product_id}", response_model=Product)
def remove_product(product_id: int) -> Product:
    try:
        catalog, product = delete_product(get_catalog(), product_id)
    except ProductNotFoundError as exc:
        raise _not_found() from exc
    set_catalog(catalog)
    return product


# ── Recommendation endpoints ─────────────────────────────────────────────


@app.post("/recommendations", response_model=RecommendationResponse)
def recommendations(body: RecommendationRequest) -> RecommendationResponse:
    return recommend(body, get_catalog())


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())
