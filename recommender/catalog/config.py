from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_SEED_CATALOG = Path(__file__).resolve().parent / "data" / "products.json"


@dataclass(frozen=True)
class CatalogConfig:
    """
    Where the seed catalog comes from and how form options are sampled.
    """

    catalog_path: Path = Path(os.getenv("CATALOG_PATH", str(_SEED_CATALOG)))
    sample_per_product: int = 2


DEFAULT_CATALOG_CONFIG = CatalogConfig()
