from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")


def _split_csv(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class AppConfig:
    title: str = "Product Recommendation API"
    version: str = "1.0.0"
    cors_origins: tuple[str, ...] = _split_csv(os.getenv("CORS_ORIGINS", "*"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    analytics_max_events: int = int(os.getenv("ANALYTICS_MAX_EVENTS", "1000"))


DEFAULT_APP_CONFIG = AppConfig()
