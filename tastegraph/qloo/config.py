from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class QlooConfig:
    api_key: str = os.getenv("QLOO_API_KEY", "")
    base_url: str = os.getenv("QLOO_API_URL", "https://hackathon.api.qloo.com")
    timeout: float = 10.0
    search_radius: int = 10
    recommendation_limit: int = 20
    insights_radius_m: int = 2000
    insights_take: int = 20
    cache_ttl: float = 300.0


DEFAULT_QLOO_CONFIG = QlooConfig()
