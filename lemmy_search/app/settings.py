from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    search_api_url: str = os.getenv("LEMMY_SEARCH_API_URL", "http://localhost:8000")
    preferred_instance: str = os.getenv("LEMMY_PREFERRED_INSTANCE", "https://lemmy.world/")
    api_timeout: float = float(os.getenv("LEMMY_API_TIMEOUT", "15"))
    api_max_bytes: int = int(os.getenv("LEMMY_API_MAX_BYTES", "5242880"))
    snippet_budget_raw: str = os.getenv("LEMMY_SNIPPET_BUDGET", "200")
    escape_query_terms_raw: str = os.getenv("LEMMY_ESCAPE_QUERY_TERMS", "true")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    metrics_enabled_raw: str = os.getenv("LEMMY_METRICS_ENABLED", "true")

    @property
    def snippet_budget(self) -> int:
        raw = os.getenv("LEMMY_SNIPPET_BUDGET", self.snippet_budget_raw).strip()
        try:
            return max(0, int(raw))
        except ValueError:
            return 200

    @property
    def escape_query_terms(self) -> bool:
        raw = os.getenv("LEMMY_ESCAPE_QUERY_TERMS", self.escape_query_terms_raw)
        return raw.strip().lower() in {"1", "true", "yes"}

    @property
    def metrics_enabled(self) -> bool:
        raw = os.getenv("LEMMY_METRICS_ENABLED", self.metrics_enabled_raw)
        return raw.strip().lower() in {"1", "true", "yes"}


settings = Settings()
