from __future__ import annotations

"""Shared pytest fixtures and test environment defaults."""

import os
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("LEMMY_SEARCH_API_URL", "http://backend")
os.environ.setdefault("LEMMY_PREFERRED_INSTANCE", "https://lemmy.world/")
os.environ["LEMMY_SNIPPET_BUDGET"] = "200"
os.environ["LEMMY_ESCAPE_QUERY_TERMS"] = "true"
os.environ.setdefault("LEMMY_METRICS_ENABLED", "true")

import pytest


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
