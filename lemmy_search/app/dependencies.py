from __future__ import annotations

from functools import lru_cache
from typing import AsyncIterator

import httpx

from lemmy_search.app.settings import settings
from lemmy_search.client.search_api import SearchAPIConfig
from lemmy_search.render.results import ResultRenderer


@lru_cache
def get_search_api_config() -> SearchAPIConfig:
    return SearchAPIConfig(
        base_url=settings.search_api_url,
        timeout=settings.api_timeout,
        max_bytes=settings.api_max_bytes,
    )


@lru_cache
def get_default_renderer() -> ResultRenderer:
    return build_renderer(settings.preferred_instance)


def build_renderer(preferred_instance: str) -> ResultRenderer:
    return ResultRenderer(
        preferred_instance=preferred_instance,
        budget=settings.snippet_budget,
        escape_terms=settings.escape_query_terms,
    )


def reset_dependency_cache() -> None:
    get_search_api_config.cache_clear()
    get_default_renderer.cache_clear()


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Yield an upstream client that lives for one request."""
    async with httpx.AsyncClient(timeout=settings.api_timeout) as client:
        yield client
