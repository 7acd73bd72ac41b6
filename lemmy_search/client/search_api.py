from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping

import httpx
from pydantic import TypeAdapter, ValidationError

from lemmy_search.client.models import Instance, SearchResponse

logger = logging.getLogger(__name__)

_INSTANCE_LIST = TypeAdapter(list[Instance])


class SearchAPIError(RuntimeError):
    pass


@dataclass(frozen=True)
class SearchAPIConfig:
    base_url: str
    timeout: float
    max_bytes: int


async def fetch_search_results(
    config: SearchAPIConfig,
    params: Mapping[str, Any],
    client: httpx.AsyncClient | None = None,
) -> SearchResponse:
    data = await _get_json(config, "/search", params, client)
    try:
        return SearchResponse.model_validate(data)
    except ValidationError as exc:
        raise SearchAPIError("Invalid search response payload") from exc


async def fetch_instances(
    config: SearchAPIConfig, client: httpx.AsyncClient | None = None
) -> list[Instance]:
    data = await _get_json(config, "/instances", {}, client)
    try:
        return _INSTANCE_LIST.validate_python(data)
    except ValidationError as exc:
        raise SearchAPIError("Invalid instance list payload") from exc


async def _get_json(
    config: SearchAPIConfig,
    path: str,
    params: Mapping[str, Any],
    client: httpx.AsyncClient | None,
) -> Any:
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=config.timeout)
    url = _join_url(config.base_url, path)
    try:
        response = await client.get(url, params=dict(params))
        response.raise_for_status()
        content = response.content
        if config.max_bytes and len(content) > config.max_bytes:
            raise SearchAPIError("Search API response exceeds maximum size limit")
    except httpx.HTTPError as exc:
        logger.warning("search_api_request_failed", extra={"path": path, "detail": type(exc).__name__})
        raise SearchAPIError(str(exc)) from exc
    finally:
        if owns_client and client is not None:
            await client.aclose()
    try:
        return json.loads(content.decode("utf-8", errors="ignore"))
    except json.JSONDecodeError as exc:
        raise SearchAPIError("Failed to parse JSON response") from exc


def _join_url(base_url: str, path: str) -> str:
    return base_url.rstrip("/") + path


async def fetch_results_page(
    config: SearchAPIConfig,
    params: Mapping[str, Any],
    client: httpx.AsyncClient | None = None,
) -> tuple[SearchResponse, list[Instance]]:
    """Fetch search results and the instance list concurrently."""
    search_task = asyncio.ensure_future(fetch_search_results(config, params, client=client))
    instances_task = asyncio.ensure_future(fetch_instances(config, client=client))
    try:
        response, instances = await asyncio.gather(search_task, instances_task)
    except BaseException:
        search_task.cancel()
        instances_task.cancel()
        await asyncio.gather(search_task, instances_task, return_exceptions=True)
        raise
    return response, instances
