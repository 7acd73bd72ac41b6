from __future__ import annotations

import json
from typing import AsyncIterator

import httpx
import pytest

from lemmy_search.app.dependencies import get_http_client, reset_dependency_cache
from lemmy_search.app.main import app
from lemmy_search.tests.payloads import instances_payload, search_payload

pytestmark = pytest.mark.anyio


def _backend_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/instances":
        payload: object = instances_payload()
    elif request.url.path == "/search":
        payload = search_payload()
    else:
        return httpx.Response(404)
    return httpx.Response(
        200,
        headers={"Content-Type": "application/json"},
        content=json.dumps(payload).encode("utf-8"),
    )


def _override_backend(handler) -> None:
    async def override() -> AsyncIterator[httpx.AsyncClient]:
        transport = httpx.MockTransport(handler)
        async with httpx.AsyncClient(transport=transport) as client:
            yield client

    app.dependency_overrides[get_http_client] = override


def get_client() -> httpx.AsyncClient:
    reset_dependency_cache()
    transport = httpx.ASGITransport(app=app)
    return httpx.AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture(autouse=True)
def clear_overrides():
    yield
    app.dependency_overrides.clear()


async def test_health_endpoint() -> None:
    async with get_client() as client:
        response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["X-Request-ID"]


async def test_results_without_query_redirects_home() -> None:
    _override_backend(_backend_handler)
    async with get_client() as client:
        response = await client.get("/results")
    assert response.status_code == 303
    assert response.headers["location"] == "/"


async def test_results_page_renders_highlighted_posts() -> None:
    _override_backend(_backend_handler)
    async with get_client() as client:
        response = await client.get("/results", params={"query": "cat"})
    assert response.status_code == 200
    html = response.text
    assert '<span class="search-term">cat</span>' in html
    assert 'href="https://lemmy.world/post/42"' in html
    assert "Lemmy ML" in html


async def test_results_page_honours_preferred_instance() -> None:
    _override_backend(_backend_handler)
    async with get_client() as client:
        response = await client.get(
            "/results", params={"query": "cat", "preferred_instance": "lemmy.ml"}
        )
    assert response.status_code == 200
    assert 'href="https://lemmy.ml/u/alice"' in response.text


async def test_results_backend_failure_returns_502() -> None:
    _override_backend(lambda request: httpx.Response(503))
    async with get_client() as client:
        response = await client.get("/results", params={"query": "cat"})
    assert response.status_code == 502


async def test_highlight_with_terms() -> None:
    async with get_client() as client:
        response = await client.post(
            "/highlight", json={"body": "the cat sat", "query_terms": ["cat"]}
        )
    assert response.status_code == 200
    assert response.json() == {
        "segments": [
            {"text": "the ", "highlighted": False},
            {"text": "cat", "highlighted": True},
            {"text": " sat", "highlighted": False},
        ],
        "truncated": False,
    }


async def test_highlight_extracts_terms_from_query() -> None:
    async with get_client() as client:
        response = await client.post(
            "/highlight", json={"body": "Rust is fast, rust is safe", "query": "RUST is!"}
        )
    assert response.status_code == 200
    payload = response.json()
    assert {"text": "rust", "highlighted": True} in payload["segments"]
    assert {"text": "Rust", "highlighted": False} in payload["segments"]


async def test_highlight_requires_terms_or_query() -> None:
    async with get_client() as client:
        response = await client.post("/highlight", json={"body": "text"})
    assert response.status_code == 400


async def test_index_page() -> None:
    async with get_client() as client:
        response = await client.get("/")
    assert response.status_code == 200
    assert 'action="/results"' in response.text


async def test_metrics_endpoint() -> None:
    async with get_client() as client:
        await client.get("/health")
        response = await client.get("/metrics")
    assert response.status_code == 200
    assert "http_requests_total" in response.text


async def test_results_rejects_script_scheme_instance() -> None:
    _override_backend(_backend_handler)
    async with get_client() as client:
        response = await client.get(
            "/results",
            params={"query": "cat", "preferred_instance": "javascript://%0aalert(document.domain)"},
        )
    assert response.status_code == 400
    assert "javascript:" not in response.text


async def test_results_forwards_preferred_instance_to_backend() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return _backend_handler(request)

    _override_backend(handler)
    async with get_client() as client:
        response = await client.get(
            "/results", params={"query": "cat", "preferred_instance": "lemmy.ml"}
        )
    assert response.status_code == 200
    search_request = next(request for request in seen if request.url.path == "/search")
    assert search_request.url.params["preferred_instance"] == "lemmy.ml"
