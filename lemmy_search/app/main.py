from __future__ import annotations

"""FastAPI application entrypoint for the search results front end."""

import logging
import uuid

import httpx
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from lemmy_search.app.dependencies import (
    build_renderer,
    get_default_renderer,
    get_http_client,
    get_search_api_config,
)
from lemmy_search.app.metrics import (
    metrics_middleware,
    metrics_response,
    record_truncated_snippets,
)
from lemmy_search.app.schemas import HighlightRequest, HighlightResponse, SegmentModel
from lemmy_search.app.settings import settings
from lemmy_search.client.search_api import SearchAPIError, fetch_results_page
from lemmy_search.highlight.snippet import TermPatternError, highlight_snippet
from lemmy_search.highlight.terms import extract_query_terms
from lemmy_search.render.results import ResultRenderer, render_index

logger = logging.getLogger(__name__)

app = FastAPI(title="Lemmy Search Results", version="0.1.0")


def _configure_logging() -> None:
    """Configure root logging using environment settings."""
    level_name = settings.log_level.strip().upper()
    level = getattr(logging, level_name, logging.INFO)
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )
    logger.setLevel(level)


_configure_logging()


def _safe_error_message(exc: Exception) -> str:
    """Return a safe error type name for logs and responses."""
    return type(exc).__name__


def _resolve_renderer(preferred_instance: str | None) -> ResultRenderer:
    """Use the configured renderer unless the page asks for another instance."""
    if not preferred_instance or not preferred_instance.strip():
        return get_default_renderer()
    try:
        return build_renderer(preferred_instance)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Invalid preferred instance") from exc


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Attach or create a request ID for traceability."""
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


@app.middleware("http")
async def record_metrics(request: Request, call_next):
    """Capture request metrics before returning the response."""
    return await metrics_middleware(request, call_next)


@app.get("/metrics")
async def metrics():
    """Expose Prometheus-style metrics."""
    return metrics_response()


@app.get("/health")
async def health() -> dict[str, str]:
    """Simple health probe for uptime checks."""
    return {"status": "ok"}


@app.get("/", response_class=HTMLResponse)
async def index() -> HTMLResponse:
    """Serve the landing page with the search form."""
    return HTMLResponse(render_index())


@app.get("/results", response_class=HTMLResponse, response_model=None)
async def results(
    request: Request,
    client: httpx.AsyncClient = Depends(get_http_client),
) -> HTMLResponse | RedirectResponse:
    """Fetch search results and instances, then render the results page."""
    params = dict(request.query_params)
    if "query" not in params:
        return RedirectResponse("/", status_code=303)
    request_id = getattr(request.state, "request_id", str(uuid.uuid4()))
    renderer = _resolve_renderer(params.get("preferred_instance"))
    config = get_search_api_config()
    try:
        response, instances = await fetch_results_page(config, params, client=client)
    except SearchAPIError as exc:
        logger.error(
            "search_fetch_failed",
            extra={"request_id": request_id, "detail": _safe_error_message(exc)},
        )
        raise HTTPException(status_code=502, detail="Search backend unavailable") from exc
    view = renderer.build_view(response)
    record_truncated_snippets(view.truncated_count)
    html = renderer.render_view(view, instances, query=params.get("query", ""))
    return HTMLResponse(html)


@app.post("/highlight", response_model=HighlightResponse)
async def highlight(request: HighlightRequest) -> HighlightResponse:
    """Highlight query terms inside a single post body."""
    if request.query_terms is not None:
        terms = request.query_terms
    elif request.query is not None:
        terms = extract_query_terms(request.query)
    else:
        raise HTTPException(status_code=400, detail="query_terms or query required")
    try:
        snippet = highlight_snippet(
            request.body,
            terms,
            budget=settings.snippet_budget,
            escape_terms=settings.escape_query_terms,
        )
    except TermPatternError as exc:
        raise HTTPException(status_code=400, detail="Invalid query terms") from exc
    record_truncated_snippets(1 if snippet.truncated else 0)
    return HighlightResponse(
        segments=[
            SegmentModel(text=segment.text, highlighted=segment.highlighted)
            for segment in snippet.segments
        ],
        truncated=snippet.truncated,
    )
