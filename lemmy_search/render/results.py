from __future__ import annotations

"""HTML rendering of search result pages."""

import logging
import math
import re
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import urlsplit

from jinja2 import Environment, FileSystemLoader, select_autoescape

from lemmy_search.client.models import Instance, Post, SearchResponse
from lemmy_search.highlight.snippet import SNIPPET_BUDGET, highlight_snippet
from lemmy_search.highlight.types import SnippetResult

logger = logging.getLogger(__name__)

TEMPLATES = Path(__file__).resolve().parent / "templates"
_env = Environment(loader=FileSystemLoader(str(TEMPLATES)), autoescape=select_autoescape())

_IMAGE_RE = re.compile(r"\.(jpg|jpeg|png|webp|avif|gif|svg)$")
_INSTANCE_SCHEMES = {"http", "https"}


def format_elapsed(secs: int, nanos: int) -> float:
    """Combine seconds and nanoseconds into seconds rounded to two places."""
    total = secs + nanos / 1_000_000_000
    return math.floor(total * 100 + 0.5) / 100


def is_image(url: str | None) -> bool:
    """Return True when the URL points at an image file."""
    if not url:
        return False
    return _IMAGE_RE.search(url) is not None


def normalize_instance_url(instance: str) -> str:
    """Turn ``lemmy.ml`` or ``https://lemmy.ml`` into ``https://lemmy.ml/``."""
    value = instance.strip()
    if not value:
        raise ValueError("Preferred instance must not be empty")
    if "://" not in value:
        value = f"https://{value}"
    parts = urlsplit(value)
    if parts.scheme.lower() not in _INSTANCE_SCHEMES or not parts.netloc:
        raise ValueError("Preferred instance must be an http(s) URL or host name")
    if not value.endswith("/"):
        value += "/"
    return value


@dataclass(frozen=True)
class PostView:
    """Render-ready fields for one search result."""
    title: str
    post_href: str
    image_url: str | None
    author_name: str
    author_href: str
    author_avatar: str | None
    community_name: str
    community_href: str
    community_icon: str | None
    snippet: SnippetResult | None


@dataclass(frozen=True)
class ResultsView:
    summary: str
    posts: list[PostView] = field(default_factory=list)
    query_terms: list[str] = field(default_factory=list)

    @property
    def truncated_count(self) -> int:
        return sum(1 for post in self.posts if post.snippet and post.snippet.truncated)


@dataclass(frozen=True)
class InstanceOption:
    value: str
    label: str


class ResultRenderer:
    """Builds result pages with links pointing at one preferred instance."""

    def __init__(
        self,
        preferred_instance: str,
        budget: int = SNIPPET_BUDGET,
        escape_terms: bool = True,
    ) -> None:
        self.preferred_instance = normalize_instance_url(preferred_instance)
        self.budget = budget
        self.escape_terms = escape_terms

    def build_view(self, response: SearchResponse) -> ResultsView:
        elapsed = format_elapsed(response.time_taken.secs, response.time_taken.nanos)
        summary = f"Found {len(response.posts)} results in {elapsed} seconds"
        terms = list(response.original_query_terms)
        posts = [self._post_view(post, terms) for post in response.posts]
        return ResultsView(summary=summary, posts=posts, query_terms=terms)

    def render(
        self,
        response: SearchResponse,
        instances: list[Instance] | None = None,
        query: str = "",
    ) -> str:
        return self.render_view(self.build_view(response), instances, query)

    def render_view(
        self,
        view: ResultsView,
        instances: list[Instance] | None = None,
        query: str = "",
    ) -> str:
        options = [
            InstanceOption(value=instance.site.actor_id, label=instance.site.name)
            for instance in instances or []
        ]
        logger.info(
            "results_rendered",
            extra={
                "posts": len(view.posts),
                "terms": len(view.query_terms),
                "truncated_snippets": view.truncated_count,
            },
        )
        template = _env.get_template("results.html")
        return template.render(
            view=view,
            instances=options,
            query=query,
            preferred_instance=self.preferred_instance,
        )

    def _post_view(self, post: Post, terms: list[str]) -> PostView:
        base = self.preferred_instance
        snippet = None
        if post.body is not None:
            snippet = highlight_snippet(
                post.body,
                terms,
                budget=self.budget,
                escape_terms=self.escape_terms,
            )
        return PostView(
            title=post.name,
            post_href=f"{base}post/{post.remote_id}",
            image_url=post.url if is_image(post.url) else None,
            author_name=(
                post.author.display_name
                if post.author.display_name is not None
                else post.author.name
            ),
            author_href=f"{base}u/{post.author.name}",
            author_avatar=post.author.avatar if is_image(post.author.avatar) else None,
            community_name=(
                post.community.title
                if post.community.title is not None
                else post.community.name
            ),
            community_href=f"{base}c/{post.community.name}",
            community_icon=post.community.icon if is_image(post.community.icon) else None,
            snippet=snippet,
        )


def render_index() -> str:
    """Render the landing page with the search form."""
    return _env.get_template("index.html").render()
