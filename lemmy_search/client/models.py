from __future__ import annotations

"""Payload models returned by the search backend."""

from pydantic import BaseModel, Field


class TimeTaken(BaseModel):
    secs: int = Field(default=0, ge=0)
    nanos: int = Field(default=0, ge=0, le=999_999_999)


class PostAuthor(BaseModel):
    name: str
    display_name: str | None = None
    avatar: str | None = None


class PostCommunity(BaseModel):
    name: str
    title: str | None = None
    icon: str | None = None


class Post(BaseModel):
    name: str
    url: str | None = None
    body: str | None = None
    remote_id: int | str
    author: PostAuthor
    community: PostCommunity


class SearchResponse(BaseModel):
    original_query_terms: list[str] = Field(default_factory=list)
    posts: list[Post] = Field(default_factory=list)
    total_results: int = 0
    total_pages: int = 0
    time_taken: TimeTaken = Field(default_factory=TimeTaken)


class Site(BaseModel):
    actor_id: str
    name: str


class Instance(BaseModel):
    site: Site
