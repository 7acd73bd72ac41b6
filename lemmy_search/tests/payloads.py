from __future__ import annotations

"""Sample backend payloads shared by tests."""

from typing import Any


def search_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "original_query_terms": ["cat"],
        "posts": [
            {
                "name": "Cats of the fediverse",
                "url": "https://img.example/cat.png",
                "body": "the cat sat",
                "remote_id": 42,
                "author": {
                    "name": "alice",
                    "display_name": "Alice",
                    "avatar": "https://img.example/alice.webp",
                },
                "community": {
                    "name": "cats",
                    "title": "Cats",
                    "icon": "https://img.example/icon.html",
                },
            },
            {
                "name": "Link only",
                "url": "https://example.com/article",
                "body": None,
                "remote_id": 43,
                "author": {"name": "bob"},
                "community": {"name": "news"},
            },
        ],
        "total_results": 2,
        "total_pages": 1,
        "time_taken": {"secs": 1, "nanos": 234_000_000},
    }
    payload.update(overrides)
    return payload


def instances_payload() -> list[dict[str, Any]]:
    return [
        {"site": {"actor_id": "https://lemmy.world/", "name": "Lemmy World"}},
        {"site": {"actor_id": "https://lemmy.ml/", "name": "Lemmy ML"}},
    ]
