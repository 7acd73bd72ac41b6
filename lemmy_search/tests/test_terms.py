from __future__ import annotations

from lemmy_search.highlight.terms import extract_query_terms


def test_extract_query_terms_normalizes_and_filters() -> None:
    assert extract_query_terms("The C++ guide, to RUST!") == ["the", "guide", "rust"]


def test_extract_query_terms_deduplicates_in_order() -> None:
    assert extract_query_terms("cats dogs Cats birds dogs") == ["cats", "dogs", "birds"]


def test_extract_query_terms_empty() -> None:
    assert extract_query_terms("  ?! a b  ") == []
