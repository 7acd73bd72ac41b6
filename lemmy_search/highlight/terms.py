from __future__ import annotations

"""Query-term extraction matching the search backend's tokenizer."""

MIN_TERM_LENGTH = 3


def extract_query_terms(query: str) -> list[str]:
    """Return unique lowercase query terms in order of appearance."""
    cleaned = "".join(
        char if char.isalnum() or char.isspace() else " " for char in query.lower()
    )
    seen: set[str] = set()
    terms: list[str] = []
    for word in cleaned.split():
        if len(word) < MIN_TERM_LENGTH or word in seen:
            continue
        seen.add(word)
        terms.append(word)
    return terms
